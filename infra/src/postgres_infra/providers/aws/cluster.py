"""AWS Aurora PostgreSQL Serverless v2 implementation of PostgresDatabase."""

from __future__ import annotations

import logging

import pulumi
import pulumi_aws as aws

from postgres_infra.components.database import DatabaseOutputs
from postgres_infra.profiles import is_production
from postgres_infra.providers.aws.database import (
    DATABASE_NAME,
    ENGINE_VERSION,
    LOGGING_PARAMETERS,
    AwsDatabaseArgs,
)
from postgres_infra.providers.aws.monitoring import (
    MONITORING_INTERVAL_SECONDS,
    create_monitoring_role,
)
from postgres_infra.providers.aws.security import POSTGRES_PORT

logger: logging.Logger = logging.getLogger(__name__)

CLUSTER_ENGINE = "aurora-postgresql"
SERVERLESS_INSTANCE_CLASS = "db.serverless"


class AwsDatabaseCluster(pulumi.ComponentResource):
    """Aurora Serverless v2 cluster component satisfying ``PostgresDatabase``.

    Provisions a DB subnet group over the isolated tier, a cluster parameter
    group, the encrypted cluster, one writer node and, for production only,
    ``profile.cluster.reader_count`` reader nodes.
    """

    def __init__(
        self,
        name: str,
        args: AwsDatabaseArgs,
        opts: pulumi.ResourceOptions | None = None,
    ) -> None:
        super().__init__("postgres:aws:DatabaseCluster", name, {}, opts)

        profile = args.profile
        reader_count = profile.cluster.reader_count if is_production(profile) else 0

        logger.debug(
            "provisioning_aws_database_cluster",
            extra={
                "name": name,
                "profile": profile.name,
                "min_capacity": profile.cluster.min_capacity,
                "max_capacity": profile.cluster.max_capacity,
                "reader_count": reader_count,
            },
        )

        subnet_group = aws.rds.SubnetGroup(
            f"{name}-subnets",
            aws.rds.SubnetGroupArgs(
                description="Subnet group for Aurora PostgreSQL cluster",
                subnet_ids=args.subnet_ids,
                tags={**args.tags, "Name": f"{name}-subnets"},
            ),
            opts=pulumi.ResourceOptions(parent=self),
        )

        parameter_group = aws.rds.ClusterParameterGroup(
            f"{name}-params",
            aws.rds.ClusterParameterGroupArgs(
                family="aurora-postgresql15",
                description=f"Cluster parameter group for Aurora PostgreSQL {ENGINE_VERSION}",
                parameters=[
                    aws.rds.ClusterParameterGroupParameterArgs(
                        name=param, value=value, apply_method=apply_method
                    )
                    for param, value, apply_method in LOGGING_PARAMETERS
                ],
                tags={**args.tags, "Name": f"{name}-params"},
            ),
            opts=pulumi.ResourceOptions(parent=self),
        )

        cluster = aws.rds.Cluster(
            f"{name}-cluster",
            aws.rds.ClusterArgs(
                engine=CLUSTER_ENGINE,
                engine_mode="provisioned",
                engine_version=ENGINE_VERSION,
                database_name=DATABASE_NAME,
                port=POSTGRES_PORT,
                master_username=args.credentials.username,
                master_password=args.credentials.password,
                db_subnet_group_name=subnet_group.name,
                vpc_security_group_ids=[args.security_group_id],
                db_cluster_parameter_group_name=parameter_group.name,
                serverlessv2_scaling_configuration=aws.rds.ClusterServerlessv2ScalingConfigurationArgs(
                    min_capacity=profile.cluster.min_capacity,
                    max_capacity=profile.cluster.max_capacity,
                ),
                storage_encrypted=True,
                backup_retention_period=profile.backup_retention_days,
                deletion_protection=profile.deletion_protection,
                delete_automated_backups=not profile.deletion_protection,
                skip_final_snapshot=not profile.deletion_protection,
                final_snapshot_identifier=(
                    f"{name}-final" if profile.deletion_protection else None
                ),
                tags={**args.tags, "Name": f"{name}-cluster"},
            ),
            opts=pulumi.ResourceOptions(parent=self),
        )

        monitoring_role = create_monitoring_role(name, args.tags, parent=self)

        def cluster_instance(role: str, promotion_tier: int) -> aws.rds.ClusterInstance:
            return aws.rds.ClusterInstance(
                f"{name}-{role}",
                aws.rds.ClusterInstanceArgs(
                    cluster_identifier=cluster.id,
                    engine=cluster.engine,
                    engine_version=cluster.engine_version,
                    instance_class=SERVERLESS_INSTANCE_CLASS,
                    promotion_tier=promotion_tier,
                    publicly_accessible=False,
                    performance_insights_enabled=True,
                    monitoring_interval=MONITORING_INTERVAL_SECONDS,
                    monitoring_role_arn=monitoring_role.arn,
                    auto_minor_version_upgrade=True,
                    tags={**args.tags, "Name": f"{name}-{role}"},
                ),
                opts=pulumi.ResourceOptions(parent=self),
            )

        self.writer: aws.rds.ClusterInstance = cluster_instance("writer", 0)
        self.readers: list[aws.rds.ClusterInstance] = [
            cluster_instance(f"reader-{index + 1}", 1) for index in range(reader_count)
        ]

        self._outputs: DatabaseOutputs = DatabaseOutputs(
            endpoint=cluster.endpoint,
            port=cluster.port,
            reader_endpoint=cluster.reader_endpoint,
        )

        self.register_outputs(
            {
                "endpoint": self._outputs.endpoint,
                "port": self._outputs.port,
                "reader_endpoint": self._outputs.reader_endpoint,
            }
        )

    @property
    def outputs(self) -> DatabaseOutputs:
        """Return the resolved database connection outputs."""
        return self._outputs
