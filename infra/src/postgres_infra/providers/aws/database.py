"""AWS RDS PostgreSQL instance implementation of PostgresDatabase."""

from __future__ import annotations

import logging

import pulumi
import pulumi_aws as aws

from postgres_infra.components.credentials import CredentialsOutputs
from postgres_infra.components.database import DatabaseOutputs
from postgres_infra.profiles import EnvironmentProfile, resolve_instance_class
from postgres_infra.providers.aws.monitoring import (
    MONITORING_INTERVAL_SECONDS,
    create_monitoring_role,
)
from postgres_infra.providers.aws.security import POSTGRES_PORT

logger: logging.Logger = logging.getLogger(__name__)

ENGINE_VERSION = "15.4"
DATABASE_NAME = "postgres"

# (name, value, apply_method)
LOGGING_PARAMETERS: list[tuple[str, str, str]] = [
    ("shared_preload_libraries", "pg_stat_statements", "pending-reboot"),
    ("log_statement", "all", "immediate"),
    ("log_min_duration_statement", "1000", "immediate"),
    ("log_checkpoints", "1", "immediate"),
    ("log_connections", "1", "immediate"),
    ("log_disconnections", "1", "immediate"),
]


class AwsDatabaseArgs:
    """Arguments shared by the AWS instance and cluster database components.

    Args:
        profile: Resolved environment profile supplying sizing and retention.
        subnet_ids: Isolated subnet IDs for the DB subnet group.
        security_group_id: Database security group.
        credentials: Master credential to attach to the store.
        tags: Tags applied to every taggable resource.
    """

    def __init__(
        self,
        profile: EnvironmentProfile,
        subnet_ids: list[pulumi.Input[str]],
        security_group_id: pulumi.Input[str],
        credentials: CredentialsOutputs,
        tags: dict[str, str] | None = None,
    ) -> None:
        self.profile: EnvironmentProfile = profile
        self.subnet_ids: list[pulumi.Input[str]] = subnet_ids
        self.security_group_id: pulumi.Input[str] = security_group_id
        self.credentials: CredentialsOutputs = credentials
        self.tags: dict[str, str] = dict(tags or {})


class AwsDatabaseInstance(pulumi.ComponentResource):
    """Single-instance RDS PostgreSQL component satisfying ``PostgresDatabase``.

    Provisions a DB subnet group over the isolated tier, a logging parameter
    group, an enhanced monitoring role and an encrypted RDS instance.
    Deletion protection and backup retention follow the profile; automated
    backups are kept on teardown only when deletion protection is on.
    """

    def __init__(
        self,
        name: str,
        args: AwsDatabaseArgs,
        opts: pulumi.ResourceOptions | None = None,
    ) -> None:
        """Initialise and provision the RDS instance component.

        Args:
            name: Logical Pulumi resource name.
            args: AWS-specific database arguments.
            opts: Optional Pulumi resource options.
        """
        super().__init__("postgres:aws:DatabaseInstance", name, {}, opts)

        profile = args.profile
        instance_class = resolve_instance_class(profile.instance.instance_class)

        logger.debug(
            "provisioning_aws_database_instance",
            extra={
                "name": name,
                "profile": profile.name,
                "instance_class": instance_class,
                "allocated_storage": profile.instance.allocated_storage,
                "multi_az": profile.high_availability,
            },
        )

        subnet_group = aws.rds.SubnetGroup(
            f"{name}-subnets",
            aws.rds.SubnetGroupArgs(
                description="Subnet group for PostgreSQL RDS instance",
                subnet_ids=args.subnet_ids,
                tags={**args.tags, "Name": f"{name}-subnets"},
            ),
            opts=pulumi.ResourceOptions(parent=self),
        )

        parameter_group = aws.rds.ParameterGroup(
            f"{name}-params",
            aws.rds.ParameterGroupArgs(
                family="postgres15",
                description=f"Parameter group for PostgreSQL {ENGINE_VERSION}",
                parameters=[
                    aws.rds.ParameterGroupParameterArgs(
                        name=param, value=value, apply_method=apply_method
                    )
                    for param, value, apply_method in LOGGING_PARAMETERS
                ],
                tags={**args.tags, "Name": f"{name}-params"},
            ),
            opts=pulumi.ResourceOptions(parent=self),
        )

        monitoring_role = create_monitoring_role(name, args.tags, parent=self)

        instance = aws.rds.Instance(
            f"{name}-rds",
            aws.rds.InstanceArgs(
                engine="postgres",
                engine_version=ENGINE_VERSION,
                instance_class=instance_class,
                allocated_storage=profile.instance.allocated_storage,
                storage_type="gp2",
                storage_encrypted=True,
                db_name=DATABASE_NAME,
                port=POSTGRES_PORT,
                username=args.credentials.username,
                password=args.credentials.password,
                db_subnet_group_name=subnet_group.name,
                vpc_security_group_ids=[args.security_group_id],
                parameter_group_name=parameter_group.name,
                multi_az=profile.high_availability,
                publicly_accessible=False,
                backup_retention_period=profile.backup_retention_days,
                deletion_protection=profile.deletion_protection,
                delete_automated_backups=not profile.deletion_protection,
                skip_final_snapshot=not profile.deletion_protection,
                final_snapshot_identifier=(
                    f"{name}-final" if profile.deletion_protection else None
                ),
                performance_insights_enabled=True,
                performance_insights_retention_period=7,
                monitoring_interval=MONITORING_INTERVAL_SECONDS,
                monitoring_role_arn=monitoring_role.arn,
                auto_minor_version_upgrade=True,
                allow_major_version_upgrade=False,
                tags={**args.tags, "Name": f"{name}-rds"},
            ),
            opts=pulumi.ResourceOptions(parent=self),
        )

        self._outputs: DatabaseOutputs = DatabaseOutputs(
            endpoint=instance.address,
            port=instance.port,
        )

        self.register_outputs(
            {
                "endpoint": self._outputs.endpoint,
                "port": self._outputs.port,
            }
        )

    @property
    def outputs(self) -> DatabaseOutputs:
        """Return the resolved database connection outputs."""
        return self._outputs
