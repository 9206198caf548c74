"""Pulumi stack entry point for the PostgreSQL infrastructure."""

from __future__ import annotations

import logging

import pulumi
import pulumi_aws as aws
import structlog

from postgres_infra.config import StackConfig, StoreVariant
from postgres_infra.outputs import StackOutput, export_outputs, project_outputs
from postgres_infra.profiles import resolve_profile, resource_tags
from postgres_infra.providers.aws.bastion import AwsBastionHost, AwsBastionHostArgs
from postgres_infra.providers.aws.cluster import AwsDatabaseCluster
from postgres_infra.providers.aws.credentials import AwsCredentials, AwsCredentialsArgs
from postgres_infra.providers.aws.database import AwsDatabaseArgs, AwsDatabaseInstance
from postgres_infra.providers.aws.network import AwsNetwork, AwsNetworkArgs
from postgres_infra.providers.aws.security import AwsAccessBoundary, AwsAccessBoundaryArgs

logger: logging.Logger = logging.getLogger(__name__)


class PostgresStack:
    """Derives the whole database topology from one environment name."""

    def __init__(self, config: StackConfig) -> None:
        """Initialise the stack with resolved configuration."""
        self._config: StackConfig = config

    def build(self) -> dict[str, StackOutput]:
        """Declare every resource and return the named stack outputs."""
        config = self._config
        environment = config.environment
        profile = resolve_profile(environment)
        tags = resource_tags(environment)
        prefix = f"postgres-{environment}"

        logger.info(
            "stack_build_started",
            extra={
                "environment": environment,
                "profile": profile.name,
                "variant": config.variant.value,
            },
        )

        provider = aws.Provider(f"{prefix}-aws", aws.ProviderArgs(region=config.region))
        opts = pulumi.ResourceOptions(providers=[provider])

        network = AwsNetwork(
            f"{prefix}-network",
            AwsNetworkArgs(
                profile=profile,
                availability_zones=config.availability_zones,
                cidr_block=config.vpc_cidr,
                tags=tags,
            ),
            opts=opts,
        )
        boundary = AwsAccessBoundary(
            f"{prefix}-access",
            AwsAccessBoundaryArgs(
                vpc_id=network.outputs.vpc_id,
                vpc_cidr_block=network.outputs.vpc_cidr_block,
                tags=tags,
            ),
            opts=opts,
        )
        credentials = AwsCredentials(
            f"{prefix}-credentials", AwsCredentialsArgs(tags=tags), opts=opts
        )

        database_args = AwsDatabaseArgs(
            profile=profile,
            subnet_ids=list(network.outputs.isolated_subnet_ids),
            security_group_id=boundary.outputs.database_security_group_id,
            credentials=credentials.outputs,
            tags=tags,
        )
        database: AwsDatabaseInstance | AwsDatabaseCluster
        if config.variant == StoreVariant.CLUSTER:
            database = AwsDatabaseCluster(f"{prefix}-db", database_args, opts=opts)
        else:
            database = AwsDatabaseInstance(f"{prefix}-db", database_args, opts=opts)

        bastion = AwsBastionHost(
            f"{prefix}-bastion",
            AwsBastionHostArgs(
                subnet_id=network.outputs.public_subnet_ids[0],
                security_group_id=boundary.outputs.bastion_security_group_id,
                ami=config.bastion_ami,
                tags=tags,
            ),
            opts=opts,
        )

        return project_outputs(
            environment,
            network=network.outputs,
            database=database.outputs,
            credentials=credentials.outputs,
            bastion=bastion.outputs,
        )

    def run(self) -> None:
        """Provision the full infrastructure stack."""
        outputs = self.build()
        export_outputs(outputs)
        logger.info(
            "stack_run_finished",
            extra={"environment": self._config.environment, "outputs": list(outputs)},
        )


if __name__ == "__main__":
    structlog.configure(wrapper_class=structlog.make_filtering_bound_logger(logging.INFO))
    PostgresStack(config=StackConfig.load()).run()
