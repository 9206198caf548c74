"""Typed configuration loaded from environment variables at startup."""

from __future__ import annotations

import logging
from enum import StrEnum

from pydantic_settings import BaseSettings, SettingsConfigDict

logger: logging.Logger = logging.getLogger(__name__)

_AL2023_AMI_PARAMETER = (
    "resolve:ssm:/aws/service/ami-amazon-linux-latest/al2023-ami-kernel-default-x86_64"
)


class StoreVariant(StrEnum):
    """Shape of the PostgreSQL data store."""

    INSTANCE = "instance"
    CLUSTER = "cluster"


class StackConfig(BaseSettings):
    """Fully validated infrastructure stack configuration.

    All values are sourced from environment variables at startup.
    ``environment`` is free-form: names without a profile are resolved to
    the dev profile later rather than rejected here.
    """

    model_config = SettingsConfigDict(
        env_prefix="PGINFRA_",
        env_file=".env",
        env_file_encoding="utf-8",
    )

    environment: str = "dev"
    variant: StoreVariant = StoreVariant.INSTANCE
    region: str = "us-west-2"
    vpc_cidr: str = "10.0.0.0/16"
    bastion_ami: str = _AL2023_AMI_PARAMETER

    @property
    def availability_zones(self) -> list[str]:
        """The two availability zones the network spans."""
        return [f"{self.region}a", f"{self.region}b"]

    @classmethod
    def load(cls) -> StackConfig:
        """Load and validate configuration from the environment.

        Logs each resolved setting at DEBUG level.
        Raises ``pydantic.ValidationError`` on invalid values.
        """
        config = cls()
        logger.debug(
            "stack_config_loaded",
            extra={
                "environment": config.environment,
                "variant": config.variant.value,
                "region": config.region,
                "vpc_cidr": config.vpc_cidr,
            },
        )
        return config
