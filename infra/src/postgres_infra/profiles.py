"""Named environment profiles and the static sizing tables behind them."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

logger: logging.Logger = logging.getLogger(__name__)

DEFAULT_ENVIRONMENT = "dev"
PRODUCTION_ENVIRONMENT = "production"
DEFAULT_INSTANCE_CLASS = "db.t3.micro"

PROJECT_TAG = "PostgreSQL-Infrastructure"
MANAGED_BY_TAG = "Pulumi"


@dataclass(frozen=True)
class InstanceCapacity:
    """Sizing for the single-instance store."""

    instance_class: str
    allocated_storage: int


@dataclass(frozen=True)
class ClusterCapacity:
    """Serverless v2 sizing for the cluster store, in Aurora capacity units."""

    min_capacity: float
    max_capacity: float
    reader_count: int


@dataclass(frozen=True)
class EnvironmentProfile:
    """Resolved sizing, availability and retention settings for one environment."""

    name: str
    instance: InstanceCapacity
    cluster: ClusterCapacity
    high_availability: bool
    deletion_protection: bool
    backup_retention_days: int


INSTANCE_CLASSES: Mapping[str, str] = MappingProxyType(
    {
        "db.t3.micro": "db.t3.micro",
        "db.t3.small": "db.t3.small",
        "db.t3.medium": "db.t3.medium",
        "db.t3.large": "db.t3.large",
    }
)

PROFILES: Mapping[str, EnvironmentProfile] = MappingProxyType(
    {
        "dev": EnvironmentProfile(
            name="dev",
            instance=InstanceCapacity(instance_class="db.t3.micro", allocated_storage=20),
            cluster=ClusterCapacity(min_capacity=0.5, max_capacity=1.0, reader_count=0),
            high_availability=False,
            deletion_protection=False,
            backup_retention_days=7,
        ),
        "staging": EnvironmentProfile(
            name="staging",
            instance=InstanceCapacity(instance_class="db.t3.small", allocated_storage=50),
            cluster=ClusterCapacity(min_capacity=0.5, max_capacity=2.0, reader_count=0),
            high_availability=False,
            deletion_protection=False,
            backup_retention_days=14,
        ),
        "production": EnvironmentProfile(
            name="production",
            instance=InstanceCapacity(instance_class="db.t3.medium", allocated_storage=100),
            cluster=ClusterCapacity(min_capacity=1.0, max_capacity=4.0, reader_count=1),
            high_availability=True,
            deletion_protection=True,
            backup_retention_days=30,
        ),
    }
)


def resolve_profile(name: str) -> EnvironmentProfile:
    """Return the profile registered under ``name``.

    Unknown names resolve to the dev profile instead of raising.
    """
    profile = PROFILES.get(name)
    if profile is None:
        logger.warning(
            "unknown_environment",
            extra={"environment": name, "fallback": DEFAULT_ENVIRONMENT},
        )
        return PROFILES[DEFAULT_ENVIRONMENT]
    return profile


def resolve_instance_class(name: str) -> str:
    """Map a requested instance size onto an allowed class, defaulting to the smallest."""
    instance_class = INSTANCE_CLASSES.get(name)
    if instance_class is None:
        logger.warning(
            "unknown_instance_class",
            extra={"instance_class": name, "fallback": DEFAULT_INSTANCE_CLASS},
        )
        return INSTANCE_CLASSES[DEFAULT_INSTANCE_CLASS]
    return instance_class


def is_production(profile: EnvironmentProfile) -> bool:
    return profile.name == PRODUCTION_ENVIRONMENT


def resource_tags(environment: str) -> dict[str, str]:
    """Tags applied to every taggable resource in the stack."""
    return {
        "Environment": environment,
        "Project": PROJECT_TAG,
        "ManagedBy": MANAGED_BY_TAG,
    }
