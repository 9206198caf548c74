"""Provider-agnostic access boundary interface."""

from __future__ import annotations

import logging
from typing import Protocol

import pulumi

logger: logging.Logger = logging.getLogger(__name__)


class AccessBoundaryOutputs:
    """Security group IDs scoping the database and the bastion host."""

    def __init__(
        self,
        database_security_group_id: pulumi.Output[str],
        bastion_security_group_id: pulumi.Output[str],
    ) -> None:
        self.database_security_group_id: pulumi.Output[str] = database_security_group_id
        self.bastion_security_group_id: pulumi.Output[str] = bastion_security_group_id


class PostgresAccessBoundary(Protocol):
    @property
    def outputs(self) -> AccessBoundaryOutputs: ...
