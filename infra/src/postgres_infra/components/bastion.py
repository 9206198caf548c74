"""Provider-agnostic bastion host interface."""

from __future__ import annotations

import logging
from typing import Protocol

import pulumi

logger: logging.Logger = logging.getLogger(__name__)


class BastionOutputs:
    """Resolved outputs from a provisioned bastion host."""

    def __init__(
        self,
        instance_id: pulumi.Output[str],
        public_ip: pulumi.Output[str],
    ) -> None:
        self.instance_id: pulumi.Output[str] = instance_id
        self.public_ip: pulumi.Output[str] = public_ip


class PostgresBastion(Protocol):
    """Provider-agnostic interface for the operator access host."""

    @property
    def outputs(self) -> BastionOutputs:
        """Return the resolved bastion outputs."""
        ...
