"""Provider-agnostic database credential interface."""

from __future__ import annotations

import logging
from typing import Protocol

import pulumi

logger: logging.Logger = logging.getLogger(__name__)


class CredentialsOutputs:
    """Reference to the stored master credential."""

    def __init__(
        self,
        secret_arn: pulumi.Output[str],
        username: pulumi.Output[str],
        password: pulumi.Output[str],
    ) -> None:
        """Initialise credential outputs.

        Args:
            secret_arn: ARN of the secret holding ``username`` and ``password``.
            username: Master username.
            password: Generated master password, wrapped as a Pulumi secret.
        """
        self.secret_arn: pulumi.Output[str] = secret_arn
        self.username: pulumi.Output[str] = username
        self.password: pulumi.Output[str] = password


class PostgresCredentials(Protocol):
    @property
    def outputs(self) -> CredentialsOutputs: ...
