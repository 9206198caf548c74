"""Provider-agnostic database component interface."""

from __future__ import annotations

import logging
from typing import Protocol

import pulumi

logger: logging.Logger = logging.getLogger(__name__)


class DatabaseOutputs:
    """Resolved connection outputs from a provisioned database component.

    ``reader_endpoint`` is only set by stores that expose a separate
    read-only endpoint.
    """

    def __init__(
        self,
        endpoint: pulumi.Output[str],
        port: pulumi.Output[int],
        reader_endpoint: pulumi.Output[str] | None = None,
    ) -> None:
        self.endpoint: pulumi.Output[str] = endpoint
        self.port: pulumi.Output[int] = port
        self.reader_endpoint: pulumi.Output[str] | None = reader_endpoint


class PostgresDatabase(Protocol):
    @property
    def outputs(self) -> DatabaseOutputs: ...
