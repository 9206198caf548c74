"""Named stack outputs derived from the provisioned components."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import pulumi

from postgres_infra.components.bastion import BastionOutputs
from postgres_infra.components.credentials import CredentialsOutputs
from postgres_infra.components.database import DatabaseOutputs
from postgres_infra.components.network import NetworkOutputs

logger: logging.Logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StackOutput:
    """One exported value and what it means."""

    value: pulumi.Output[Any]
    description: str


def project_outputs(
    environment: str,
    network: NetworkOutputs,
    database: DatabaseOutputs,
    credentials: CredentialsOutputs,
    bastion: BastionOutputs,
) -> dict[str, StackOutput]:
    """Name and describe the values downstream consumers read from the stack.

    ``DatabaseReadEndpoint`` is only present when the database exposes a
    reader endpoint.
    """
    outputs: dict[str, StackOutput] = {
        "DatabaseEndpoint": StackOutput(
            database.endpoint,
            f"PostgreSQL database endpoint for {environment}",
        ),
        "DatabasePort": StackOutput(
            database.port.apply(str),
            "PostgreSQL database port",
        ),
    }
    if database.reader_endpoint is not None:
        outputs["DatabaseReadEndpoint"] = StackOutput(
            database.reader_endpoint,
            f"PostgreSQL read-only endpoint for {environment}",
        )
    outputs.update(
        {
            "DatabaseSecretArn": StackOutput(
                credentials.secret_arn,
                "ARN of the secret containing database credentials",
            ),
            "VpcId": StackOutput(
                network.vpc_id,
                f"VPC ID where PostgreSQL is deployed for {environment}",
            ),
            "BastionHostId": StackOutput(
                bastion.instance_id,
                "Bastion host instance ID for database access",
            ),
            "BastionHostPublicIp": StackOutput(
                bastion.public_ip,
                "Bastion host public IP address",
            ),
            "Environment": StackOutput(
                pulumi.Output.from_input(environment),
                "Environment name",
            ),
        }
    )
    return outputs


def export_outputs(outputs: dict[str, StackOutput]) -> None:
    """Export every projected value as a Pulumi stack output."""
    for name, output in outputs.items():
        logger.debug(
            "stack_output_exported",
            extra={"output": name, "description": output.description},
        )
        pulumi.export(name, output.value)
