"""Verify that component Protocol interfaces are importable and well-typed."""
from __future__ import annotations

import pulumi

from postgres_infra.components.bastion import BastionOutputs, PostgresBastion
from postgres_infra.components.credentials import CredentialsOutputs, PostgresCredentials
from postgres_infra.components.database import DatabaseOutputs, PostgresDatabase
from postgres_infra.components.network import NetworkOutputs, PostgresNetwork
from postgres_infra.components.security import AccessBoundaryOutputs, PostgresAccessBoundary


def test_protocols_are_importable() -> None:
    for protocol in (
        PostgresBastion,
        PostgresCredentials,
        PostgresDatabase,
        PostgresNetwork,
        PostgresAccessBoundary,
    ):
        assert protocol is not None


def test_database_outputs_reader_endpoint_defaults_to_none() -> None:
    outputs = DatabaseOutputs(
        endpoint=pulumi.Output.from_input("db.example.com"),
        port=pulumi.Output.from_input(5432),
    )
    assert outputs.reader_endpoint is None


def test_database_outputs_accepts_reader_endpoint() -> None:
    outputs = DatabaseOutputs(
        endpoint=pulumi.Output.from_input("db.example.com"),
        port=pulumi.Output.from_input(5432),
        reader_endpoint=pulumi.Output.from_input("db-ro.example.com"),
    )
    assert outputs.reader_endpoint is not None


def test_network_outputs_constructible() -> None:
    outputs = NetworkOutputs(
        vpc_id=pulumi.Output.from_input("vpc-123"),
        vpc_cidr_block=pulumi.Output.from_input("10.0.0.0/16"),
        public_subnet_ids=[
            pulumi.Output.from_input("subnet-pub-1"),
            pulumi.Output.from_input("subnet-pub-2"),
        ],
        private_subnet_ids=[
            pulumi.Output.from_input("subnet-priv-1"),
            pulumi.Output.from_input("subnet-priv-2"),
        ],
        isolated_subnet_ids=[
            pulumi.Output.from_input("subnet-iso-1"),
            pulumi.Output.from_input("subnet-iso-2"),
        ],
        nat_gateway_count=1,
    )
    assert len(outputs.public_subnet_ids) == 2
    assert len(outputs.isolated_subnet_ids) == 2
    assert outputs.nat_gateway_count == 1


def test_access_boundary_outputs_constructible() -> None:
    outputs = AccessBoundaryOutputs(
        database_security_group_id=pulumi.Output.from_input("sg-db"),
        bastion_security_group_id=pulumi.Output.from_input("sg-bastion"),
    )
    assert outputs is not None


def test_credentials_and_bastion_outputs_constructible() -> None:
    credentials = CredentialsOutputs(
        secret_arn=pulumi.Output.from_input("arn:aws:secretsmanager:us-west-2:123456789:secret:db"),
        username=pulumi.Output.from_input("postgres"),
        password=pulumi.Output.secret("pw"),
    )
    bastion = BastionOutputs(
        instance_id=pulumi.Output.from_input("i-0abc"),
        public_ip=pulumi.Output.from_input("203.0.113.10"),
    )
    assert credentials is not None
    assert bastion is not None
