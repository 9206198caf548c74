"""Unit tests for the AWS RDS instance component using Pulumi mocks."""
from __future__ import annotations

import dataclasses

import pulumi
import pytest

from conftest import RecordingMocks, declare, prop
from postgres_infra.components.credentials import CredentialsOutputs
from postgres_infra.profiles import PROFILES, EnvironmentProfile, InstanceCapacity
from postgres_infra.providers.aws.database import AwsDatabaseArgs, AwsDatabaseInstance

RDS_INSTANCE = "aws:rds/instance:Instance"


def _credentials() -> CredentialsOutputs:
    return CredentialsOutputs(
        secret_arn=pulumi.Output.from_input("arn:aws:secretsmanager:us-west-2:123:secret:db"),
        username=pulumi.Output.from_input("postgres"),
        password=pulumi.Output.secret("hunter2"),
    )


def _args(profile: EnvironmentProfile) -> AwsDatabaseArgs:
    return AwsDatabaseArgs(
        profile=profile,
        subnet_ids=["subnet-iso-1", "subnet-iso-2"],
        security_group_id="sg-db",
        credentials=_credentials(),
    )


def _instance(mocks: RecordingMocks, name: str, profile: EnvironmentProfile) -> dict:
    declare(lambda: AwsDatabaseInstance(name, _args(profile)))
    return mocks.one(RDS_INSTANCE).inputs


@pytest.mark.parametrize("env", ["dev", "staging", "production"])
def test_instance_tracks_profile_retention_and_protection(mocks: RecordingMocks, env: str) -> None:
    profile = PROFILES[env]
    inputs = _instance(mocks, f"test-db-{env}", profile)
    assert prop(inputs, "deletion_protection") == profile.deletion_protection
    assert prop(inputs, "backup_retention_period") == profile.backup_retention_days
    assert prop(inputs, "delete_automated_backups") == (not profile.deletion_protection)
    assert prop(inputs, "storage_encrypted") is True


def test_staging_instance_sizing(mocks: RecordingMocks) -> None:
    inputs = _instance(mocks, "test-db2", PROFILES["staging"])
    assert prop(inputs, "engine") == "postgres"
    assert prop(inputs, "engine_version") == "15.4"
    assert prop(inputs, "instance_class") == "db.t3.small"
    assert prop(inputs, "allocated_storage") == 50
    assert prop(inputs, "multi_az") is False
    assert prop(inputs, "backup_retention_period") == 14


def test_production_instance_is_multi_az_and_keeps_final_snapshot(mocks: RecordingMocks) -> None:
    inputs = _instance(mocks, "test-db3", PROFILES["production"])
    assert prop(inputs, "multi_az") is True
    assert prop(inputs, "skip_final_snapshot") is False
    assert prop(inputs, "final_snapshot_identifier") == "test-db3-final"


def test_unknown_instance_class_falls_back_to_micro(mocks: RecordingMocks) -> None:
    profile = dataclasses.replace(
        PROFILES["dev"],
        instance=InstanceCapacity(instance_class="db.x9.huge", allocated_storage=20),
    )
    inputs = _instance(mocks, "test-db4", profile)
    assert prop(inputs, "instance_class") == "db.t3.micro"


def test_instance_is_private_and_wired_to_its_boundary(mocks: RecordingMocks) -> None:
    inputs = _instance(mocks, "test-db5", PROFILES["dev"])
    assert prop(inputs, "publicly_accessible") is False
    assert prop(inputs, "vpc_security_group_ids") == ["sg-db"]
    assert prop(inputs, "db_subnet_group_name") == "test-db5-subnets"
    assert prop(inputs, "parameter_group_name") == "test-db5-params"
    assert prop(inputs, "port") == 5432
    assert prop(inputs, "db_name") == "postgres"


def test_instance_has_enhanced_monitoring(mocks: RecordingMocks) -> None:
    inputs = _instance(mocks, "test-db6", PROFILES["dev"])
    assert prop(inputs, "monitoring_interval") == 60
    assert prop(inputs, "monitoring_role_arn").endswith("test-db6-monitoring-role")
    assert prop(inputs, "performance_insights_enabled") is True


def test_subnet_group_uses_given_subnets(mocks: RecordingMocks) -> None:
    declare(lambda: AwsDatabaseInstance("test-db7", _args(PROFILES["dev"])))
    group = mocks.one("aws:rds/subnetGroup:SubnetGroup")
    assert prop(group.inputs, "subnet_ids") == ["subnet-iso-1", "subnet-iso-2"]


def test_parameter_group_enables_statement_logging(mocks: RecordingMocks) -> None:
    declare(lambda: AwsDatabaseInstance("test-db8", _args(PROFILES["dev"])))
    group = mocks.one("aws:rds/parameterGroup:ParameterGroup")
    assert prop(group.inputs, "family") == "postgres15"
    params = {prop(p, "name"): prop(p, "value") for p in prop(group.inputs, "parameters")}
    assert params["shared_preload_libraries"] == "pg_stat_statements"
    assert params["log_statement"] == "all"
    assert params["log_min_duration_statement"] == "1000"


@pulumi.runtime.test
def test_database_port_is_5432() -> None:
    pulumi.runtime.set_mocks(RecordingMocks(), preview=False)
    db = AwsDatabaseInstance("test-db9", _args(PROFILES["dev"]))

    def assert_port(port: int) -> None:
        assert port == 5432

    return db.outputs.port.apply(assert_port)


@pulumi.runtime.test
def test_database_endpoint_is_set() -> None:
    pulumi.runtime.set_mocks(RecordingMocks(), preview=False)
    db = AwsDatabaseInstance("test-db10", _args(PROFILES["dev"]))
    assert db.outputs.reader_endpoint is None

    def assert_endpoint(endpoint: str) -> None:
        assert endpoint.startswith("test-db10-rds."), endpoint

    return db.outputs.endpoint.apply(assert_endpoint)
