"""Shared Pulumi mocks that record every registered resource."""
from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, TypeVar

import pulumi
import pytest
from pulumi.runtime import Mocks
from pulumi.runtime.rpc import unwrap_rpc_secret

T = TypeVar("T")


class RecordingMocks(Mocks):
    """Echo inputs back as outputs and keep every ``MockResourceArgs``."""

    def __init__(self) -> None:
        self.resources: list[pulumi.runtime.MockResourceArgs] = []

    def new_resource(
        self, args: pulumi.runtime.MockResourceArgs
    ) -> tuple[str, dict[str, object]]:
        self.resources.append(args)
        outputs: dict[str, object] = dict(args.inputs)
        outputs.setdefault("arn", f"arn:aws:mock:us-west-2:123456789012:{args.name}")
        outputs.setdefault("name", args.name)
        if args.typ == "aws:rds/instance:Instance":
            outputs["address"] = f"{args.name}.abc123.us-west-2.rds.amazonaws.com"
        if args.typ == "aws:rds/cluster:Cluster":
            outputs["endpoint"] = f"{args.name}.cluster-abc123.us-west-2.rds.amazonaws.com"
            reader = f"{args.name}.cluster-ro-abc123.us-west-2.rds.amazonaws.com"
            outputs["readerEndpoint"] = reader
            outputs["reader_endpoint"] = reader
        if args.typ == "aws:ec2/instance:Instance":
            outputs["publicIp"] = "203.0.113.10"
            outputs["public_ip"] = "203.0.113.10"
        if args.typ == "random:index/randomPassword:RandomPassword":
            outputs["result"] = "x" * 32
        return (f"{args.name}-id", outputs)

    def call(
        self, args: pulumi.runtime.MockCallArgs
    ) -> tuple[dict[str, object], list[tuple[str, str]]]:
        return ({}, [])

    def of_type(self, typ: str) -> list[pulumi.runtime.MockResourceArgs]:
        return [r for r in self.resources if r.typ == typ]

    def one(self, typ: str) -> pulumi.runtime.MockResourceArgs:
        matches = self.of_type(typ)
        assert len(matches) == 1, f"expected one {typ}, got {len(matches)}"
        return matches[0]


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def prop(inputs: Mapping[str, Any], name: str) -> Any:
    """Read a resource property by its Python name, whichever casing the SDK sent."""
    value = inputs[name] if name in inputs else inputs.get(_camel(name))
    return unwrap_rpc_secret(value)


def declare(program: Callable[[], T]) -> T:
    """Run ``program`` as a Pulumi program and wait until every resource is registered."""
    result: list[T] = []

    @pulumi.runtime.test
    def run() -> None:
        result.append(program())

    run()
    return result[0]


@pytest.fixture
def mocks() -> RecordingMocks:
    recorder = RecordingMocks()
    pulumi.runtime.set_mocks(recorder, preview=False)
    return recorder
