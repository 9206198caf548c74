"""Provider-agnostic network component interface."""

from __future__ import annotations

import logging
from typing import Protocol

import pulumi

logger: logging.Logger = logging.getLogger(__name__)


class NetworkOutputs:
    """Resolved outputs from a provisioned network component."""

    def __init__(
        self,
        vpc_id: pulumi.Output[str],
        vpc_cidr_block: pulumi.Output[str],
        public_subnet_ids: list[pulumi.Output[str]],
        private_subnet_ids: list[pulumi.Output[str]],
        isolated_subnet_ids: list[pulumi.Output[str]],
        nat_gateway_count: int,
    ) -> None:
        """Initialise network outputs.

        Args:
            vpc_id: ID of the VPC.
            vpc_cidr_block: Address range of the VPC.
            public_subnet_ids: Subnets routed through the internet gateway.
            private_subnet_ids: Subnets with outbound access through NAT.
            isolated_subnet_ids: Subnets with no route to the internet.
            nat_gateway_count: Number of NAT gateways provisioned.
        """
        self.vpc_id: pulumi.Output[str] = vpc_id
        self.vpc_cidr_block: pulumi.Output[str] = vpc_cidr_block
        self.public_subnet_ids: list[pulumi.Output[str]] = public_subnet_ids
        self.private_subnet_ids: list[pulumi.Output[str]] = private_subnet_ids
        self.isolated_subnet_ids: list[pulumi.Output[str]] = isolated_subnet_ids
        self.nat_gateway_count: int = nat_gateway_count


class PostgresNetwork(Protocol):
    @property
    def outputs(self) -> NetworkOutputs: ...
