"""AWS VPC implementation of PostgresNetwork."""

from __future__ import annotations

import ipaddress
import logging

import pulumi
import pulumi_aws as aws

from postgres_infra.components.network import NetworkOutputs
from postgres_infra.profiles import EnvironmentProfile, is_production

logger: logging.Logger = logging.getLogger(__name__)

_SUBNET_PREFIX = 24
_TIERS = ("public", "private", "isolated")


class AwsNetworkArgs:
    """Arguments for the AWS network component.

    Args:
        profile: Resolved environment profile; decides the NAT gateway count.
        availability_zones: Exactly two availability zones.
        cidr_block: Address range of the VPC.
        tags: Tags applied to every taggable resource.
    """

    def __init__(
        self,
        profile: EnvironmentProfile,
        availability_zones: list[str],
        cidr_block: str = "10.0.0.0/16",
        tags: dict[str, str] | None = None,
    ) -> None:
        self.profile: EnvironmentProfile = profile
        self.availability_zones: list[str] = availability_zones
        self.cidr_block: str = cidr_block
        self.tags: dict[str, str] = dict(tags or {})


def _subnet_cidrs(cidr_block: str, count: int) -> list[str]:
    """Carve the first ``count`` /24 blocks out of ``cidr_block``, in order."""
    blocks = ipaddress.ip_network(cidr_block).subnets(new_prefix=_SUBNET_PREFIX)
    return [str(next(blocks)) for _ in range(count)]


class AwsNetwork(pulumi.ComponentResource):
    """AWS VPC with public, private and isolated subnet tiers across two AZs.

    Each tier gets one /24 per availability zone, allocated public first,
    then private, then isolated. Private subnets reach the internet through
    NAT gateways: two for production, one otherwise. Isolated subnets have
    route tables with no routes.
    """

    def __init__(
        self,
        name: str,
        args: AwsNetworkArgs,
        opts: pulumi.ResourceOptions | None = None,
    ) -> None:
        super().__init__("postgres:aws:Network", name, {}, opts)

        zones = args.availability_zones
        nat_gateway_count = 2 if is_production(args.profile) else 1

        logger.debug(
            "provisioning_aws_network",
            extra={
                "name": name,
                "availability_zones": zones,
                "nat_gateway_count": nat_gateway_count,
            },
        )

        def tagged(resource_name: str) -> dict[str, str]:
            return {**args.tags, "Name": resource_name}

        vpc = aws.ec2.Vpc(
            f"{name}-vpc",
            aws.ec2.VpcArgs(
                cidr_block=args.cidr_block,
                enable_dns_support=True,
                enable_dns_hostnames=True,
                tags=tagged(f"{name}-vpc"),
            ),
            opts=pulumi.ResourceOptions(parent=self),
        )

        cidrs = iter(_subnet_cidrs(args.cidr_block, len(_TIERS) * len(zones)))
        subnets: dict[str, list[aws.ec2.Subnet]] = {}
        for tier in _TIERS:
            subnets[tier] = [
                aws.ec2.Subnet(
                    f"{name}-{tier}-{zone[-1]}",
                    aws.ec2.SubnetArgs(
                        vpc_id=vpc.id,
                        cidr_block=next(cidrs),
                        availability_zone=zone,
                        map_public_ip_on_launch=tier == "public",
                        tags=tagged(f"{name}-{tier}-{zone[-1]}"),
                    ),
                    opts=pulumi.ResourceOptions(parent=self),
                )
                for zone in zones
            ]

        igw = aws.ec2.InternetGateway(
            f"{name}-igw",
            aws.ec2.InternetGatewayArgs(vpc_id=vpc.id, tags=tagged(f"{name}-igw")),
            opts=pulumi.ResourceOptions(parent=self),
        )

        pub_rt = aws.ec2.RouteTable(
            f"{name}-public-rt",
            aws.ec2.RouteTableArgs(
                vpc_id=vpc.id,
                routes=[
                    aws.ec2.RouteTableRouteArgs(
                        cidr_block="0.0.0.0/0",
                        gateway_id=igw.id,
                    )
                ],
                tags=tagged(f"{name}-public-rt"),
            ),
            opts=pulumi.ResourceOptions(parent=self),
        )

        for subnet, zone in zip(subnets["public"], zones):
            aws.ec2.RouteTableAssociation(
                f"{name}-public-rta-{zone[-1]}",
                aws.ec2.RouteTableAssociationArgs(subnet_id=subnet.id, route_table_id=pub_rt.id),
                opts=pulumi.ResourceOptions(parent=self),
            )

        nat_gateways: list[aws.ec2.NatGateway] = []
        for index in range(nat_gateway_count):
            zone = zones[index]
            eip = aws.ec2.Eip(
                f"{name}-nat-eip-{zone[-1]}",
                aws.ec2.EipArgs(domain="vpc", tags=tagged(f"{name}-nat-eip-{zone[-1]}")),
                opts=pulumi.ResourceOptions(parent=self),
            )
            nat_gateways.append(
                aws.ec2.NatGateway(
                    f"{name}-nat-{zone[-1]}",
                    aws.ec2.NatGatewayArgs(
                        subnet_id=subnets["public"][index].id,
                        allocation_id=eip.id,
                        tags=tagged(f"{name}-nat-{zone[-1]}"),
                    ),
                    opts=pulumi.ResourceOptions(parent=self, depends_on=[igw]),
                )
            )

        for index, (subnet, zone) in enumerate(zip(subnets["private"], zones)):
            nat = nat_gateways[index % nat_gateway_count]
            priv_rt = aws.ec2.RouteTable(
                f"{name}-private-rt-{zone[-1]}",
                aws.ec2.RouteTableArgs(
                    vpc_id=vpc.id,
                    routes=[
                        aws.ec2.RouteTableRouteArgs(
                            cidr_block="0.0.0.0/0",
                            nat_gateway_id=nat.id,
                        )
                    ],
                    tags=tagged(f"{name}-private-rt-{zone[-1]}"),
                ),
                opts=pulumi.ResourceOptions(parent=self),
            )
            aws.ec2.RouteTableAssociation(
                f"{name}-private-rta-{zone[-1]}",
                aws.ec2.RouteTableAssociationArgs(subnet_id=subnet.id, route_table_id=priv_rt.id),
                opts=pulumi.ResourceOptions(parent=self),
            )

        for subnet, zone in zip(subnets["isolated"], zones):
            iso_rt = aws.ec2.RouteTable(
                f"{name}-isolated-rt-{zone[-1]}",
                aws.ec2.RouteTableArgs(vpc_id=vpc.id, tags=tagged(f"{name}-isolated-rt-{zone[-1]}")),
                opts=pulumi.ResourceOptions(parent=self),
            )
            aws.ec2.RouteTableAssociation(
                f"{name}-isolated-rta-{zone[-1]}",
                aws.ec2.RouteTableAssociationArgs(subnet_id=subnet.id, route_table_id=iso_rt.id),
                opts=pulumi.ResourceOptions(parent=self),
            )

        self._outputs: NetworkOutputs = NetworkOutputs(
            vpc_id=vpc.id,
            vpc_cidr_block=vpc.cidr_block,
            public_subnet_ids=[s.id for s in subnets["public"]],
            private_subnet_ids=[s.id for s in subnets["private"]],
            isolated_subnet_ids=[s.id for s in subnets["isolated"]],
            nat_gateway_count=nat_gateway_count,
        )

        self.register_outputs(
            {
                "vpc_id": self._outputs.vpc_id,
                "vpc_cidr_block": self._outputs.vpc_cidr_block,
                "public_subnet_ids": self._outputs.public_subnet_ids,
                "private_subnet_ids": self._outputs.private_subnet_ids,
                "isolated_subnet_ids": self._outputs.isolated_subnet_ids,
                "nat_gateway_count": self._outputs.nat_gateway_count,
            }
        )

    @property
    def outputs(self) -> NetworkOutputs:
        """Return the resolved network outputs."""
        return self._outputs
