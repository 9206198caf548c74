"""AWS security group implementation of PostgresAccessBoundary."""

from __future__ import annotations

import logging

import pulumi
import pulumi_aws as aws

from postgres_infra.components.security import AccessBoundaryOutputs

logger: logging.Logger = logging.getLogger(__name__)

POSTGRES_PORT = 5432
SSH_PORT = 22


class AwsAccessBoundaryArgs:
    """Arguments for the AWS access boundary component."""

    def __init__(
        self,
        vpc_id: pulumi.Input[str],
        vpc_cidr_block: pulumi.Input[str],
        tags: dict[str, str] | None = None,
    ) -> None:
        self.vpc_id: pulumi.Input[str] = vpc_id
        self.vpc_cidr_block: pulumi.Input[str] = vpc_cidr_block
        self.tags: dict[str, str] = dict(tags or {})


class AwsAccessBoundary(pulumi.ComponentResource):
    """Security groups for the database and the bastion host.

    The database group has no egress rules and only admits PostgreSQL
    traffic from the VPC range and from the bastion group. The bastion
    group admits SSH from anywhere and allows all egress.
    """

    def __init__(
        self,
        name: str,
        args: AwsAccessBoundaryArgs,
        opts: pulumi.ResourceOptions | None = None,
    ) -> None:
        super().__init__("postgres:aws:AccessBoundary", name, {}, opts)

        logger.debug("provisioning_aws_access_boundary", extra={"name": name})

        bastion_sg = aws.ec2.SecurityGroup(
            f"{name}-bastion-sg",
            aws.ec2.SecurityGroupArgs(
                vpc_id=args.vpc_id,
                description="Security group for bastion host",
                ingress=[
                    aws.ec2.SecurityGroupIngressArgs(
                        protocol="tcp",
                        from_port=SSH_PORT,
                        to_port=SSH_PORT,
                        cidr_blocks=["0.0.0.0/0"],
                        description="Allow SSH access from anywhere",
                    )
                ],
                egress=[
                    aws.ec2.SecurityGroupEgressArgs(
                        protocol="-1", from_port=0, to_port=0, cidr_blocks=["0.0.0.0/0"]
                    )
                ],
                tags={**args.tags, "Name": f"{name}-bastion-sg"},
            ),
            opts=pulumi.ResourceOptions(parent=self),
        )

        database_sg = aws.ec2.SecurityGroup(
            f"{name}-db-sg",
            aws.ec2.SecurityGroupArgs(
                vpc_id=args.vpc_id,
                description="Security group for PostgreSQL database",
                ingress=[
                    aws.ec2.SecurityGroupIngressArgs(
                        protocol="tcp",
                        from_port=POSTGRES_PORT,
                        to_port=POSTGRES_PORT,
                        cidr_blocks=[args.vpc_cidr_block],
                        description="Allow PostgreSQL access from VPC",
                    ),
                    aws.ec2.SecurityGroupIngressArgs(
                        protocol="tcp",
                        from_port=POSTGRES_PORT,
                        to_port=POSTGRES_PORT,
                        security_groups=[bastion_sg.id],
                        description="Allow PostgreSQL access from bastion host",
                    ),
                ],
                # An empty list strips the default allow-all egress rule.
                egress=[],
                tags={**args.tags, "Name": f"{name}-db-sg"},
            ),
            opts=pulumi.ResourceOptions(parent=self),
        )

        self._outputs: AccessBoundaryOutputs = AccessBoundaryOutputs(
            database_security_group_id=database_sg.id,
            bastion_security_group_id=bastion_sg.id,
        )

        self.register_outputs(
            {
                "database_security_group_id": self._outputs.database_security_group_id,
                "bastion_security_group_id": self._outputs.bastion_security_group_id,
            }
        )

    @property
    def outputs(self) -> AccessBoundaryOutputs:
        """Return the security group IDs."""
        return self._outputs
