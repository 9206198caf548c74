"""AWS EC2 implementation of PostgresBastion."""

from __future__ import annotations

import json
import logging

import pulumi
import pulumi_aws as aws

from postgres_infra.components.bastion import BastionOutputs

logger: logging.Logger = logging.getLogger(__name__)

BASTION_INSTANCE_TYPE = "t3.nano"


class AwsBastionHostArgs:
    """Arguments for the AWS bastion host component.

    Args:
        subnet_id: Public subnet to launch into.
        security_group_id: Bastion security group.
        ami: AMI ID, or a ``resolve:ssm:`` parameter reference.
        tags: Tags applied to every taggable resource.
    """

    def __init__(
        self,
        subnet_id: pulumi.Input[str],
        security_group_id: pulumi.Input[str],
        ami: str,
        tags: dict[str, str] | None = None,
    ) -> None:
        self.subnet_id: pulumi.Input[str] = subnet_id
        self.security_group_id: pulumi.Input[str] = security_group_id
        self.ami: str = ami
        self.tags: dict[str, str] = dict(tags or {})


class AwsBastionHost(pulumi.ComponentResource):
    """Minimal Linux host in the public tier for reaching the database.

    The instance role carries ``AmazonSSMManagedInstanceCore`` so Session
    Manager works alongside SSH.
    """

    def __init__(
        self,
        name: str,
        args: AwsBastionHostArgs,
        opts: pulumi.ResourceOptions | None = None,
    ) -> None:
        super().__init__("postgres:aws:BastionHost", name, {}, opts)

        logger.debug(
            "provisioning_aws_bastion_host",
            extra={"name": name, "instance_type": BASTION_INSTANCE_TYPE},
        )

        role = aws.iam.Role(
            f"{name}-role",
            aws.iam.RoleArgs(
                assume_role_policy=json.dumps(
                    {
                        "Version": "2012-10-17",
                        "Statement": [
                            {
                                "Effect": "Allow",
                                "Principal": {"Service": "ec2.amazonaws.com"},
                                "Action": "sts:AssumeRole",
                            }
                        ],
                    }
                ),
                tags={**args.tags, "Name": f"{name}-role"},
            ),
            opts=pulumi.ResourceOptions(parent=self),
        )

        aws.iam.RolePolicyAttachment(
            f"{name}-ssm-policy",
            aws.iam.RolePolicyAttachmentArgs(
                role=role.name,
                policy_arn="arn:aws:iam::aws:policy/AmazonSSMManagedInstanceCore",
            ),
            opts=pulumi.ResourceOptions(parent=self),
        )

        profile = aws.iam.InstanceProfile(
            f"{name}-profile",
            aws.iam.InstanceProfileArgs(
                role=role.name,
                tags={**args.tags, "Name": f"{name}-profile"},
            ),
            opts=pulumi.ResourceOptions(parent=self),
        )

        instance = aws.ec2.Instance(
            f"{name}-instance",
            aws.ec2.InstanceArgs(
                ami=args.ami,
                instance_type=BASTION_INSTANCE_TYPE,
                subnet_id=args.subnet_id,
                vpc_security_group_ids=[args.security_group_id],
                associate_public_ip_address=True,
                iam_instance_profile=profile.name,
                metadata_options=aws.ec2.InstanceMetadataOptionsArgs(
                    http_endpoint="enabled",
                    http_tokens="required",
                ),
                tags={**args.tags, "Name": f"{name}-instance"},
            ),
            opts=pulumi.ResourceOptions(parent=self),
        )

        self._outputs: BastionOutputs = BastionOutputs(
            instance_id=instance.id,
            public_ip=instance.public_ip,
        )

        self.register_outputs(
            {
                "instance_id": self._outputs.instance_id,
                "public_ip": self._outputs.public_ip,
            }
        )

    @property
    def outputs(self) -> BastionOutputs:
        """Return the resolved bastion outputs."""
        return self._outputs
