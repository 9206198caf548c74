"""IAM role that lets RDS publish enhanced monitoring metrics."""

from __future__ import annotations

import json

import pulumi
import pulumi_aws as aws

MONITORING_INTERVAL_SECONDS = 60

_ENHANCED_MONITORING_POLICY = (
    "arn:aws:iam::aws:policy/service-role/AmazonRDSEnhancedMonitoringRole"
)


def create_monitoring_role(
    name: str,
    tags: dict[str, str],
    parent: pulumi.Resource,
) -> aws.iam.Role:
    """Create the enhanced monitoring role for ``monitoring.rds.amazonaws.com``."""
    role = aws.iam.Role(
        f"{name}-monitoring-role",
        aws.iam.RoleArgs(
            assume_role_policy=json.dumps(
                {
                    "Version": "2012-10-17",
                    "Statement": [
                        {
                            "Effect": "Allow",
                            "Principal": {"Service": "monitoring.rds.amazonaws.com"},
                            "Action": "sts:AssumeRole",
                        }
                    ],
                }
            ),
            tags={**tags, "Name": f"{name}-monitoring-role"},
        ),
        opts=pulumi.ResourceOptions(parent=parent),
    )
    aws.iam.RolePolicyAttachment(
        f"{name}-monitoring-policy",
        aws.iam.RolePolicyAttachmentArgs(
            role=role.name,
            policy_arn=_ENHANCED_MONITORING_POLICY,
        ),
        opts=pulumi.ResourceOptions(parent=parent),
    )
    return role
