"""AWS Secrets Manager implementation of PostgresCredentials."""

from __future__ import annotations

import json
import logging
import string

import pulumi
import pulumi_aws as aws
import pulumi_random as random

from postgres_infra.components.credentials import CredentialsOutputs

logger: logging.Logger = logging.getLogger(__name__)

PASSWORD_LENGTH = 32
EXCLUDED_PASSWORD_CHARACTERS = '"@/\\'
# string.punctuation holds no whitespace.
PASSWORD_SPECIAL_CHARACTERS = "".join(
    c for c in string.punctuation if c not in EXCLUDED_PASSWORD_CHARACTERS
)


class AwsCredentialsArgs:
    """Arguments for the AWS credentials component."""

    def __init__(
        self,
        username: str = "postgres",
        tags: dict[str, str] | None = None,
    ) -> None:
        self.username: str = username
        self.tags: dict[str, str] = dict(tags or {})


class AwsCredentials(pulumi.ComponentResource):
    """Generated master credential stored in Secrets Manager.

    The secret value is a JSON document with ``username`` and ``password``
    keys. The password is 32 characters long and never contains
    ``"``, ``@``, ``/``, ``\\`` or whitespace.
    """

    def __init__(
        self,
        name: str,
        args: AwsCredentialsArgs,
        opts: pulumi.ResourceOptions | None = None,
    ) -> None:
        super().__init__("postgres:aws:Credentials", name, {}, opts)

        logger.debug(
            "provisioning_aws_credentials",
            extra={"name": name, "username": args.username},
        )

        db_password = random.RandomPassword(
            f"{name}-password-gen",
            random.RandomPasswordArgs(
                length=PASSWORD_LENGTH,
                special=True,
                override_special=PASSWORD_SPECIAL_CHARACTERS,
            ),
            opts=pulumi.ResourceOptions(parent=self),
        )

        secret = aws.secretsmanager.Secret(
            f"{name}-secret",
            aws.secretsmanager.SecretArgs(
                description="PostgreSQL database credentials",
                tags={**args.tags, "Name": f"{name}-secret"},
            ),
            opts=pulumi.ResourceOptions(parent=self),
        )

        username = args.username
        aws.secretsmanager.SecretVersion(
            f"{name}-secret-version",
            aws.secretsmanager.SecretVersionArgs(
                secret_id=secret.id,
                secret_string=db_password.result.apply(
                    lambda pw: json.dumps({"username": username, "password": pw})
                ),
            ),
            opts=pulumi.ResourceOptions(parent=self),
        )

        self._outputs: CredentialsOutputs = CredentialsOutputs(
            secret_arn=secret.arn,
            username=pulumi.Output.from_input(username),
            password=pulumi.Output.secret(db_password.result),
        )

        self.register_outputs(
            {
                "secret_arn": self._outputs.secret_arn,
                "username": self._outputs.username,
            }
        )

    @property
    def outputs(self) -> CredentialsOutputs:
        """Return the credential outputs."""
        return self._outputs
