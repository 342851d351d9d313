"""DynamoDB client creation and connectivity checks.

The DynamoClientManager turns a merged DynamoStoreConfig into a boto3
DynamoDB client. The client is created once, on first use, and reused.

Authentication Methods Supported:
    1. Explicit credentials (access_key_id, secret_access_key)
    2. Temporary credentials (session_token)
    3. AWS CLI profiles (aws_profile)
    4. No credentials against DynamoDB Local (placeholder keys are used)
"""

from typing import Any, Dict

import boto3
from botocore.config import Config

from dynamo_store.core import get_logger
from dynamo_store.core.exceptions import (
    ConfigurationError,
    ConnectivityError,
    CredentialsError,
    DynamoStoreError,
)
from dynamo_store.errors import translate_error
from dynamo_store.schemas import DynamoStoreConfig

logger = get_logger(__name__)

# DynamoDB Local accepts any credentials but requests must still be signed
LOCAL_CREDENTIALS = {
    "aws_access_key_id": "local",
    "aws_secret_access_key": "local",
}


class DynamoClientManager:
    """Manages the DynamoDB client connection for a store."""

    def __init__(self, config: DynamoStoreConfig):
        self.config = config
        self._client = None
        logger.info(
            "DynamoDB client manager initialized",
            region=config.region,
            endpoint=config.endpoint_url,
        )

    @property
    def client(self):
        """Get or create the DynamoDB client instance."""
        if self._client is None:
            self.validate()
            self._client = self._create_client()
        return self._client

    def reset(self) -> None:
        """Drop the cached client so the next access creates a new one."""
        self._client = None

    def validate(self) -> None:
        """Check that the configuration can produce a working client.

        Raises:
            CredentialsError: If no credentials are set for a remote endpoint
            ConfigurationError: If no region is set
        """
        if not self.config.has_credentials and not self.config.is_local:
            raise CredentialsError(
                "Missing access_key_id/secret_access_key (or key/secret) in configuration"
            )
        if not self.config.region:
            raise ConfigurationError("Missing region in configuration")

    def client_config(self) -> Config:
        """Build the botocore Config carrying timeouts, retries and signing."""
        client_config = Config(
            signature_version=self.config.signature_version,
            connect_timeout=self.config.timeout,
            read_timeout=self.config.timeout,
            retries={"max_attempts": self.config.max_retries},
        )
        override = self.config.options.get("config")
        if override is not None:
            client_config = client_config.merge(override)
        return client_config

    def client_kwargs(self) -> Dict[str, Any]:
        """Assemble keyword arguments for the boto3 client constructor."""
        kwargs: Dict[str, Any] = {
            "region_name": self.config.region,
            "config": self.client_config(),
        }

        if self.config.endpoint_url:
            kwargs["endpoint_url"] = self.config.endpoint_url

        if self.config.access_key_id and self.config.secret_access_key:
            kwargs.update(
                {
                    "aws_access_key_id": self.config.access_key_id,
                    "aws_secret_access_key": self.config.secret_access_key,
                }
            )
            if self.config.session_token:
                kwargs["aws_session_token"] = self.config.session_token
        elif self.config.is_local and not self.config.aws_profile:
            kwargs.update(LOCAL_CREDENTIALS)

        # Raw passthrough, applied last
        kwargs.update(
            {k: v for k, v in self.config.options.items() if k != "config"}
        )
        return kwargs

    def _create_client(self):
        """Create the boto3 DynamoDB client with the configured settings."""
        kwargs = self.client_kwargs()

        if self.config.aws_profile:
            session = boto3.Session(profile_name=self.config.aws_profile)
            client = session.client("dynamodb", **kwargs)  # type: ignore
            logger.info(
                "DynamoDB client created with profile", profile=self.config.aws_profile
            )
        else:
            client = boto3.client("dynamodb", **kwargs)  # type: ignore
            logger.info(
                "DynamoDB client created with static credentials",
                local=self.config.is_local,
            )

        return client

    def test_connection(self) -> bool:
        """Test the DynamoDB connection by listing a single table.

        Returns:
            True if connection successful

        Raises:
            CredentialsError: If credentials are missing
            ConfigurationError: If the region is missing
            ConnectivityError: If the probe request fails
        """
        try:
            self.client.list_tables(Limit=1)
        except DynamoStoreError:
            raise
        except Exception as e:
            cause = translate_error(e, debug=self.config.debug)
            error_msg = f"Could not connect to DynamoDB: {cause.message}"
            logger.error(error_msg, code=cause.error_code)
            raise ConnectivityError(
                error_msg,
                data={"code": cause.error_code},
                errors=[{"code": cause.error_code, "message": cause.message}],
                source=cause,
            ) from None

        logger.info("DynamoDB connection test successful")
        return True
