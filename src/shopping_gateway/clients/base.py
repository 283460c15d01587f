"""
Base client for the AWS-style backing services.

Wraps a boto3 client so that every call runs off the event loop and every
botocore failure surfaces as a BackingServiceError carrying the original
message.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any, ClassVar

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from shopping_gateway.core.exceptions import BackingServiceError
from shopping_gateway.logging import get_logger

if TYPE_CHECKING:
    from shopping_gateway.config import AwsConfig


def create_boto3_client(service_name: str, aws: AwsConfig, **config_kwargs: Any) -> Any:
    """
    Create a boto3 client pointed at the configured endpoint.

    Args:
        service_name: boto3 service identifier ("s3", "dynamodb", "sqs", "sns")
        aws: Connection settings
        **config_kwargs: Extra botocore Config options (e.g. s3 addressing style)

    Returns:
        A low-level boto3 client
    """
    return boto3.client(
        service_name,
        endpoint_url=aws.endpoint_url,
        region_name=aws.region,
        aws_access_key_id=aws.access_key_id,
        aws_secret_access_key=aws.secret_access_key,
        config=Config(
            retries={"total_max_attempts": aws.max_attempts, "mode": "standard"},
            connect_timeout=aws.connect_timeout_seconds,
            read_timeout=aws.read_timeout_seconds,
            **config_kwargs,
        ),
    )


class AwsClient:
    """
    Base class for backing service clients.

    Subclasses set ``service_name`` and ``error_type`` and call ``_call`` for
    every outbound operation.
    """

    service_name: ClassVar[str]
    error_type: ClassVar[type[BackingServiceError]] = BackingServiceError

    def __init__(self, client: Any) -> None:
        """
        Initialize the wrapper.

        Args:
            client: A boto3 client for ``service_name``
        """
        self.client = client

    async def close(self) -> None:
        """Release the underlying HTTP connection pool."""
        await asyncio.to_thread(self.client.close)

    async def _call(self, operation: str, **kwargs: Any) -> dict[str, Any]:
        """
        Invoke one boto3 operation in a worker thread.

        Args:
            operation: boto3 method name, e.g. "put_object"
            **kwargs: Operation parameters

        Returns:
            The operation's response dictionary

        Raises:
            BackingServiceError: If botocore reports any failure
        """
        logger = get_logger(f"clients.{self.service_name}")
        method = getattr(self.client, operation)

        try:
            response: dict[str, Any] = await asyncio.to_thread(method, **kwargs)
        except ClientError as e:
            error = e.response.get("Error", {})
            logger.warning(
                "Backing service returned an error",
                extra={
                    "backend": self.service_name,
                    "operation": e.operation_name,
                    "error_code": error.get("Code"),
                    "error_message": error.get("Message"),
                },
            )
            raise self.error_type(
                error=f"{self.service_name} {e.operation_name} failed",
                details=error.get("Message") or str(e),
                service=self.service_name,
                operation=e.operation_name,
            ) from e
        except BotoCoreError as e:
            logger.warning(
                "Backing service unreachable",
                extra={
                    "backend": self.service_name,
                    "operation": operation,
                    "error_type": type(e).__name__,
                    "error_message": str(e),
                },
            )
            raise self.error_type(
                error=f"{self.service_name} {operation} failed",
                details=str(e),
                service=self.service_name,
                operation=operation,
            ) from e

        logger.debug(
            "Backing service call completed",
            extra={"backend": self.service_name, "operation": operation},
        )
        return response
