"""Client for the task event queue (SQS API)."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from shopping_gateway.clients.base import AwsClient, create_boto3_client

if TYPE_CHECKING:
    from shopping_gateway.config import AwsConfig


class QueueClient(AwsClient):
    """Queue wrapper bound to one queue URL."""

    service_name = "sqs"

    def __init__(self, client: Any, queue_url: str) -> None:
        super().__init__(client)
        self.queue_url = queue_url

    @classmethod
    def from_config(cls, aws: AwsConfig, queue_url: str) -> QueueClient:
        return cls(create_boto3_client("sqs", aws), queue_url=queue_url)

    async def send_event(self, event: dict[str, Any]) -> str:
        """
        Send ``event`` as a JSON message body.

        Returns:
            The message id assigned by the queue
        """
        response = await self._call(
            "send_message",
            QueueUrl=self.queue_url,
            MessageBody=json.dumps(event),
        )
        return str(response.get("MessageId", ""))
