"""Client for the notification topic (SNS API)."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from shopping_gateway.clients.base import AwsClient, create_boto3_client

if TYPE_CHECKING:
    from shopping_gateway.config import AwsConfig


class TopicClient(AwsClient):
    """Topic wrapper bound to one topic ARN."""

    service_name = "sns"

    def __init__(self, client: Any, topic_arn: str) -> None:
        super().__init__(client)
        self.topic_arn = topic_arn

    @classmethod
    def from_config(cls, aws: AwsConfig, topic_arn: str) -> TopicClient:
        return cls(create_boto3_client("sns", aws), topic_arn=topic_arn)

    async def publish_event(self, event: dict[str, Any], subject: str) -> str:
        """
        Publish ``event`` as a JSON message.

        Returns:
            The message id assigned by the topic
        """
        response = await self._call(
            "publish",
            TopicArn=self.topic_arn,
            Message=json.dumps(event),
            Subject=subject,
        )
        return str(response.get("MessageId", ""))
