"""
Client for the document store (DynamoDB API).

Items are written and read as plain Python values; conversion to and from
the DynamoDB attribute-value format happens here.
"""

from __future__ import annotations

import json
from decimal import Decimal
from typing import TYPE_CHECKING, Any

from boto3.dynamodb.types import Binary, TypeDeserializer, TypeSerializer

from shopping_gateway.clients.base import AwsClient, create_boto3_client

if TYPE_CHECKING:
    from shopping_gateway.config import AwsConfig


def to_dynamo_item(item: dict[str, Any]) -> dict[str, Any]:
    """
    Serialize a JSON-compatible dict into DynamoDB attribute values.

    Floats are routed through Decimal because DynamoDB numbers reject binary
    floating point.
    """
    normalized = json.loads(json.dumps(item), parse_float=Decimal)
    serializer = TypeSerializer()
    return {key: serializer.serialize(value) for key, value in normalized.items()}


def _plain_number(value: Decimal) -> int | float:
    return int(value) if value == value.to_integral_value() else float(value)


def _to_plain(value: Any) -> Any:
    if isinstance(value, Decimal):
        return _plain_number(value)
    if isinstance(value, dict):
        return {key: _to_plain(inner) for key, inner in value.items()}
    if isinstance(value, (list, set)):
        return [_to_plain(inner) for inner in value]
    if isinstance(value, Binary):
        return value.value.decode("utf-8", errors="replace")
    return value


def from_dynamo_item(item: dict[str, Any]) -> dict[str, Any]:
    """Deserialize DynamoDB attribute values into JSON-compatible values."""
    deserializer = TypeDeserializer()
    return {key: _to_plain(deserializer.deserialize(value)) for key, value in item.items()}


class DocumentStoreClient(AwsClient):
    """Document store wrapper bound to one table."""

    service_name = "dynamodb"

    def __init__(self, client: Any, table: str) -> None:
        super().__init__(client)
        self.table = table

    @classmethod
    def from_config(cls, aws: AwsConfig, table: str) -> DocumentStoreClient:
        return cls(create_boto3_client("dynamodb", aws), table=table)

    async def put_item(self, item: dict[str, Any]) -> None:
        """Write ``item``, replacing any existing item with the same key."""
        await self._call("put_item", TableName=self.table, Item=to_dynamo_item(item))

    async def scan(self) -> list[dict[str, Any]]:
        """
        Read the whole table in a single scan request.

        Items past the service's first page are not returned.
        """
        response = await self._call("scan", TableName=self.table)
        return [from_dynamo_item(item) for item in response.get("Items", [])]
