"""boto3-backed clients for the backing services."""

from shopping_gateway.clients.base import AwsClient, create_boto3_client
from shopping_gateway.clients.document_store import DocumentStoreClient
from shopping_gateway.clients.object_store import ObjectStoreClient
from shopping_gateway.clients.queue import QueueClient
from shopping_gateway.clients.topic import TopicClient

__all__ = [
    "AwsClient",
    "DocumentStoreClient",
    "ObjectStoreClient",
    "QueueClient",
    "TopicClient",
    "create_boto3_client",
]
