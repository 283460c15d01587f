"""Fixtures for client unit tests."""

from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import MagicMock

import pytest

from tests.factories import BUCKET, PUBLIC_URL, QUEUE_URL, TOPIC_ARN

if TYPE_CHECKING:
    from shopping_gateway.clients import (
        DocumentStoreClient,
        ObjectStoreClient,
        QueueClient,
        TopicClient,
    )


@pytest.fixture
def mock_boto3_client() -> MagicMock:
    """Create a mock low-level boto3 client."""
    return MagicMock()


@pytest.fixture
def object_store(mock_boto3_client: MagicMock) -> ObjectStoreClient:
    """Create an ObjectStoreClient around the mock (trailing slash on purpose)."""
    from shopping_gateway.clients import ObjectStoreClient  # noqa: PLC0415

    return ObjectStoreClient(mock_boto3_client, bucket=BUCKET, public_url=f"{PUBLIC_URL}/")


@pytest.fixture
def document_store(mock_boto3_client: MagicMock) -> DocumentStoreClient:
    """Create a DocumentStoreClient around the mock."""
    from shopping_gateway.clients import DocumentStoreClient  # noqa: PLC0415

    return DocumentStoreClient(mock_boto3_client, table="ShoppingTasks")


@pytest.fixture
def queue(mock_boto3_client: MagicMock) -> QueueClient:
    """Create a QueueClient around the mock."""
    from shopping_gateway.clients import QueueClient  # noqa: PLC0415

    return QueueClient(mock_boto3_client, queue_url=QUEUE_URL)


@pytest.fixture
def topic(mock_boto3_client: MagicMock) -> TopicClient:
    """Create a TopicClient around the mock."""
    from shopping_gateway.clients import TopicClient  # noqa: PLC0415

    return TopicClient(mock_boto3_client, topic_arn=TOPIC_ARN)
