"""
Application state management.

Tracks runtime state like uptime, and stores the backing service clients.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from shopping_gateway.clients import (
        DocumentStoreClient,
        ObjectStoreClient,
        QueueClient,
        TopicClient,
    )


@dataclass
class AppState:
    """
    Runtime application state.

    Attributes:
        start_time: When the application started (UTC)
        _object_store: S3 client wrapper (internal)
        _document_store: DynamoDB client wrapper (internal)
        _queue: SQS client wrapper (internal)
        _topic: SNS client wrapper (internal)
    """

    start_time: datetime = field(default_factory=lambda: datetime.now(UTC))
    _object_store: ObjectStoreClient | None = field(default=None, repr=False)
    _document_store: DocumentStoreClient | None = field(default=None, repr=False)
    _queue: QueueClient | None = field(default=None, repr=False)
    _topic: TopicClient | None = field(default=None, repr=False)

    @property
    def object_store(self) -> ObjectStoreClient:
        """Get the object store client. Raises RuntimeError if not initialized."""
        if self._object_store is None:
            raise RuntimeError("Object store client not initialized")
        return self._object_store

    @object_store.setter
    def object_store(self, value: ObjectStoreClient) -> None:
        self._object_store = value

    @property
    def document_store(self) -> DocumentStoreClient:
        """Get the document store client. Raises RuntimeError if not initialized."""
        if self._document_store is None:
            raise RuntimeError("Document store client not initialized")
        return self._document_store

    @document_store.setter
    def document_store(self, value: DocumentStoreClient) -> None:
        self._document_store = value

    @property
    def queue(self) -> QueueClient:
        """Get the queue client. Raises RuntimeError if not initialized."""
        if self._queue is None:
            raise RuntimeError("Queue client not initialized")
        return self._queue

    @queue.setter
    def queue(self, value: QueueClient) -> None:
        self._queue = value

    @property
    def topic(self) -> TopicClient:
        """Get the topic client. Raises RuntimeError if not initialized."""
        if self._topic is None:
            raise RuntimeError("Topic client not initialized")
        return self._topic

    @topic.setter
    def topic(self, value: TopicClient) -> None:
        self._topic = value

    @property
    def uptime_seconds(self) -> float:
        """Calculate uptime in seconds."""
        delta = datetime.now(UTC) - self.start_time
        return delta.total_seconds()

    @property
    def uptime_formatted(self) -> str:
        """
        Format uptime as human-readable string.

        Returns:
            String like "2d 3h 15m 42s" or "15m 42s"
        """
        seconds = int(self.uptime_seconds)
        days, remainder = divmod(seconds, 86400)
        hours, remainder = divmod(remainder, 3600)
        minutes, secs = divmod(remainder, 60)

        parts = []
        if days > 0:
            parts.append(f"{days}d")
        if hours > 0:
            parts.append(f"{hours}h")
        if minutes > 0:
            parts.append(f"{minutes}m")
        parts.append(f"{secs}s")

        return " ".join(parts)

    async def close(self) -> None:
        """Close every initialized client."""
        for client in (self._object_store, self._document_store, self._queue, self._topic):
            if client is not None:
                await client.close()


# Initialized in lifespan context
_app_state: AppState | None = None


def get_app_state() -> AppState:
    """
    Get the current application state.

    Raises:
        RuntimeError: If called before app startup
    """
    if _app_state is None:
        raise RuntimeError("Application state not initialized")
    return _app_state


def init_app_state() -> AppState:
    """Initialize application state. Called during startup."""
    global _app_state  # noqa: PLW0603 - process-wide singleton
    _app_state = AppState()
    return _app_state


def reset_app_state() -> None:
    """Reset application state. Used in testing."""
    global _app_state  # noqa: PLW0603 - process-wide singleton
    _app_state = None
