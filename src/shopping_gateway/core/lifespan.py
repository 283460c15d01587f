"""
Application lifecycle management.

Handles startup (logging, client construction) and shutdown (cleanup)
events for proper resource management.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from shopping_gateway.clients import (
    DocumentStoreClient,
    ObjectStoreClient,
    QueueClient,
    TopicClient,
)
from shopping_gateway.config import get_safe_config, get_settings
from shopping_gateway.core.state import init_app_state, reset_app_state
from shopping_gateway.logging import get_logger, setup_logging

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from fastapi import FastAPI


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    """
    Manage application lifecycle.

    Startup:
    - Initialize logging
    - Initialize application state
    - Create the backing service clients from the settings

    Shutdown:
    - Log shutdown with uptime
    - Close the clients
    """
    # === STARTUP ===
    settings = get_settings()

    setup_logging(settings.server.log_level)
    logger = get_logger()

    state = init_app_state()

    logger.info(
        "Service starting",
        extra={
            "service": settings.service.name,
            "version": settings.service.version,
            "host": settings.server.host,
            "port": settings.server.port,
        },
    )

    logger.info(
        "Initializing backing service clients",
        extra={
            "aws": get_safe_config()["aws"],
            "bucket": settings.bucket_name,
            "table": settings.table_name,
            "queue_url": settings.messaging.queue_url,
            "topic_arn": settings.messaging.topic_arn,
        },
    )

    state.object_store = ObjectStoreClient.from_config(settings.aws, settings.bucket_name)
    state.document_store = DocumentStoreClient.from_config(settings.aws, settings.table_name)
    state.queue = QueueClient.from_config(settings.aws, settings.messaging.queue_url)
    state.topic = TopicClient.from_config(settings.aws, settings.messaging.topic_arn)

    logger.info("Service ready to accept requests")

    yield  # Application runs here

    # === SHUTDOWN ===
    logger.info(
        "Service shutting down",
        extra={
            "uptime_seconds": state.uptime_seconds,
            "uptime": state.uptime_formatted,
        },
    )

    await state.close()
    reset_app_state()

    logger.info("Service shutdown complete")
