"""
Shared fixtures for unit tests.

All external dependencies (backing service clients, settings, app state)
are mocked to ensure tests run in isolation without I/O or network access.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from tests.factories import TEST_CONFIG_YAML, create_test_image_base64, expected_locator

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Generator
    from pathlib import Path


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None, None, None]:
    """Reset settings cache before and after each test."""
    from shopping_gateway.config import clear_settings_cache  # noqa: PLC0415

    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Remove every environment override so only the YAML file counts."""
    from shopping_gateway.config import ENV_OVERRIDES  # noqa: PLC0415

    for name in ENV_OVERRIDES:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def test_config_file(tmp_path: Path, clean_environment: pytest.MonkeyPatch) -> Path:
    """Write the test configuration and point CONFIG_PATH at it."""
    config_path = tmp_path / "config.yaml"
    config_path.write_text(TEST_CONFIG_YAML)
    clean_environment.setenv("CONFIG_PATH", str(config_path))
    return config_path


@pytest.fixture
def mock_object_store() -> AsyncMock:
    """Create a mock object store client that returns real-looking locators."""
    client = AsyncMock()
    client.put_image.side_effect = lambda key, body, content_type: expected_locator(key)
    client.list_images.return_value = []
    client.close = AsyncMock()
    return client


@pytest.fixture
def mock_document_store() -> AsyncMock:
    """Create a mock document store client."""
    client = AsyncMock()
    client.put_item.return_value = None
    client.scan.return_value = []
    client.close = AsyncMock()
    return client


@pytest.fixture
def mock_queue() -> AsyncMock:
    """Create a mock queue client."""
    client = AsyncMock()
    client.send_event.return_value = "message-001"
    client.close = AsyncMock()
    return client


@pytest.fixture
def mock_topic() -> AsyncMock:
    """Create a mock topic client."""
    client = AsyncMock()
    client.publish_event.return_value = "notification-001"
    client.close = AsyncMock()
    return client


@pytest.fixture
def mock_app_state(
    mock_object_store: AsyncMock,
    mock_document_store: AsyncMock,
    mock_queue: AsyncMock,
    mock_topic: AsyncMock,
) -> MagicMock:
    """Create mock app state with mock clients."""
    mock_state = MagicMock()
    mock_state.object_store = mock_object_store
    mock_state.document_store = mock_document_store
    mock_state.queue = mock_queue
    mock_state.topic = mock_topic
    mock_state.uptime_seconds = 123.45
    mock_state.uptime_formatted = "2m 3s"
    return mock_state


@pytest.fixture
def test_app(test_config_file: Path) -> FastAPI:  # noqa: ARG001 - fixture needed for side effects
    """Build the application routes around a lifespan that creates no clients."""
    # Local imports required to avoid import order issues with config
    from fastapi.middleware.cors import CORSMiddleware  # noqa: PLC0415

    from shopping_gateway.config import get_settings  # noqa: PLC0415
    from shopping_gateway.core.exceptions import register_exception_handlers  # noqa: PLC0415
    from shopping_gateway.routers import health, images, info, tasks, uploads  # noqa: PLC0415

    @asynccontextmanager
    async def mock_lifespan(_app: FastAPI) -> AsyncIterator[None]:
        yield

    settings = get_settings()

    app = FastAPI(
        title=f"{settings.service.name} Service",
        version=settings.service.version,
        lifespan=mock_lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.server.cors_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(health.router, tags=["Operations"])
    app.include_router(info.router, tags=["Operations"])
    app.include_router(uploads.router, tags=["Images"])
    app.include_router(images.router, tags=["Images"])
    app.include_router(tasks.router, tags=["Tasks"])

    return app


@pytest.fixture
def test_client(
    test_app: FastAPI,
    mock_app_state: MagicMock,
) -> Generator[TestClient, None, None]:
    """Create a test client with mocked dependencies."""
    with (
        patch("shopping_gateway.core.state.get_app_state", return_value=mock_app_state),
        patch("shopping_gateway.routers.uploads.get_app_state", return_value=mock_app_state),
        patch("shopping_gateway.routers.tasks.get_app_state", return_value=mock_app_state),
        patch("shopping_gateway.routers.images.get_app_state", return_value=mock_app_state),
        TestClient(test_app) as client,
    ):
        yield client


@pytest.fixture
def sample_image_base64() -> str:
    """Create a base64-encoded sample JPEG image."""
    return create_test_image_base64(100, 100, "red", "JPEG")
