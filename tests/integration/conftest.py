"""
Shared fixtures for integration tests.

Integration tests use the real gateway application (real lifespan, real
boto3 clients) with botocore's Stubber answering every AWS call. They
verify the full request -> AWS call -> response cycle without a running
emulator.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, NamedTuple

import pytest
from botocore.stub import Stubber
from fastapi.testclient import TestClient

from shopping_gateway.app import create_app
from shopping_gateway.config import ENV_OVERRIDES, clear_settings_cache
from shopping_gateway.core.state import get_app_state
from tests.factories import create_test_image_base64

if TYPE_CHECKING:
    from collections.abc import Iterator

# The shipped configuration at the repository root
CONFIG_PATH = Path(__file__).resolve().parents[2] / "config.yaml"


class Stubs(NamedTuple):
    """One Stubber per backing service client."""

    s3: Stubber
    dynamodb: Stubber
    sqs: Stubber
    sns: Stubber

    def assert_no_pending_responses(self) -> None:
        for stubber in self:
            stubber.assert_no_pending_responses()


@pytest.fixture
def client(monkeypatch: pytest.MonkeyPatch) -> Iterator[TestClient]:
    """
    Create test client with the real gateway application.

    Uses context manager to trigger lifespan events (client creation).
    """
    for name in ENV_OVERRIDES:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("CONFIG_PATH", str(CONFIG_PATH))

    clear_settings_cache()
    app = create_app()
    with TestClient(app) as test_client:
        yield test_client
    clear_settings_cache()


@pytest.fixture
def stubs(client: TestClient) -> Iterator[Stubs]:  # noqa: ARG001 - lifespan must have run
    """Activate a Stubber on every boto3 client the lifespan created."""
    state = get_app_state()
    active = Stubs(
        s3=Stubber(state.object_store.client),
        dynamodb=Stubber(state.document_store.client),
        sqs=Stubber(state.queue.client),
        sns=Stubber(state.topic.client),
    )
    for stubber in active:
        stubber.activate()
    yield active
    for stubber in active:
        stubber.deactivate()


@pytest.fixture
def sample_image_base64() -> str:
    """Create a base64-encoded sample JPEG image."""
    return create_test_image_base64(100, 100, "red", "JPEG")
