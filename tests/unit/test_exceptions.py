"""Unit tests for the error taxonomy and exception handlers."""

from __future__ import annotations

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from shopping_gateway.core.exceptions import (
    BackingServiceError,
    ServiceError,
    StorageError,
    ValidationError,
    register_exception_handlers,
)


@pytest.fixture
def error_app() -> FastAPI:
    """App with one route per error kind."""
    app = FastAPI()
    register_exception_handlers(app)

    @app.get("/validation")
    async def validation() -> None:
        raise ValidationError("Image data is required", "imageBase64 is missing or empty")

    @app.get("/storage")
    async def storage() -> None:
        raise StorageError("Failed to upload image", details="NoSuchBucket")

    @app.get("/teapot")
    async def teapot() -> None:
        raise ServiceError("I'm a teapot", status_code=418)

    @app.get("/crash")
    async def crash() -> None:
        raise RuntimeError("secret internals")

    @app.post("/echo")
    async def echo(payload: dict[str, int]) -> dict[str, int]:
        return payload

    return app


@pytest.mark.unit
class TestErrorTypes:
    """Tests for exception attributes."""

    def test_status_codes(self) -> None:
        assert ServiceError("x").status_code == 500
        assert ValidationError("x").status_code == 400
        assert BackingServiceError("x").status_code == 500
        assert StorageError("x").status_code == 500

    def test_backing_error_records_origin(self) -> None:
        error = StorageError("s3 PutObject failed", "denied", service="s3", operation="PutObject")

        assert error.service == "s3"
        assert error.operation == "PutObject"
        assert str(error) == "s3 PutObject failed: denied"


@pytest.mark.unit
class TestExceptionHandlers:
    """Tests for the registered handlers."""

    def test_validation_error_envelope(self, error_app: FastAPI) -> None:
        response = TestClient(error_app).get("/validation")

        assert response.status_code == 400
        assert response.json() == {
            "error": "Image data is required",
            "details": "imageBase64 is missing or empty",
        }

    def test_storage_error_envelope(self, error_app: FastAPI) -> None:
        response = TestClient(error_app).get("/storage")

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to upload image", "details": "NoSuchBucket"}

    def test_status_code_override(self, error_app: FastAPI) -> None:
        response = TestClient(error_app).get("/teapot")

        assert response.status_code == 418
        assert response.json()["details"] is None

    def test_malformed_body_is_400(self, error_app: FastAPI) -> None:
        response = TestClient(error_app).post(
            "/echo",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid request body"
        assert response.json()["details"]

    def test_unhandled_exception_is_sanitized(self, error_app: FastAPI) -> None:
        response = TestClient(error_app, raise_server_exceptions=False).get("/crash")

        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error", "details": None}
