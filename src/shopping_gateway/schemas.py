"""
Pydantic request/response models for the gateway API.

Field names are snake_case in Python and camelCase on the wire.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model that reads and writes camelCase JSON."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# === Request Models ===


class Base64UploadRequest(CamelModel):
    """Request model for POST /api/upload/base64."""

    image_base64: str | None = None
    """Base64 image, optionally prefixed with a data URI marker."""

    task_id: str | None = None
    """Task namespace for the key; a random one is used when absent."""

    file_name: str | None = None
    """Key file name (without extension); the current time is used when absent."""


class TaskRequest(CamelModel):
    """Request model for POST /api/tasks."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )

    id: str | None = None
    title: Any = None
    description: Any = None
    image_base64: str | None = None
    location: Any = None
    created_at: Any = None
    """Stored as sent; defaults to now in epoch milliseconds."""


# === Response Models ===


class HealthResponse(BaseModel):
    """Response model for GET /health."""

    status: str
    message: str


class UploadResponse(CamelModel):
    """Response model for both upload endpoints."""

    success: bool
    message: str
    image_url: str
    key: str


class TaskRecord(CamelModel):
    """A task as stored in the document store."""

    id: str | None
    title: Any
    description: Any
    image_url: str | None
    location: Any
    created_at: Any
    updated_at: int


class TaskSavedResponse(CamelModel):
    """Response model for POST /api/tasks."""

    success: bool
    message: str
    task: TaskRecord


class TaskListResponse(BaseModel):
    """Response model for GET /api/tasks."""

    success: bool
    tasks: list[dict[str, Any]]


class ImageListResponse(BaseModel):
    """Response model for GET /api/images."""

    success: bool
    images: list[dict[str, Any]]


class AwsInfo(BaseModel):
    """Backing service connection details for /info (credentials redacted)."""

    endpoint_url: str
    public_url: str
    region: str
    access_key_id: str
    secret_access_key: str


class ResourcesInfo(BaseModel):
    """Backing resources the gateway writes to."""

    bucket: str
    table: str
    queue_url: str
    topic_arn: str


class InfoResponse(BaseModel):
    """Response model for GET /info."""

    service: str
    version: str
    aws: AwsInfo
    resources: ResourcesInfo


class ErrorResponse(BaseModel):
    """Standard error response model."""

    error: str
    """Short human-readable error."""

    details: str | None = None
    """Underlying error message, verbatim."""
