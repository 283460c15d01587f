"""
Image upload endpoints.

Two ways to put an image into the object store:
- POST /api/upload/base64: JSON body carrying an inline base64 payload
- POST /api/upload/multipart: multipart form with an ``image`` file part
"""

from __future__ import annotations

from fastapi import APIRouter, File, Form, UploadFile

from shopping_gateway.core.exceptions import StorageError, ValidationError
from shopping_gateway.core.state import get_app_state
from shopping_gateway.logging import get_logger
from shopping_gateway.schemas import Base64UploadRequest, UploadResponse
from shopping_gateway.utils.images import (
    JPEG_CONTENT_TYPE,
    ImageDecodeError,
    decode_image_payload,
    inline_image_key,
    multipart_image_key,
    now_millis,
)

router = APIRouter(prefix="/api/upload")

UPLOAD_FAILED = "Failed to upload image"
UPLOAD_SUCCEEDED = "Image uploaded successfully"


async def _store(key: str, body: bytes, content_type: str) -> UploadResponse:
    state = get_app_state()
    try:
        image_url = await state.object_store.put_image(key, body, content_type)
    except StorageError as e:
        raise StorageError(UPLOAD_FAILED, details=e.details) from e

    get_logger().info(
        "Image uploaded",
        extra={"key": key, "size_bytes": len(body), "content_type": content_type},
    )
    return UploadResponse(success=True, message=UPLOAD_SUCCEEDED, image_url=image_url, key=key)


@router.post("/base64", response_model=UploadResponse)
async def upload_base64(request: Base64UploadRequest) -> UploadResponse:
    """
    Store an inline base64 image as JPEG.

    Raises:
        ValidationError: If the payload is missing or not decodable
        StorageError: If the object store rejects the write
    """
    if not request.image_base64:
        raise ValidationError("Image data is required", "imageBase64 is missing or empty")

    try:
        body = decode_image_payload(request.image_base64)
    except ImageDecodeError as e:
        raise ValidationError("Invalid image data", str(e)) from e

    key = inline_image_key(request.task_id, request.file_name, now_millis())
    return await _store(key, body, JPEG_CONTENT_TYPE)


# nosemgrep: no-default-parameter-values (optional multipart form fields)
@router.post("/multipart", response_model=UploadResponse)
async def upload_multipart(
    image: UploadFile | None = File(default=None),
    task_id: str | None = Form(default=None, alias="taskId"),
) -> UploadResponse:
    """
    Store an uploaded file, keeping its name and content type.

    Raises:
        ValidationError: If no file part named ``image`` was sent
        StorageError: If the object store rejects the write
    """
    if image is None:
        raise ValidationError("No file uploaded", "multipart field 'image' is missing")

    body = await image.read()
    key = multipart_image_key(task_id, image.filename or "upload", now_millis())
    content_type = image.content_type or "application/octet-stream"
    return await _store(key, body, content_type)
