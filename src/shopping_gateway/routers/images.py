"""Image listing endpoint."""

from __future__ import annotations

from fastapi import APIRouter

from shopping_gateway.core.exceptions import StorageError
from shopping_gateway.core.state import get_app_state
from shopping_gateway.schemas import ImageListResponse

router = APIRouter()


@router.get("/api/images", response_model=ImageListResponse)
async def list_images() -> ImageListResponse:
    """
    List the image bucket.

    Each entry keeps the attributes reported by the object store and gains a
    ``url`` pointing at the public base URL.
    """
    state = get_app_state()
    try:
        images = await state.object_store.list_images()
    except StorageError as e:
        raise StorageError("Failed to list images", details=e.details) from e

    return ImageListResponse(success=True, images=images)
