"""Image payload decoding and storage key helpers."""

from __future__ import annotations

import base64
import binascii
import re
import time
import uuid

JPEG_CONTENT_TYPE = "image/jpeg"
IMAGE_KEY_PREFIX = "images"

_DATA_URI_PREFIX = re.compile(r"^data:image/\w+;base64,")
_NON_BASE64 = re.compile(r"[^A-Za-z0-9+/]")


class ImageDecodeError(ValueError):
    """Raised when an inline image payload is not valid base64."""


def now_millis() -> int:
    """Current time as epoch milliseconds."""
    return time.time_ns() // 1_000_000


def strip_data_uri_prefix(payload: str) -> str:
    """Remove a leading ``data:image/<format>;base64,`` marker if present."""
    return _DATA_URI_PREFIX.sub("", payload, count=1)


def decode_image_payload(payload: str) -> bytes:
    """
    Decode an inline image payload to raw bytes.

    Characters outside the base64 alphabet are discarded and missing
    padding is restored, so payloads copied from browsers and mobile
    clients decode the same way they would in a lenient decoder.

    Args:
        payload: Base64 text, optionally with a data-URI prefix

    Returns:
        Decoded bytes

    Raises:
        ImageDecodeError: If the remaining text cannot be decoded
    """
    data = _NON_BASE64.sub("", strip_data_uri_prefix(payload))
    data += "=" * (-len(data) % 4)
    try:
        return base64.b64decode(data)
    except binascii.Error as e:
        raise ImageDecodeError(f"Invalid base64 image data: {e}") from e


def new_task_namespace() -> str:
    """Identifier used when an upload does not name its task."""
    return str(uuid.uuid4())


def inline_image_key(task_id: str | None, file_name: str | None, timestamp: int) -> str:
    """Key for a decoded inline image: ``images/<task>/<name-or-timestamp>.jpg``."""
    namespace = task_id or new_task_namespace()
    name = file_name or str(timestamp)
    return f"{IMAGE_KEY_PREFIX}/{namespace}/{name}.jpg"


def multipart_image_key(task_id: str | None, original_name: str, timestamp: int) -> str:
    """Key for a multipart upload: ``images/<task>/<timestamp>_<original name>``."""
    namespace = task_id or new_task_namespace()
    return f"{IMAGE_KEY_PREFIX}/{namespace}/{timestamp}_{original_name}"
