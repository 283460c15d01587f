"""Core infrastructure components."""

from shopping_gateway.core.exceptions import (
    BackingServiceError,
    ServiceError,
    StorageError,
    ValidationError,
)
from shopping_gateway.core.state import AppState, get_app_state, init_app_state

__all__ = [
    "AppState",
    "BackingServiceError",
    "ServiceError",
    "StorageError",
    "ValidationError",
    "get_app_state",
    "init_app_state",
]
