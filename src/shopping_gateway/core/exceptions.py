"""
Error taxonomy and exception handlers for consistent error responses.

Every failure leaves the gateway as ``{"error": <short message>,
"details": <underlying message or null>}``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, cast

from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from shopping_gateway.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Callable, Coroutine
    from typing import Any

    from fastapi import FastAPI, Request
    from starlette.requests import Request as StarletteRequest

    ExceptionHandler = Callable[
        [StarletteRequest, Exception],
        Coroutine[Any, Any, JSONResponse],
    ]


class ServiceError(Exception):
    """
    Base exception for gateway errors.

    Attributes:
        error: Short human-readable message returned to the client
        status_code: HTTP status code
        details: Underlying message, attached verbatim
    """

    status_code: int = 500

    def __init__(
        self,
        error: str,
        details: str | None = None,
        status_code: int | None = None,
    ) -> None:
        self.error = error
        self.details = details
        if status_code is not None:
            self.status_code = status_code
        super().__init__(error if details is None else f"{error}: {details}")


class ValidationError(ServiceError):
    """Missing or malformed client input."""

    status_code = 400


class BackingServiceError(ServiceError):
    """
    Failure reported by the object store, document store, queue or topic.

    Attributes:
        service: Which backing service failed ("s3", "dynamodb", "sqs", "sns")
        operation: The API operation that failed, e.g. "PutObject"
    """

    status_code = 500

    def __init__(
        self,
        error: str,
        details: str | None = None,
        service: str | None = None,
        operation: str | None = None,
    ) -> None:
        super().__init__(error, details)
        self.service = service
        self.operation = operation


class StorageError(BackingServiceError):
    """Object store failure."""


async def service_error_handler(
    request: Request,
    exc: ServiceError,
) -> JSONResponse:
    """Handle ServiceError exceptions."""
    logger = get_logger()
    logger.warning(
        "Service error",
        extra={
            "error_type": type(exc).__name__,
            "error_message": exc.error,
            "details": exc.details,
            "status_code": exc.status_code,
            "path": str(request.url.path),
            "method": request.method,
        },
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.error, "details": exc.details},
    )


async def request_validation_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """Report unparseable or wrongly typed request bodies as 400."""
    messages = [
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in exc.errors()
    ]
    return await service_error_handler(
        request,
        ValidationError("Invalid request body", "; ".join(messages)),
    )


async def unhandled_exception_handler(
    request: Request,
    _exc: Exception,
) -> JSONResponse:
    """
    Handle unexpected exceptions.

    Logs full traceback but returns sanitized error to client.
    """
    logger = get_logger()
    logger.exception(
        "Unhandled exception",
        extra={
            "path": str(request.url.path),
            "method": request.method,
        },
    )
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error", "details": None},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the app."""
    app.add_exception_handler(
        ServiceError,
        cast("ExceptionHandler", service_error_handler),
    )
    app.add_exception_handler(
        RequestValidationError,
        cast("ExceptionHandler", request_validation_handler),
    )
    app.add_exception_handler(Exception, unhandled_exception_handler)
