"""
FastAPI application factory.

Creates and configures the FastAPI application instance.
"""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shopping_gateway.config import get_settings
from shopping_gateway.core.exceptions import register_exception_handlers
from shopping_gateway.core.lifespan import lifespan
from shopping_gateway.routers import health, images, info, tasks, uploads


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()

    app = FastAPI(
        title=f"{settings.service.name} Service",
        description="Gateway from the shopping app to object store, table, queue and topic",
        version=settings.service.version,
        lifespan=lifespan,
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
