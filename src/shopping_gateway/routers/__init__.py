"""API routers for the shopping gateway."""

from shopping_gateway.routers import health, images, info, tasks, uploads

__all__ = ["health", "images", "info", "tasks", "uploads"]
