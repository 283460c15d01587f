"""
Health check endpoint.

Liveness probe only; it never touches the backing services.
"""

from __future__ import annotations

from fastapi import APIRouter

from shopping_gateway.schemas import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Report that the process is up."""
    return HealthResponse(status="ok", message="Backend is running")
