"""
Service information endpoint.

Exposes service identity and the backing resources in use. Credentials go
through the same redaction as the startup log.
"""

from __future__ import annotations

from fastapi import APIRouter

from shopping_gateway.config import get_safe_config, get_settings
from shopping_gateway.schemas import AwsInfo, InfoResponse, ResourcesInfo

router = APIRouter()


@router.get("/info", response_model=InfoResponse)
async def get_info() -> InfoResponse:
    """
    Get service information and configuration.

    Returns:
        Service metadata, connection details and resource names
    """
    settings = get_settings()
    safe_aws = get_safe_config()["aws"]

    return InfoResponse(
        service=settings.service.name,
        version=settings.service.version,
        aws=AwsInfo(
            endpoint_url=safe_aws["endpoint_url"],
            public_url=safe_aws["public_url"],
            region=safe_aws["region"],
            access_key_id=safe_aws["access_key_id"],
            secret_access_key=safe_aws["secret_access_key"],
        ),
        resources=ResourcesInfo(
            bucket=settings.bucket_name,
            table=settings.table_name,
            queue_url=settings.messaging.queue_url,
            topic_arn=settings.messaging.topic_arn,
        ),
    )
