"""
Health Check Endpoints
"""

from datetime import datetime
from typing import Any, Dict

from fastapi import APIRouter, Depends, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from pydantic import BaseModel

from catalog.config import Settings
from catalog.database.connection import Database
from catalog.database.models import utcnow
from catalog.schemas.product import MessageResponse
from catalog.serving.api.dependencies import get_app_settings, get_database

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response"""
    status: str
    version: str
    environment: str
    timestamp: datetime
    checks: Dict[str, Any]


@router.get("/", response_model=MessageResponse)
async def root() -> MessageResponse:
    """Root endpoint"""
    return MessageResponse(message="API is running")


@router.get("/health", response_model=HealthResponse)
async def health_check(
    response: Response,
    database: Database = Depends(get_database),
    settings: Settings = Depends(get_app_settings),
) -> HealthResponse:
    """
    Health check endpoint.

    Answers 503 when the store is unreachable.
    """
    db_health = await database.check_health()
    healthy = db_health.get("status") == "healthy"
    if not healthy:
        response.status_code = 503

    return HealthResponse(
        status="healthy" if healthy else "unhealthy",
        version=settings.version,
        environment=settings.app_env,
        timestamp=utcnow(),
        checks={"database": db_health},
    )


@router.get("/metrics", include_in_schema=False)
async def metrics() -> Response:
    """Prometheus metrics in the text exposition format"""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
