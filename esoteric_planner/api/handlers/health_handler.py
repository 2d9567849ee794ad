"""
Health Check Handler

Provides health check endpoints for monitoring and load balancers.
"""

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from esoteric_planner.config.settings import settings
from esoteric_planner.shared.core.logging import logger
from esoteric_planner.shared.db import check_db_connection
from esoteric_planner.shared.schemas.common import HealthResponse


router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Basic health check endpoint.

    Returns:
        HealthResponse with service status
    """
    return HealthResponse(version=settings.APP_VERSION)


@router.get("/ready")
async def readiness_check():
    """
    Readiness check for load balancers.

    Runs SELECT 1 against the database.

    Returns:
        {"status": "ready"}, or 503 when the database is unreachable
    """
    try:
        await check_db_connection()
    except (SQLAlchemyError, OSError) as e:
        logger.warning("Readiness check failed", error=str(e))
        return JSONResponse(
            status_code=503,
            content={"status": "not_ready", "database": "unavailable"},
        )
    return {"status": "ready", "database": "ok"}


@router.get("/live")
async def liveness_check():
    """
    Liveness check.

    Returns:
        Simple alive status
    """
    return {"status": "alive"}
