# This project was developed with assistance from AI tools.
"""Liveness and readiness endpoints."""

from datetime import UTC, datetime

from fastapi import APIRouter, Depends, HTTPException, status
from portal_db import DatabaseService, get_db_service

from ..core.config import settings

router = APIRouter()


@router.get("/")
async def root() -> dict[str, str]:
    """Root endpoint: service banner and server time."""
    return {
        "message": "M&A Portal API - server running",
        "timestamp": datetime.now(UTC).isoformat(),
        "version": settings.APP_VERSION,
    }


@router.get("/health/ready")
async def ready(db_service: DatabaseService = Depends(get_db_service)) -> dict[str, str]:
    """Readiness: the database answers ``SELECT 1``."""
    if not await db_service.health_check():
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="database unavailable",
        )
    return {"status": "ok"}
