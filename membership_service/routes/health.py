"""
Health check routes for membership service
"""

from datetime import datetime, timezone

import structlog
from fastapi import APIRouter, Depends, HTTPException

from membership_service.config import get_settings
from membership_service.exceptions import StoreError
from membership_service.utils.database import MemberDatabase
from membership_service.utils.dependencies import get_database

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.get("/health")
async def health_check(db: MemberDatabase = Depends(get_database)):
    """Health check endpoint"""
    try:
        await db.ping()
    except StoreError as e:
        logger.error("Health check failed", error=e.message)
        raise HTTPException(status_code=503, detail="Service unavailable")

    settings = get_settings()
    return {
        "service": "membership-service",
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "database": "connected",
        "version": settings.version,
    }
