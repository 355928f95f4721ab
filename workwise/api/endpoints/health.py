"""
Health check endpoints.

Provides basic liveness and a detailed check of database and storage.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict
from fastapi import APIRouter, Depends, status
from sqlalchemy import text
from sqlalchemy.orm import Session

from workwise.core.config import settings
from workwise.core.database import get_db
from workwise.core.storage import storage

router = APIRouter(tags=["Health"])
logger = logging.getLogger(__name__)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


@router.get("/health", status_code=status.HTTP_200_OK)
async def health_check() -> Dict[str, str]:
    """
    Basic health check endpoint.

    Returns 200 OK if the service is running.
    """
    return {
        "status": "healthy",
        "timestamp": _now()
    }


@router.get("/health/detailed", status_code=status.HTTP_200_OK)
def detailed_health_check(db: Session = Depends(get_db)) -> Dict[str, Any]:
    """
    Detailed health check with dependency status.

    Checks:
    - Database connectivity
    - Storage (local directory or S3 bucket) availability
    """
    health_status = {
        "status": "healthy",
        "timestamp": _now(),
        "checks": {}
    }

    try:
        db.execute(text("SELECT 1"))
        health_status["checks"]["database"] = {
            "status": "healthy",
            "message": "Database connection successful"
        }
    except Exception as e:
        logger.error(f"Database health check failed: {e}")
        health_status["status"] = "unhealthy"
        health_status["checks"]["database"] = {
            "status": "unhealthy",
            "message": f"Database error: {str(e)}"
        }

    backend = "S3" if settings.USE_S3 else "local"
    try:
        storage.health_check()
        health_status["checks"]["storage"] = {
            "status": "healthy",
            "message": f"{backend} storage accessible"
        }
    except Exception as e:
        logger.error(f"Storage health check failed: {e}")
        health_status["status"] = "unhealthy"
        health_status["checks"]["storage"] = {
            "status": "unhealthy",
            "message": f"Storage error: {str(e)}"
        }

    return health_status
