"""
Health check endpoint
"""
from fastapi import APIRouter
from sqlalchemy import text
from datetime import datetime, timezone

from greengrocer import __version__
from greengrocer.config import settings
from greengrocer.database import SessionLocal

router = APIRouter(tags=["health"])


@router.get("/health")
def health_check():
    """
    Health check endpoint
    
    Returns service health status including:
    - Service status
    - Storage backend and, for the database backend, its connectivity
    - Timestamp
    """
    if settings.STORAGE_BACKEND == "memory":
        storage_status = "healthy"
    else:
        db = SessionLocal()
        try:
            db.execute(text("SELECT 1"))
            storage_status = "healthy"
        except Exception as e:
            storage_status = f"unhealthy: {str(e)}"
        finally:
            db.close()
    
    return {
        "service": settings.SERVICE_NAME,
        "status": "healthy" if storage_status == "healthy" else "unhealthy",
        "storage": settings.STORAGE_BACKEND,
        "storage_status": storage_status,
        "timestamp": datetime.now(timezone.utc).isoformat()
    }


@router.get("/")
def root():
    """Root endpoint"""
    return {
        "service": settings.SERVICE_NAME,
        "version": __version__,
        "docs": "/docs"
    }
