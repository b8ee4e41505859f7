"""
Health check endpoints.
Used for monitoring, deployment readiness checks, and basic connectivity tests.
"""

import asyncio
from datetime import datetime, timezone

from fastapi import APIRouter, HTTPException, Request

from app.core.settings import settings
from app.services.store import StoreError, get_store


router = APIRouter(prefix="/health", tags=["Health"])


@router.get("")
async def health_check(request: Request):
    """
    Basic health check endpoint.
    Returns 200 if service is running.
    """
    synchronizer = getattr(request.app.state, "alert_synchronizer", None)
    return {
        "status": "healthy",
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "alert_sync_active": bool(synchronizer and synchronizer.active),
        "alert_stream_connected": bool(synchronizer and synchronizer.stream_connected),
        "routing_configured": bool(settings.MAPBOX_ACCESS_TOKEN),
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.get("/db")
async def database_health():
    """
    Database connectivity check.
    Performs a single bounded read against the alerts collection.
    """
    try:
        store = get_store()
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, lambda: store.query("alerts", limit=1))
    except (RuntimeError, StoreError) as e:
        raise HTTPException(
            status_code=503,
            detail=f"Database connection failed: {str(e)}"
        )

    return {
        "status": "healthy",
        "connected": True,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
