"""
Alert endpoints - live alert cache plus alert commands.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status

from app.models.alert import Alert, AlertCreate, LiveAlertsResponse
from app.models.base import BaseResponse
from app.routes.dependencies import get_data_store, require_user_id
from app.services.alert_service import AlertService
from app.services.alert_synchronizer import AlertSynchronizer
from app.services.store import DataStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/alerts", tags=["Alerts"])


def get_alert_synchronizer(request: Request) -> AlertSynchronizer:
    synchronizer = getattr(request.app.state, "alert_synchronizer", None)
    if synchronizer is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Live alert sync is not running",
        )
    return synchronizer


@router.get("/live", response_model=LiveAlertsResponse)
async def live_alerts(synchronizer: AlertSynchronizer = Depends(get_alert_synchronizer)):
    """
    Active alerts, newest first (at most ALERT_FETCH_LIMIT).

    Served from the synchronized cache; `loading` is true until the first
    fetch after startup has completed.
    """
    return LiveAlertsResponse(alerts=synchronizer.alerts, loading=synchronizer.loading)


@router.post("/refetch", response_model=LiveAlertsResponse)
async def refetch_alerts(synchronizer: AlertSynchronizer = Depends(get_alert_synchronizer)):
    """Force a full re-fetch of the live alert cache."""
    await synchronizer.refetch()
    return LiveAlertsResponse(alerts=synchronizer.alerts, loading=synchronizer.loading)


@router.post("", response_model=Alert, status_code=status.HTTP_201_CREATED)
async def create_alert(
    alert: AlertCreate,
    user_id: str = Depends(require_user_id),
    store: DataStore = Depends(get_data_store),
):
    created = await AlertService(store, user_id).create_alert(alert)
    if created is None:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Failed to create alert",
        )
    return created


@router.post("/{alert_id}/resolve", response_model=BaseResponse)
async def resolve_alert(
    alert_id: str,
    user_id: str = Depends(require_user_id),
    store: DataStore = Depends(get_data_store),
):
    if not await AlertService(store, user_id).resolve_alert(alert_id):
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail="Failed to resolve alert")
    return BaseResponse(message=f"Alert {alert_id} resolved")


@router.post("/{alert_id}/cancel", response_model=BaseResponse)
async def cancel_alert(
    alert_id: str,
    user_id: str = Depends(require_user_id),
    store: DataStore = Depends(get_data_store),
):
    if not await AlertService(store, user_id).cancel_alert(alert_id):
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail="Failed to cancel alert")
    return BaseResponse(message=f"Alert {alert_id} cancelled")
