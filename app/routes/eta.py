"""
ETA endpoint - arrival estimate between two points.
"""

from typing import Optional

from fastapi import APIRouter, Query

from app.models.eta import Coordinates, ETAResult
from app.services.routing import ETAEstimator, get_routing_provider

router = APIRouter(prefix="/eta", tags=["ETA"])


def _coordinates(lat: Optional[float], lng: Optional[float]) -> Optional[Coordinates]:
    if lat is None or lng is None:
        return None
    return Coordinates(lat=lat, lng=lng)


@router.get("", response_model=Optional[ETAResult])
async def estimate_eta(
    origin_lat: Optional[float] = Query(None, ge=-90, le=90),
    origin_lng: Optional[float] = Query(None, ge=-180, le=180),
    destination_lat: Optional[float] = Query(None, ge=-90, le=90),
    destination_lng: Optional[float] = Query(None, ge=-180, le=180),
):
    """
    Estimate arrival time and traffic level.

    Returns null when no estimate is available (missing endpoint, routing
    not configured, or the routing service failed).
    """
    estimator = ETAEstimator(get_routing_provider())
    return await estimator.estimate(
        _coordinates(origin_lat, origin_lng),
        _coordinates(destination_lat, destination_lng),
    )
