"""
ETA/Traffic Estimator.

Turns a routing response into an arrival estimate. None means "no
estimate available" whatever the reason (missing endpoint, no credential,
network or parse failure); callers must not try to tell these apart.
"""

import asyncio
import logging
import math
from datetime import datetime, timedelta
from functools import partial
from typing import Any, Callable, Dict, Optional, Sequence

from app.models.eta import Coordinates, ETAResult, TrafficLevel
from .base import RoutingProvider

logger = logging.getLogger(__name__)

HEAVY_CONGESTION_TAGS = {"heavy", "severe"}
HEAVY_TRAFFIC_SHARE = 0.3
MODERATE_TRAFFIC_SHARE = 0.1


def classify_traffic(congestion: Sequence[str]) -> TrafficLevel:
    """
    Discretize per-segment congestion annotations.

    heavy    if more than 30% of segments are heavy/severe
    moderate if more than 10%
    light    otherwise, including when there are no segments
    """
    total = len(congestion)
    heavy_count = sum(1 for level in congestion if level in HEAVY_CONGESTION_TAGS)
    if heavy_count > total * HEAVY_TRAFFIC_SHARE:
        return TrafficLevel.HEAVY
    if heavy_count > total * MODERATE_TRAFFIC_SHARE:
        return TrafficLevel.MODERATE
    return TrafficLevel.LIGHT


def _first_leg_congestion(route: Dict[str, Any]) -> Sequence[str]:
    legs = route.get("legs")
    if not isinstance(legs, list) or not legs or not isinstance(legs[0], dict):
        return []
    annotation = legs[0].get("annotation")
    if not isinstance(annotation, dict):
        return []
    congestion = annotation.get("congestion")
    if not isinstance(congestion, list):
        return []
    return [level for level in congestion if isinstance(level, str)]


class ETAEstimator:

    def __init__(self, provider: RoutingProvider, clock: Optional[Callable[[], datetime]] = None):
        self.provider = provider
        self.clock = clock or datetime.now

    async def estimate(
        self,
        origin: Optional[Coordinates],
        destination: Optional[Coordinates],
    ) -> Optional[ETAResult]:
        if origin is None or destination is None:
            return None
        if not self.provider.is_enabled():
            return None

        loop = asyncio.get_running_loop()
        try:
            data = await loop.run_in_executor(None, partial(self.provider.get_route, origin, destination))
        except Exception as e:
            logger.error(f"ETA calculation failed: {e}", exc_info=True)
            return None

        if not data:
            return None
        try:
            return self.parse_route_response(data)
        except (AttributeError, KeyError, TypeError, ValueError, OverflowError) as e:
            logger.error(f"Failed to parse routing response: {e}")
            return None

    def parse_route_response(self, data: Dict[str, Any]) -> Optional[ETAResult]:
        """Build an ETAResult from the first route; None if the body has no usable route."""
        routes = data.get("routes")
        if not isinstance(routes, list) or not routes or not isinstance(routes[0], dict):
            logger.debug("Routing response contained no routes")
            return None

        route = routes[0]
        duration_seconds = route.get("duration")
        if not isinstance(duration_seconds, (int, float)) or duration_seconds < 0:
            logger.warning(f"Routing response route has no usable duration: {duration_seconds!r}")
            return None
        distance = route.get("distance")
        distance_meters = float(distance) if isinstance(distance, (int, float)) else 0.0
        if distance_meters < 0:
            logger.warning(f"Routing response route has a negative distance: {distance!r}")
            return None

        arrival = self.clock() + timedelta(seconds=duration_seconds)
        return ETAResult(
            # Rounded up so arrival is never under-promised
            duration_minutes=math.ceil(duration_seconds / 60),
            distance_meters=distance_meters,
            arrival_time=arrival.strftime("%H:%M"),
            traffic_level=classify_traffic(_first_leg_congestion(route)),
        )
