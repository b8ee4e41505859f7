"""
Routing and arrival estimation.

Provides ETA estimates from an external directions API. Never raises;
an unavailable estimate is simply None.
"""

from app.services.routing.base import RoutingProvider
from app.services.routing.eta_estimator import ETAEstimator, classify_traffic
from app.services.routing.mapbox_provider import MapboxDirectionsProvider
from app.services.routing.registry import get_routing_provider

__all__ = [
    "ETAEstimator",
    "MapboxDirectionsProvider",
    "RoutingProvider",
    "classify_traffic",
    "get_routing_provider",
]
