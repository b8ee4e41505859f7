import logging
from typing import Any, Dict, Optional

import requests

from app.models.eta import Coordinates
from .base import RoutingProvider

logger = logging.getLogger(__name__)


class MapboxDirectionsProvider(RoutingProvider):
    """
    Mapbox Directions v5 routing provider.

    - Requires an access token; without one it is disabled and never calls out.
    - Requests per-segment congestion annotations for traffic estimation.
    - Fails gracefully and never raises upstream exceptions.
    """

    BASE_URL = "https://api.mapbox.com/directions/v5/mapbox"

    def __init__(self, access_token: Optional[str], profile: str = "driving", timeout: float = 5.0):
        self.access_token = access_token
        self.profile = profile
        self.timeout = timeout

    def is_enabled(self) -> bool:
        return bool(self.access_token)

    def build_url(self, origin: Coordinates, destination: Coordinates) -> str:
        # Mapbox expects lng,lat pairs
        return (
            f"{self.BASE_URL}/{self.profile}/"
            f"{origin.lng},{origin.lat};{destination.lng},{destination.lat}"
        )

    def get_route(self, origin: Coordinates, destination: Coordinates) -> Optional[Dict[str, Any]]:
        if not self.is_enabled():
            logger.debug("MapboxDirectionsProvider called without access token; skipping request.")
            return None

        params = {
            "access_token": self.access_token,
            "geometries": "geojson",
            "overview": "full",
            "annotations": "duration,distance,congestion",
        }
        try:
            resp = requests.get(self.build_url(origin, destination), params=params, timeout=self.timeout)
            if resp.status_code != 200:
                logger.error(f"Mapbox directions request failed with status {resp.status_code}")
                return None
            data = resp.json()
        except (requests.RequestException, ValueError) as e:
            logger.error(f"Mapbox directions request error: {e}")
            return None

        if not isinstance(data, dict):
            logger.error("Mapbox directions returned a non-object body")
            return None
        return data
