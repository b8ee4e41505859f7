import logging
from typing import Optional

from app.core.settings import settings
from .base import RoutingProvider
from .mapbox_provider import MapboxDirectionsProvider

logger = logging.getLogger(__name__)

_provider_instance: Optional[RoutingProvider] = None


def get_routing_provider() -> RoutingProvider:
    """
    Resolve the active routing provider based on settings.

    The provider is always returned; without MAPBOX_ACCESS_TOKEN it reports
    itself disabled and ETA estimation is skipped.
    """
    global _provider_instance
    if _provider_instance is not None:
        return _provider_instance

    _provider_instance = MapboxDirectionsProvider(
        access_token=settings.MAPBOX_ACCESS_TOKEN,
        profile=settings.ROUTING_PROFILE,
        timeout=settings.ROUTING_TIMEOUT_SECONDS,
    )
    if _provider_instance.is_enabled():
        logger.info(f"Routing provider initialized: mapbox/{settings.ROUTING_PROFILE}")
    else:
        logger.info("Routing provider initialized without access token; ETA estimation disabled")
    return _provider_instance
