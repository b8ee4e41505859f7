"""
Context Classifier - maps raw trigger signals to an EmergencyContext.

Rules are evaluated in order and the first match wins:
1. Inside a registered HOME or WORK zone  -> HOME_EMERGENCY
2. Moving faster than 5 m/s               -> TRAVEL_EMERGENCY
3. Between 22:00 and 04:59 local time     -> SILENT_TRACKING
4. Otherwise                              -> TRAVEL_EMERGENCY
"""

import logging
from typing import Optional

from app.models.context import EmergencyContext, PanicResponse, SignalBundle
from app.models.zone import ZoneType
from app.services.response_policy import config_for
from app.services.zones.base import NoZones, ZoneResolver

logger = logging.getLogger(__name__)

TRAVEL_SPEED_THRESHOLD_MPS = 5.0
NIGHT_START_HOUR = 22
NIGHT_END_HOUR = 5
ANCHOR_ZONE_TYPES = {ZoneType.HOME.value, ZoneType.WORK.value}


def _in_anchor_zone(signals: SignalBundle, zone_resolver: ZoneResolver) -> bool:
    if not signals.has_coordinates:
        return False
    try:
        zone = zone_resolver.zone_at(signals.latitude, signals.longitude)
    except Exception as e:
        # A broken zone lookup must not block a panic trigger
        logger.warning(f"Zone lookup failed, classifying without zones: {e}")
        return False
    return zone is not None and zone.zone_type in ANCHOR_ZONE_TYPES


def classify(signals: SignalBundle, zone_resolver: Optional[ZoneResolver] = None) -> EmergencyContext:
    """
    Classify trigger signals into an emergency context.

    Deterministic and total: every bundle yields exactly one context.

    Args:
        signals: Coordinates (optional), speed in m/s and local hour
        zone_resolver: Zone lookup; no zones are considered when omitted

    Returns:
        EmergencyContext
    """
    if _in_anchor_zone(signals, zone_resolver or NoZones()):
        return EmergencyContext.HOME_EMERGENCY

    if signals.speed > TRAVEL_SPEED_THRESHOLD_MPS:
        return EmergencyContext.TRAVEL_EMERGENCY

    if signals.hour >= NIGHT_START_HOUR or signals.hour < NIGHT_END_HOUR:
        return EmergencyContext.SILENT_TRACKING

    return EmergencyContext.TRAVEL_EMERGENCY


def resolve_panic_response(signals: SignalBundle, zone_resolver: Optional[ZoneResolver] = None) -> PanicResponse:
    """Classify the signals and attach the configured response."""
    context = classify(signals, zone_resolver)
    logger.info(f"Panic trigger classified as {context.value} (speed={signals.speed}, hour={signals.hour})")
    return PanicResponse(context=context, config=config_for(context))
