"""
Response Policy Table - context to response configuration.

DESIGN PRINCIPLES:
- Pure lookup, no failure path
- Exactly one ResponseConfig per EmergencyContext
- A context without a config is rejected at import time
- SILENT_TRACKING never notifies authorities; watchers are informed out-of-band
"""

from typing import Dict, List

from app.models.context import EmergencyContext, PanicResponse, ResponseConfig


RESPONSE_POLICIES: Dict[EmergencyContext, ResponseConfig] = {
    EmergencyContext.HOME_EMERGENCY: ResponseConfig(
        enable_recording=True,
        enable_location_tracking=True,
        silent_mode=False,
        notify_authorities=True,
        broadcast_radius_meters=1000,
        label="Home Emergency",
    ),
    EmergencyContext.TRAVEL_EMERGENCY: ResponseConfig(
        enable_recording=True,
        enable_location_tracking=True,
        silent_mode=False,
        notify_authorities=True,
        broadcast_radius_meters=5000,
        label="Travel Emergency",
    ),
    EmergencyContext.SILENT_TRACKING: ResponseConfig(
        enable_recording=True,
        enable_location_tracking=True,
        silent_mode=True,
        notify_authorities=False,
        broadcast_radius_meters=3000,
        label="Silent Tracking",
    ),
}


def _check_policy_table() -> None:
    missing = [context.value for context in EmergencyContext if context not in RESPONSE_POLICIES]
    if missing:
        raise RuntimeError(f"Response policy missing for context(s): {missing}")
    if RESPONSE_POLICIES[EmergencyContext.SILENT_TRACKING].notify_authorities:
        raise RuntimeError("silent_tracking must never notify authorities")


_check_policy_table()


def config_for(context: EmergencyContext) -> ResponseConfig:
    """Return the response configuration for a classified context."""
    return RESPONSE_POLICIES[EmergencyContext(context)]


def policy_table() -> List[PanicResponse]:
    """Every context paired with its configuration, in declaration order."""
    return [PanicResponse(context=context, config=RESPONSE_POLICIES[context]) for context in EmergencyContext]
