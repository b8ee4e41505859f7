"""
Panic routes - classify a trigger and return the response it should configure.
"""

import asyncio
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends

from app.models.context import PanicResponse, SignalBundle
from app.routes.dependencies import get_current_user_id
from app.services.context_classifier import resolve_panic_response
from app.services.response_policy import policy_table
from app.services.store import get_store
from app.services.zones import NoZones, SafetyZoneRegistry, ZoneResolver

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/panic", tags=["Panic"])


async def _zone_resolver_for(user_id: Optional[str], signals: SignalBundle) -> ZoneResolver:
    if not user_id or not signals.has_coordinates:
        return NoZones()
    try:
        store = get_store()
    except RuntimeError as e:
        logger.warning(f"Data store unavailable, classifying without zones: {e}")
        return NoZones()

    registry = SafetyZoneRegistry(store, user_id)
    loop = asyncio.get_running_loop()
    await loop.run_in_executor(None, registry.refresh)
    return registry


@router.post("/context", response_model=PanicResponse)
async def panic_context(
    signals: SignalBundle,
    user_id: Optional[str] = Depends(get_current_user_id),
):
    """
    Classify trigger signals into an emergency context.

    When the caller is identified, their registered safety zones take part
    in classification; otherwise only motion and time of day do. This
    endpoint never fails because the store is down.
    """
    zone_resolver = await _zone_resolver_for(user_id, signals)
    return resolve_panic_response(signals, zone_resolver)


@router.get("/policies", response_model=List[PanicResponse])
async def panic_policies():
    """The full context -> response configuration table."""
    return policy_table()
