"""
Safety zone endpoints - the places that count as "home" or "work".
"""

import asyncio
import logging
from functools import partial
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from app.models.base import BaseResponse
from app.models.zone import SafetyZone, SafetyZoneCreate
from app.routes.dependencies import get_data_store, require_user_id
from app.services.store import DataStore
from app.services.zones import SafetyZoneRegistry

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/zones", tags=["Safety Zones"])


async def _load_registry(store: DataStore, user_id: str) -> SafetyZoneRegistry:
    registry = SafetyZoneRegistry(store, user_id)
    loop = asyncio.get_running_loop()
    await loop.run_in_executor(None, registry.refresh)
    return registry


@router.get("", response_model=List[SafetyZone])
async def list_zones(
    user_id: str = Depends(require_user_id),
    store: DataStore = Depends(get_data_store),
):
    registry = await _load_registry(store, user_id)
    return registry.zones


@router.post("", response_model=SafetyZone, status_code=status.HTTP_201_CREATED)
async def add_zone(
    zone: SafetyZoneCreate,
    user_id: str = Depends(require_user_id),
    store: DataStore = Depends(get_data_store),
):
    registry = SafetyZoneRegistry(store, user_id)
    loop = asyncio.get_running_loop()
    created = await loop.run_in_executor(None, partial(registry.add_zone, zone))
    if created is None:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail="Failed to add safety zone")
    return created


@router.delete("/{zone_id}", response_model=BaseResponse)
async def remove_zone(
    zone_id: str,
    user_id: str = Depends(require_user_id),
    store: DataStore = Depends(get_data_store),
):
    registry = await _load_registry(store, user_id)
    if not any(zone.id == zone_id for zone in registry.zones):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Safety zone {zone_id} not found")

    loop = asyncio.get_running_loop()
    removed = await loop.run_in_executor(None, partial(registry.remove_zone, zone_id))
    if not removed:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail="Failed to remove safety zone")
    return BaseResponse(message=f"Safety zone {zone_id} removed")
