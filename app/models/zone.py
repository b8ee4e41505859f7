"""
Pydantic models for user-defined safety zones (home, work, school, ...).
"""

from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional
from enum import Enum


class ZoneType(str, Enum):
    HOME = "home"
    WORK = "work"
    SCHOOL = "school"
    ROUTE = "route"
    CUSTOM = "custom"


class SafetyZoneCreate(BaseModel):
    label: str = Field(..., min_length=1, max_length=100)
    zone_type: ZoneType
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    radius_meters: Optional[int] = Field(None, gt=0, description="Defaults to DEFAULT_ZONE_RADIUS_METERS")


class SafetyZone(BaseModel):
    id: str
    user_id: Optional[str] = None
    label: str = ""
    zone_type: str
    latitude: float
    longitude: float
    radius_meters: float
    is_active: bool = True
    created_at: Optional[datetime] = None

    class Config:
        extra = "ignore"
