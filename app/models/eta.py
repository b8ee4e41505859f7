"""
Pydantic models for arrival estimation.
"""

from pydantic import BaseModel, Field
from enum import Enum


class TrafficLevel(str, Enum):
    LIGHT = "light"
    MODERATE = "moderate"
    HEAVY = "heavy"


class Coordinates(BaseModel):
    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)


class ETAResult(BaseModel):
    """Derived arrival estimate. Never persisted."""
    duration_minutes: int = Field(..., ge=0, description="Route duration rounded up to whole minutes")
    distance_meters: float = Field(..., ge=0)
    arrival_time: str = Field(..., description="Local arrival time formatted HH:MM")
    traffic_level: TrafficLevel
