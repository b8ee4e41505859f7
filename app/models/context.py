"""
Pydantic models for contextual panic classification.

DESIGN PRINCIPLE:
- Models reflect data structure, not decision policy
- Classification lives in services/context_classifier.py
- Policy values live in services/response_policy.py
"""

from pydantic import BaseModel, Field
from typing import Optional
from enum import Enum


class EmergencyContext(str, Enum):
    """Operational context an emergency trigger is classified into."""
    HOME_EMERGENCY = "home_emergency"
    TRAVEL_EMERGENCY = "travel_emergency"
    SILENT_TRACKING = "silent_tracking"


class SignalBundle(BaseModel):
    """
    Raw signals captured at trigger time.
    Constructed fresh for every classification call, never persisted.
    """
    latitude: Optional[float] = Field(None, ge=-90, le=90, description="Latitude (absent if no fix)")
    longitude: Optional[float] = Field(None, ge=-180, le=180, description="Longitude (absent if no fix)")
    speed: float = Field(0.0, description="Ground speed in meters/second (negative when the device reports it as unknown)")
    hour: int = Field(..., ge=0, le=23, description="Local hour of day (0-23)")

    @property
    def has_coordinates(self) -> bool:
        return self.latitude is not None and self.longitude is not None

    class Config:
        json_schema_extra = {
            "example": {
                "latitude": 6.5244,
                "longitude": 3.3792,
                "speed": 0.4,
                "hour": 23,
            }
        }


class ResponseConfig(BaseModel):
    """What to record, whom to notify and how far to broadcast for a context."""
    enable_recording: bool
    enable_location_tracking: bool
    silent_mode: bool
    notify_authorities: bool
    broadcast_radius_meters: int = Field(..., gt=0)
    label: str

    class Config:
        frozen = True


class PanicResponse(BaseModel):
    """Classification result paired with the response it configures."""
    context: EmergencyContext
    config: ResponseConfig
