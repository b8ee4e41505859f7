"""
Pydantic models for live alerts.
"""

from pydantic import BaseModel, Field
from datetime import datetime
from typing import List, Optional
from enum import Enum


class AlertStatus(str, Enum):
    ACTIVE = "active"
    RESOLVED = "resolved"
    CANCELLED = "cancelled"


class AlertType(str, Enum):
    PANIC = "panic"
    AMBER = "amber"
    ROBBERY = "robbery"
    ASSAULT = "assault"
    SUSPICIOUS = "suspicious"
    ACCIDENT = "accident"
    OTHER = "other"


class AlertCreate(BaseModel):
    """Model for raising a new alert (incoming POST request)."""
    type: AlertType
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    description: Optional[str] = Field(None, max_length=1000)
    audio_url: Optional[str] = None


class Alert(BaseModel):
    """Alert row as read back from the store."""
    id: str
    type: str
    status: str = AlertStatus.ACTIVE.value
    description: Optional[str] = None
    latitude: float
    longitude: float
    user_id: Optional[str] = None
    audio_url: Optional[str] = None
    created_at: Optional[datetime] = None
    resolved_at: Optional[datetime] = None

    class Config:
        extra = "ignore"


class LiveAlertsResponse(BaseModel):
    """Snapshot of the synchronized alert cache."""
    alerts: List[Alert] = Field(default_factory=list)
    loading: bool
