"""
Pydantic models for escalation requests.
An escalation routes a panic session, incident report or marker to an external responder.
"""

from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional
from enum import Enum


class EscalationEntityType(str, Enum):
    """What is being escalated."""
    PANIC_SESSION = "panic_session"
    INCIDENT_REPORT = "incident_report"
    MARKER = "marker"


class EscalationTarget(str, Enum):
    """Responder category the escalation is routed to."""
    LOCAL_AUTHORITY = "local_authority"
    PRIVATE_SECURITY = "private_security"
    COMMUNITY_LEADER = "community_leader"


class EscalationCreate(BaseModel):
    """Incoming escalation request (POST body)."""
    entity_id: str = Field(..., min_length=1, description="ID of the escalated entity")
    entity_type: EscalationEntityType
    escalation_target: EscalationTarget
    reason: Optional[str] = Field(None, max_length=1000, description="Free-text reason")
    authority_contact_id: Optional[str] = Field(None, description="Specific authority contact, if chosen")

    class Config:
        json_schema_extra = {
            "example": {
                "entity_id": "b5d7c1f0-7c1e-4a53-9a4f-6f1c2a0d9e11",
                "entity_type": "panic_session",
                "escalation_target": "local_authority",
                "reason": "No response from watchers after 10 minutes",
            }
        }


class EscalationRequest(BaseModel):
    """
    Escalation request as stored.
    Status values after creation are assigned by the store's own workflow.
    """
    id: str = Field(..., description="Store document ID")
    user_id: str
    entity_id: str
    entity_type: EscalationEntityType
    escalation_target: EscalationTarget
    reason: Optional[str] = None
    authority_contact_id: Optional[str] = None
    status: str
    created_at: Optional[datetime] = None

    class Config:
        extra = "ignore"
