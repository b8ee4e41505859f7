"""
Escalation endpoints - route an incident to an external responder.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status

from app.models.escalation import EscalationCreate, EscalationRequest
from app.routes.dependencies import get_current_user_id, get_data_store
from app.services.escalation_manager import EscalationManager
from app.services.store import DataStore
from app.services.user_feedback import CollectedFeedback

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/escalations", tags=["Escalations"])


@router.post("", response_model=EscalationRequest, status_code=status.HTTP_201_CREATED)
async def create_escalation(
    request: EscalationCreate,
    user_id: Optional[str] = Depends(get_current_user_id),
    store: DataStore = Depends(get_data_store),
):
    """
    Submit an escalation request for the current user.

    The created request does not appear in GET /escalations/mine until that
    list is fetched again.
    """
    if user_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authenticated user required (X-User-Id)",
        )

    feedback = CollectedFeedback()
    manager = EscalationManager(store, user_id, feedback=feedback)
    created = await manager.escalate(
        entity_id=request.entity_id,
        entity_type=request.entity_type,
        target=request.escalation_target,
        reason=request.reason,
        authority_contact_id=request.authority_contact_id,
    )
    if created is None:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=feedback.last_error or "Failed to escalate",
        )
    return created


@router.get("/mine", response_model=List[EscalationRequest])
async def my_escalations(
    user_id: Optional[str] = Depends(get_current_user_id),
    store: DataStore = Depends(get_data_store),
):
    """Escalations owned by the current user, newest first. Empty without identity."""
    manager = EscalationManager(store, user_id)
    return await manager.fetch_my_escalations()
