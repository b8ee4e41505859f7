"""
Escalation Manager - routes an incident to an external responder.

DESIGN PRINCIPLES:
- Escalation is an explicit user action; failures are surfaced to the user
- Identity is passed in, never read from ambient state
- Status after creation belongs to the store's workflow, not to this module
- The local `escalations` list is NOT updated on create; call
  fetch_my_escalations() to observe a new request
"""

import asyncio
import logging
from functools import partial
from typing import List, Optional

from app.models.escalation import (
    EscalationEntityType,
    EscalationRequest,
    EscalationTarget,
)
from app.services.store.base import DESCENDING, DataStore, StoreError
from app.services.user_feedback import LoggingFeedback, UserFeedback

logger = logging.getLogger(__name__)


class EscalationManager:

    COLLECTION = "escalation_requests"

    def __init__(
        self,
        store: DataStore,
        user_id: Optional[str],
        feedback: Optional[UserFeedback] = None,
    ):
        self.store = store
        self.user_id = user_id
        self.feedback = feedback or LoggingFeedback()
        self.escalations: List[EscalationRequest] = []
        self.loading = False
        self._closed = False

    def close(self) -> None:
        """Detach from the caller; in-flight calls will no longer touch local state."""
        self._closed = True

    async def escalate(
        self,
        entity_id: str,
        entity_type: str,
        target: str,
        reason: Optional[str] = None,
        authority_contact_id: Optional[str] = None,
    ) -> Optional[EscalationRequest]:
        """
        Create an escalation request owned by the current user.

        Args:
            entity_id: ID of the panic session, incident report or marker
            entity_type: One of EscalationEntityType
            target: One of EscalationTarget
            reason: Optional free-text reason
            authority_contact_id: Optional specific authority contact

        Returns:
            The stored EscalationRequest, or None when there is no identity
            or the write failed. Both failures are reported through feedback;
            a missing identity never reaches the store.

        Raises:
            ValueError: If entity_type or target is not a known value
        """
        entity_type = EscalationEntityType(entity_type)
        target = EscalationTarget(target)

        if not self.user_id:
            logger.debug("Escalation requested without identity; skipping store write")
            self.feedback.error("Sign in to escalate")
            return None

        fields = {
            "user_id": self.user_id,
            "entity_id": entity_id,
            "entity_type": entity_type.value,
            "escalation_target": target.value,
            "reason": reason or None,
            "authority_contact_id": authority_contact_id or None,
        }

        self.loading = True
        try:
            loop = asyncio.get_running_loop()
            row = await loop.run_in_executor(None, partial(self.store.insert, self.COLLECTION, fields))
            created = EscalationRequest(**row)
        except (StoreError, ValueError) as e:
            logger.error(f"Failed to escalate {entity_type.value} {entity_id} to {target.value}: {e}")
            if not self._closed:
                self.loading = False
                self.feedback.error("Failed to escalate")
            return None

        if not self._closed:
            self.loading = False
            self.feedback.success("Escalation submitted")
        logger.info(
            f"Escalation {created.id} created: {entity_type.value} {entity_id} -> "
            f"{target.value} by {self.user_id}"
        )
        return created

    async def fetch_my_escalations(self) -> List[EscalationRequest]:
        """
        Reload the current user's escalation requests, newest first.

        Without an identity this is a no-op. A failed read keeps the
        previously fetched list.
        """
        if not self.user_id:
            return self.escalations

        loop = asyncio.get_running_loop()
        try:
            rows = await loop.run_in_executor(
                None,
                partial(
                    self.store.query,
                    self.COLLECTION,
                    filters=[("user_id", "==", self.user_id)],
                    order_by=("created_at", DESCENDING),
                ),
            )
        except StoreError as e:
            logger.warning(f"Failed to fetch escalations for {self.user_id}: {e}")
            return self.escalations

        escalations = []
        for row in rows:
            try:
                escalations.append(EscalationRequest(**row))
            except ValueError as e:
                logger.warning(f"Skipping malformed escalation {row.get('id')}: {e}")

        if self._closed:
            return escalations
        self.escalations = escalations
        return self.escalations
