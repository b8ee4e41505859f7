"""
Alert Service - raise, resolve and cancel alerts.

Writes go straight to the store; readers observe them through the
change stream (see AlertSynchronizer).
"""

import asyncio
import logging
from datetime import datetime, timezone
from functools import partial
from typing import Optional

from app.models.alert import Alert, AlertCreate, AlertStatus
from app.services.store.base import DataStore, StoreError

logger = logging.getLogger(__name__)


class AlertService:

    COLLECTION = "alerts"

    def __init__(self, store: DataStore, user_id: Optional[str]):
        self.store = store
        self.user_id = user_id

    async def create_alert(self, alert: AlertCreate) -> Optional[Alert]:
        """
        Raise a new alert owned by the current user.

        Returns None when there is no identity, the write failed or the
        stored row could not be read back.
        """
        if not self.user_id:
            logger.debug("Alert creation requested without identity")
            return None

        fields = {
            "user_id": self.user_id,
            "type": alert.type.value,
            "latitude": alert.latitude,
            "longitude": alert.longitude,
            "description": alert.description,
            "audio_url": alert.audio_url,
        }
        loop = asyncio.get_running_loop()
        try:
            row = await loop.run_in_executor(None, partial(self.store.insert, self.COLLECTION, fields))
        except StoreError as e:
            logger.error(f"Failed to create {alert.type.value} alert for {self.user_id}: {e}")
            return None

        try:
            created = Alert(**row)
        except ValueError as e:
            logger.error(f"Stored alert {row.get('id')} could not be read back: {e}")
            return None

        logger.info(f"Alert {created.id} ({created.type}) raised by {self.user_id}")
        return created

    async def resolve_alert(self, alert_id: str) -> bool:
        return await self._set_status(
            alert_id,
            {"status": AlertStatus.RESOLVED.value, "resolved_at": datetime.now(timezone.utc)},
        )

    async def cancel_alert(self, alert_id: str) -> bool:
        return await self._set_status(alert_id, {"status": AlertStatus.CANCELLED.value})

    async def _set_status(self, alert_id: str, fields: dict) -> bool:
        loop = asyncio.get_running_loop()
        try:
            await loop.run_in_executor(None, partial(self.store.update, self.COLLECTION, alert_id, fields))
        except StoreError as e:
            logger.error(f"Failed to set alert {alert_id} to {fields['status']}: {e}")
            return False
        logger.info(f"Alert {alert_id} -> {fields['status']}")
        return True
