"""
Alert Synchronizer - keeps a local list of active alerts in step with the store.

DESIGN PRINCIPLES:
- The store is the source of truth; the cached list is disposable
- Any change event triggers a full re-fetch (no incremental patching)
- Events arriving while a fetch is in flight coalesce into one more fetch
- Fetch errors are logged and leave the previous list untouched
- Nothing mutates local state after deactivate()

Invariant on `alerts`: only status == "active", ordered by created_at
descending, at most `limit` entries.
"""

import asyncio
import logging
from functools import partial
from typing import Dict, List, Optional

from app.core.settings import settings
from app.models.alert import Alert, AlertStatus
from app.services.store.base import DESCENDING, DataStore, StoreError, Subscription
from app.utils.timestamps import created_at_key

logger = logging.getLogger(__name__)


class AlertSynchronizer:

    COLLECTION = "alerts"

    def __init__(self, store: DataStore, limit: Optional[int] = None):
        self.store = store
        self.limit = limit or settings.ALERT_FETCH_LIMIT
        self.alerts: List[Alert] = []
        self.loading = True
        self.fetch_count = 0

        self._active = False
        # Bumped on every activate/deactivate; continuations started under an
        # older generation must not touch state.
        self._generation = 0
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._subscription: Optional[Subscription] = None
        self._refetch_task: Optional[asyncio.Task] = None
        self._refetch_pending = False

    @property
    def active(self) -> bool:
        return self._active

    @property
    def stream_connected(self) -> bool:
        return self._subscription is not None

    @property
    def syncing(self) -> bool:
        return self._refetch_task is not None and not self._refetch_task.done()

    async def activate(self) -> None:
        """
        Subscribe to the alerts change stream and perform the initial load.

        Calling activate() on an active synchronizer is a no-op, so there is
        never more than one live subscription per instance.
        """
        if self._active:
            return

        self._active = True
        self._generation += 1
        generation = self._generation
        self._loop = asyncio.get_running_loop()
        self.loading = True

        await self._subscribe(generation)
        if generation != self._generation:
            return

        await self._fetch(generation)

    def deactivate(self) -> None:
        """Tear down the subscription and abandon any in-flight fetch."""
        if not self._active:
            return

        self._active = False
        self._generation += 1

        if self._subscription is not None:
            self.store.unsubscribe(self._subscription)
            self._subscription = None

        if self._refetch_task is not None and not self._refetch_task.done():
            self._refetch_task.cancel()
        self._refetch_task = None
        self._refetch_pending = False
        logger.info("Alert synchronizer deactivated")

    async def refetch(self) -> List[Alert]:
        """
        Manual retry path. Does nothing on an inactive synchronizer.

        Also retries the change stream subscription if it could not be
        established earlier.
        """
        if self._active:
            generation = self._generation
            if self._subscription is None:
                await self._subscribe(generation)
            await self._fetch(generation)
        return self.alerts

    async def _subscribe(self, generation: int) -> None:
        try:
            subscription = await self._loop.run_in_executor(
                None,
                partial(self.store.subscribe, self.COLLECTION, partial(self._on_change, generation)),
            )
        except StoreError as e:
            logger.warning(f"Alert change stream unavailable, serving manual refetch only: {e}")
            return

        if generation != self._generation or self._subscription is not None:
            # Deactivated while subscribing, or a concurrent retry got there first
            self.store.unsubscribe(subscription)
            return
        self._subscription = subscription
        logger.info("Alert change stream connected")

    def _on_change(self, generation: int, collection: str) -> None:
        # Runs on whichever thread the store delivers events on.
        loop = self._loop
        if loop is None or loop.is_closed():
            return
        try:
            loop.call_soon_threadsafe(self._schedule_refetch, generation)
        except RuntimeError:
            logger.debug("Event loop closed; dropping alert change event")

    def _schedule_refetch(self, generation: int) -> None:
        if not self._active or generation != self._generation:
            return
        if self.syncing:
            self._refetch_pending = True
            return
        self._refetch_task = self._loop.create_task(self._drain_refetches(generation))

    async def _drain_refetches(self, generation: int) -> None:
        while True:
            self._refetch_pending = False
            await self._fetch(generation)
            if generation != self._generation or not self._refetch_pending:
                return

    async def _fetch(self, generation: int) -> None:
        self.fetch_count += 1
        loop = asyncio.get_running_loop()
        try:
            rows = await loop.run_in_executor(
                None,
                partial(
                    self.store.query,
                    self.COLLECTION,
                    filters=[("status", "==", AlertStatus.ACTIVE.value)],
                    order_by=("created_at", DESCENDING),
                    limit=self.limit,
                ),
            )
        except StoreError as e:
            logger.warning(f"Alert fetch failed, keeping {len(self.alerts)} cached alert(s): {e}")
            rows = None

        if generation != self._generation:
            return

        if rows is not None:
            self.alerts = self._to_alerts(rows)
        self.loading = False

    def _to_alerts(self, rows: List[Dict]) -> List[Alert]:
        active_rows = [row for row in rows if row.get("status") == AlertStatus.ACTIVE.value]
        active_rows.sort(key=created_at_key, reverse=True)

        alerts = []
        for row in active_rows[: self.limit]:
            try:
                alerts.append(Alert(**row))
            except ValueError as e:
                logger.warning(f"Skipping malformed alert {row.get('id')}: {e}")
        return alerts
