"""
Firestore-backed DataStore.

Firestore has no column defaults, so the values a relational backend would
assign on insert (initial status, creation timestamp) are applied here.
"""

import logging
import threading
from typing import Any, Dict, List, Optional, Sequence

from firebase_admin import firestore

from app.utils.firestore_helpers import where_filter
from .base import (
    DESCENDING,
    ChangeCallback,
    DataStore,
    Filter,
    Order,
    StoreError,
    Subscription,
)

logger = logging.getLogger(__name__)


class FirestoreStore(DataStore):

    COLLECTION_DEFAULTS: Dict[str, Dict[str, Any]] = {
        "escalation_requests": {"status": "pending"},
        "alerts": {"status": "active"},
        "safety_zones": {"is_active": True},
    }

    def __init__(self, db):
        self.db = db

    def _build_query(self, collection: str, filters: Sequence[Filter]):
        query = self.db.collection(collection)
        for field_path, op_string, value in filters:
            query = where_filter(query, field_path, op_string, value)
        return query

    def query(
        self,
        collection: str,
        filters: Sequence[Filter] = (),
        order_by: Optional[Order] = None,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        try:
            query = self._build_query(collection, filters)
            if order_by is not None:
                field_path, direction = order_by
                query = query.order_by(
                    field_path,
                    direction=firestore.Query.DESCENDING if direction == DESCENDING else firestore.Query.ASCENDING,
                )
            if limit is not None:
                query = query.limit(limit)

            records = []
            for doc in query.stream():
                data = doc.to_dict() or {}
                data["id"] = doc.id
                records.append(data)
            return records
        except Exception as e:
            raise StoreError(f"Query on '{collection}' failed: {e}") from e

    def insert(self, collection: str, fields: Dict[str, Any]) -> Dict[str, Any]:
        data = dict(self.COLLECTION_DEFAULTS.get(collection, {}))
        data.update({k: v for k, v in fields.items() if v is not None})
        data.setdefault("created_at", firestore.SERVER_TIMESTAMP)

        try:
            doc_ref = self.db.collection(collection).document()
            doc_ref.set(data)
            # Read back so server timestamps are resolved
            snapshot = doc_ref.get()
        except Exception as e:
            raise StoreError(f"Insert into '{collection}' failed: {e}") from e

        record = snapshot.to_dict() or {}
        record["id"] = snapshot.id
        return record

    def update(self, collection: str, doc_id: str, fields: Dict[str, Any]) -> None:
        try:
            self.db.collection(collection).document(doc_id).update(fields)
        except Exception as e:
            raise StoreError(f"Update of '{collection}/{doc_id}' failed: {e}") from e

    def subscribe(
        self,
        collection: str,
        callback: ChangeCallback,
        filters: Sequence[Filter] = (),
    ) -> Subscription:
        # on_snapshot always delivers the current result set first; that is
        # not a mutation, so it is swallowed.
        seen_initial = threading.Event()

        def on_snapshot(doc_snapshots, changes, read_time):
            if not seen_initial.is_set():
                seen_initial.set()
                return
            try:
                callback(collection)
            except Exception as e:
                logger.error(f"Change callback for '{collection}' raised: {e}", exc_info=True)

        try:
            watch = self._build_query(collection, filters).on_snapshot(on_snapshot)
        except Exception as e:
            raise StoreError(f"Subscribe to '{collection}' failed: {e}") from e

        logger.info(f"Subscribed to change stream: {collection}")
        return Subscription(collection, watch.unsubscribe)
