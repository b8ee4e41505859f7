from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple
import logging

logger = logging.getLogger(__name__)

ASCENDING = "asc"
DESCENDING = "desc"

# (field_path, op_string, value), e.g. ("status", "==", "active")
Filter = Tuple[str, str, Any]
# (field_path, ASCENDING | DESCENDING)
Order = Tuple[str, str]
ChangeCallback = Callable[[str], None]


class StoreError(Exception):
    """Any failure of the backing store (network, permissions, missing index)."""


class Subscription:
    """
    Handle for a live change-stream subscription.

    `close` is whatever the adapter needs to stop delivery; it is called once.
    """

    def __init__(self, collection: str, close: Callable[[], None]):
        self.collection = collection
        self._close = close
        self.active = True

    def cancel(self) -> None:
        if not self.active:
            return
        self.active = False
        self._close()


class DataStore(ABC):
    """
    Abstract hosted data store.

    Contract:
    - Records are plain dicts that always carry their document "id".
    - Every failure surfaces as StoreError, never as an SDK-specific exception.
    - Change callbacks receive the collection name only; they describe THAT
      something changed, not WHAT. Callbacks may run on a foreign thread.
    """

    @abstractmethod
    def query(
        self,
        collection: str,
        filters: Sequence[Filter] = (),
        order_by: Optional[Order] = None,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        raise NotImplementedError

    @abstractmethod
    def insert(self, collection: str, fields: Dict[str, Any]) -> Dict[str, Any]:
        """Insert and return the stored record, including store-assigned defaults."""
        raise NotImplementedError

    @abstractmethod
    def update(self, collection: str, doc_id: str, fields: Dict[str, Any]) -> None:
        raise NotImplementedError

    @abstractmethod
    def subscribe(
        self,
        collection: str,
        callback: ChangeCallback,
        filters: Sequence[Filter] = (),
    ) -> Subscription:
        raise NotImplementedError

    def unsubscribe(self, handle: Subscription) -> None:
        try:
            handle.cancel()
        except Exception as e:
            logger.warning(f"Failed to close subscription on {handle.collection}: {e}")
