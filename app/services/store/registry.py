import logging
from typing import Optional

from .base import DataStore

logger = logging.getLogger(__name__)

_store_instance: Optional[DataStore] = None


def get_store() -> DataStore:
    """
    Resolve the process-wide DataStore.

    Built lazily on first use so importing the app never touches Firebase.
    Raises RuntimeError when Firestore cannot be initialized.
    """
    global _store_instance
    if _store_instance is not None:
        return _store_instance

    from app.config.firebase import get_db
    from .firestore_store import FirestoreStore

    _store_instance = FirestoreStore(get_db())
    logger.info("Data store initialized: firestore")
    return _store_instance
