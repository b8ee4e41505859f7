"""
Data store contract and adapters.

The store is the only source of truth; components keep at most a
disposable local copy of what they read from it.
"""

from app.services.store.base import (
    ASCENDING,
    DESCENDING,
    DataStore,
    StoreError,
    Subscription,
)
from app.services.store.registry import get_store

__all__ = [
    "ASCENDING",
    "DESCENDING",
    "DataStore",
    "StoreError",
    "Subscription",
    "get_store",
]
