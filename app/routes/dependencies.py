"""
Shared route dependencies.

Identity is established upstream (API gateway / auth proxy); this service
only reads the already-authenticated user id it forwards.
"""

import logging
from typing import Optional

from fastapi import Header, HTTPException, status

from app.services.store import DataStore, get_store

logger = logging.getLogger(__name__)


async def get_current_user_id(x_user_id: Optional[str] = Header(None, alias="X-User-Id")) -> Optional[str]:
    if x_user_id is None or not x_user_id.strip():
        return None
    return x_user_id.strip()


async def require_user_id(x_user_id: Optional[str] = Header(None, alias="X-User-Id")) -> str:
    user_id = await get_current_user_id(x_user_id)
    if user_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authenticated user required (X-User-Id)",
        )
    return user_id


def get_data_store() -> DataStore:
    try:
        return get_store()
    except RuntimeError as e:
        logger.error(f"Data store unavailable: {e}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Database not initialized. Please check Firebase configuration.",
        )
