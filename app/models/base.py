"""
Pydantic base models for request/response validation.

DESIGN PRINCIPLE:
- Models should reflect data structure, not business logic
- Keep models simple and focused on validation
"""

from pydantic import BaseModel, Field
from datetime import datetime, timezone
from typing import Optional


class BaseResponse(BaseModel):
    """
    Base response model for command-style API responses.
    """
    success: bool = True
    message: Optional[str] = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
