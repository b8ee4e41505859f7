"""
Transient user-facing feedback for user-initiated actions.

Background work (alert sync, ETA) never reports here; only actions the
user explicitly asked for do.
"""

import logging
from abc import ABC, abstractmethod
from typing import List, Tuple

logger = logging.getLogger(__name__)


class UserFeedback(ABC):

    @abstractmethod
    def success(self, message: str) -> None:
        pass

    @abstractmethod
    def error(self, message: str) -> None:
        pass


class LoggingFeedback(UserFeedback):
    """Default sink when no UI channel is attached."""

    def success(self, message: str) -> None:
        logger.info(f"[FEEDBACK] {message}")

    def error(self, message: str) -> None:
        logger.warning(f"[FEEDBACK] {message}")


class CollectedFeedback(UserFeedback):
    """Collects messages for a single request so the HTTP layer can return them."""

    def __init__(self):
        self.messages: List[Tuple[str, str]] = []

    def success(self, message: str) -> None:
        self.messages.append(("success", message))

    def error(self, message: str) -> None:
        self.messages.append(("error", message))

    @property
    def last_error(self):
        errors = [message for level, message in self.messages if level == "error"]
        return errors[-1] if errors else None
