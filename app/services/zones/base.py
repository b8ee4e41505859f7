from abc import ABC, abstractmethod
from typing import Optional

from app.models.zone import SafetyZone


class ZoneResolver(ABC):
    """
    Answers "which registered zone, if any, contains this point".

    Contract:
    - Synchronous and side-effect free (classification never suspends).
    - Returns at most one zone.
    """

    @abstractmethod
    def zone_at(self, latitude: float, longitude: float) -> Optional[SafetyZone]:
        raise NotImplementedError


class NoZones(ZoneResolver):
    """Resolver for callers without a registered identity."""

    def zone_at(self, latitude: float, longitude: float) -> Optional[SafetyZone]:
        return None
