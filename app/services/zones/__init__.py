"""
Zone lookup for contextual classification.
"""

from app.services.zones.base import NoZones, ZoneResolver
from app.services.zones.registry import SafetyZoneRegistry

__all__ = [
    "NoZones",
    "SafetyZoneRegistry",
    "ZoneResolver",
]
