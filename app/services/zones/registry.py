"""
Safety zone registry backed by the `safety_zones` collection.

Zones are small, per-user and few in number, so membership is a linear
radius scan over the cached list rather than a spatial index.
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional

from app.core.settings import settings
from app.models.zone import SafetyZone, SafetyZoneCreate
from app.services.store.base import DESCENDING, DataStore, StoreError
from app.utils.geo import haversine_meters
from .base import ZoneResolver

logger = logging.getLogger(__name__)


class SafetyZoneRegistry(ZoneResolver):

    COLLECTION = "safety_zones"

    def __init__(self, store: DataStore, user_id: str):
        self.store = store
        self.user_id = user_id
        self.zones: List[SafetyZone] = []

    def refresh(self) -> List[SafetyZone]:
        """
        Reload the user's active zones, newest first.

        On store failure the previously cached zones are kept.
        """
        try:
            rows = self.store.query(
                self.COLLECTION,
                filters=[("user_id", "==", self.user_id), ("is_active", "==", True)],
                order_by=("created_at", DESCENDING),
            )
        except StoreError as e:
            logger.warning(f"Failed to load safety zones for {self.user_id}: {e}")
            return self.zones

        zones = []
        for row in rows:
            try:
                zones.append(SafetyZone(**row))
            except ValueError as e:
                logger.warning(f"Skipping malformed safety zone {row.get('id')}: {e}")
        self.zones = zones
        return self.zones

    def zone_at(self, latitude: float, longitude: float) -> Optional[SafetyZone]:
        for zone in self.zones:
            distance = haversine_meters(latitude, longitude, zone.latitude, zone.longitude)
            if distance <= zone.radius_meters:
                return zone
        return None

    def add_zone(self, zone: SafetyZoneCreate) -> Optional[SafetyZone]:
        fields = {
            "user_id": self.user_id,
            "label": zone.label,
            "zone_type": zone.zone_type.value,
            "latitude": zone.latitude,
            "longitude": zone.longitude,
            "radius_meters": zone.radius_meters or settings.DEFAULT_ZONE_RADIUS_METERS,
        }
        try:
            row = self.store.insert(self.COLLECTION, fields)
        except StoreError as e:
            logger.error(f"Failed to add safety zone for {self.user_id}: {e}")
            return None

        try:
            created = SafetyZone(**row)
        except ValueError as e:
            logger.error(f"Stored safety zone {row.get('id')} could not be read back: {e}")
            return None
        self.zones.insert(0, created)
        logger.info(f"Safety zone {created.id} ({created.zone_type}) added for {self.user_id}")
        return created

    def remove_zone(self, zone_id: str) -> bool:
        """Soft delete: the row stays, flagged inactive."""
        if not any(zone.id == zone_id for zone in self.zones):
            return False
        try:
            self.store.update(
                self.COLLECTION,
                zone_id,
                {"is_active": False, "updated_at": datetime.now(timezone.utc)},
            )
        except StoreError as e:
            logger.error(f"Failed to remove safety zone {zone_id}: {e}")
            return False

        self.zones = [zone for zone in self.zones if zone.id != zone_id]
        return True
