"""
Tests for the safety zone registry (zone resolver).
"""

from app.models.zone import SafetyZoneCreate, ZoneType
from app.services.zones import SafetyZoneRegistry

HOME = (6.5244, 3.3792)


def seed_zone(store, user_id="user-1", zone_type="home", lat=HOME[0], lng=HOME[1], radius=200, **extra):
    return store.seed("safety_zones", {
        "user_id": user_id,
        "label": zone_type.title(),
        "zone_type": zone_type,
        "latitude": lat,
        "longitude": lng,
        "radius_meters": radius,
        **extra,
    })


def test_zone_at_matches_within_radius(store):
    seed_zone(store)
    registry = SafetyZoneRegistry(store, "user-1")
    registry.refresh()

    # ~110 m north of the zone centre
    zone = registry.zone_at(HOME[0] + 0.001, HOME[1])
    assert zone is not None
    assert zone.zone_type == "home"


def test_zone_at_misses_outside_radius(store):
    seed_zone(store)
    registry = SafetyZoneRegistry(store, "user-1")
    registry.refresh()

    # ~1.1 km away
    assert registry.zone_at(HOME[0] + 0.01, HOME[1]) is None


def test_refresh_only_loads_own_active_zones(store):
    seed_zone(store, zone_type="work")
    seed_zone(store, user_id="user-2")
    seed_zone(store, zone_type="school", is_active=False)
    registry = SafetyZoneRegistry(store, "user-1")

    zones = registry.refresh()

    assert [zone.zone_type for zone in zones] == ["work"]


def test_refresh_failure_keeps_cached_zones(store):
    seed_zone(store)
    registry = SafetyZoneRegistry(store, "user-1")
    registry.refresh()

    store.fail_queries = 1
    assert len(registry.refresh()) == 1


def test_add_zone_applies_default_radius(store):
    registry = SafetyZoneRegistry(store, "user-1")

    created = registry.add_zone(SafetyZoneCreate(
        label="Office", zone_type=ZoneType.WORK, latitude=6.45, longitude=3.39,
    ))

    assert created.radius_meters == 200
    assert created.is_active is True
    assert registry.zones[0].id == created.id


def test_add_zone_failure_returns_none(store):
    store.fail_inserts = 1
    registry = SafetyZoneRegistry(store, "user-1")

    assert registry.add_zone(SafetyZoneCreate(
        label="Home", zone_type=ZoneType.HOME, latitude=6.45, longitude=3.39,
    )) is None


def test_add_zone_unreadable_row_returns_none(store, monkeypatch):
    monkeypatch.setattr(store, "insert", lambda collection, fields: {"id": "z-1"})
    registry = SafetyZoneRegistry(store, "user-1")

    assert registry.add_zone(SafetyZoneCreate(
        label="Home", zone_type=ZoneType.HOME, latitude=6.45, longitude=3.39,
    )) is None
    assert registry.zones == []


def test_remove_zone_soft_deletes(store):
    row = seed_zone(store)
    registry = SafetyZoneRegistry(store, "user-1")
    registry.refresh()

    assert registry.remove_zone(row["id"]) is True
    assert registry.zones == []
    assert store.collections["safety_zones"][row["id"]]["is_active"] is False
    assert SafetyZoneRegistry(store, "user-1").refresh() == []


def test_remove_unknown_zone_is_rejected(store):
    registry = SafetyZoneRegistry(store, "user-1")
    assert registry.remove_zone("missing") is False
