"""
Tests for the seed script's store writer.
"""

from scripts.seed_db import write_to_store


SEED = {
    "alerts": [{"type": "amber", "latitude": 6.5, "longitude": 3.4}],
    "safety_zones": [{"user_id": "u", "label": "Home", "zone_type": "home",
                      "latitude": 6.5, "longitude": 3.4, "radius_meters": 200}],
    "reports": [{"title": "not ours"}],
}


def test_dry_run_writes_nothing(store):
    assert write_to_store(store, SEED) == 0
    assert store.insert_calls == []


def test_apply_uses_store_defaults_and_skips_unknown(store):
    assert write_to_store(store, SEED, apply=True) == 2

    alert = next(iter(store.collections["alerts"].values()))
    assert alert["status"] == "active"
    assert "reports" not in store.collections


def test_failed_insert_is_not_counted(store):
    store.fail_inserts = 1
    assert write_to_store(store, SEED, apply=True) == 1
