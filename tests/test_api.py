"""
HTTP surface tests against the in-memory store.
"""

from tests.fakes import route_body, wait_until_sync

USER = {"X-User-Id": "user-1"}


def test_root_and_health(client):
    assert client.get("/").json()["status"] == "running"

    health = client.get("/health").json()
    assert health["status"] == "healthy"
    assert health["alert_sync_active"] is True
    assert health["alert_stream_connected"] is True


def test_db_health(client):
    assert client.get("/health/db").json()["connected"] is True


def test_db_health_reports_store_failure(client, store):
    store.fail_queries = 1
    assert client.get("/health/db").status_code == 503


def test_panic_policies(client):
    table = {entry["context"]: entry["config"] for entry in client.get("/panic/policies").json()}

    assert set(table) == {"home_emergency", "travel_emergency", "silent_tracking"}
    assert table["silent_tracking"]["notify_authorities"] is False
    assert table["travel_emergency"]["broadcast_radius_meters"] == 5000


def test_panic_context_uses_callers_zones(client, store):
    store.seed("safety_zones", {
        "user_id": "user-1", "label": "Home", "zone_type": "home",
        "latitude": 6.5244, "longitude": 3.3792, "radius_meters": 200,
    })
    signals = {"latitude": 6.5244, "longitude": 3.3792, "speed": 50, "hour": 14}

    with_identity = client.post("/panic/context", json=signals, headers=USER).json()
    anonymous = client.post("/panic/context", json=signals).json()

    assert with_identity["context"] == "home_emergency"
    assert with_identity["config"]["broadcast_radius_meters"] == 1000
    assert anonymous["context"] == "travel_emergency"


def test_panic_context_rejects_invalid_hour(client):
    assert client.post("/panic/context", json={"speed": 0, "hour": 24}).status_code == 422


def test_panic_context_accepts_unknown_speed(client):
    response = client.post("/panic/context", json={"speed": -1, "hour": 23})

    assert response.status_code == 200
    assert response.json()["context"] == "silent_tracking"


def test_escalation_requires_identity(client, store):
    body = {"entity_id": "s-1", "entity_type": "panic_session", "escalation_target": "local_authority"}

    assert client.post("/escalations", json=body).status_code == 401
    assert store.insert_calls == []


def test_escalation_create_then_list(client):
    body = {
        "entity_id": "s-1",
        "entity_type": "panic_session",
        "escalation_target": "local_authority",
        "reason": "Watcher unreachable",
    }

    created = client.post("/escalations", json=body, headers=USER)
    assert created.status_code == 201
    assert created.json()["status"] == "pending"
    assert created.json()["user_id"] == "user-1"

    mine = client.get("/escalations/mine", headers=USER).json()
    assert [e["id"] for e in mine] == [created.json()["id"]]
    assert client.get("/escalations/mine").json() == []


def test_escalation_store_failure_is_reported(client, store):
    store.fail_inserts = 1
    body = {"entity_id": "m-1", "entity_type": "marker", "escalation_target": "community_leader"}

    response = client.post("/escalations", json=body, headers=USER)

    assert response.status_code == 502
    assert response.json()["detail"] == "Failed to escalate"


def test_created_alert_reaches_live_cache(client):
    assert client.get("/alerts/live").json() == {"alerts": [], "loading": False}

    created = client.post(
        "/alerts",
        json={"type": "panic", "latitude": 6.5, "longitude": 3.4, "description": "Help"},
        headers=USER,
    ).json()
    wait_until_sync(lambda: len(client.get("/alerts/live").json()["alerts"]) == 1)
    assert client.get("/alerts/live").json()["alerts"][0]["id"] == created["id"]

    assert client.post(f"/alerts/{created['id']}/resolve", headers=USER).status_code == 200
    wait_until_sync(lambda: client.get("/alerts/live").json()["alerts"] == [])


def test_alert_commands_require_identity(client):
    response = client.post("/alerts", json={"type": "panic", "latitude": 6.5, "longitude": 3.4})
    assert response.status_code == 401


def test_manual_refetch(client, store):
    store.seed("alerts", {"type": "amber", "latitude": 6.5, "longitude": 3.4})

    refreshed = client.post("/alerts/refetch").json()

    assert len(refreshed["alerts"]) == 1


def test_eta_without_token_is_null(client, routing_provider):
    params = {"origin_lat": 6.52, "origin_lng": 3.37, "destination_lat": 6.45, "destination_lng": 3.39}

    assert client.get("/eta", params=params).json() is None
    assert routing_provider.calls == []


def test_eta_with_route(client, routing_provider):
    routing_provider.enabled = True
    routing_provider.response = route_body(duration=125, congestion=["heavy"] * 2 + ["low"] * 8)
    params = {"origin_lat": 6.52, "origin_lng": 3.37, "destination_lat": 6.45, "destination_lng": 3.39}

    result = client.get("/eta", params=params).json()

    assert result["duration_minutes"] == 3
    assert result["traffic_level"] == "moderate"


def test_eta_malformed_route_is_null(client, routing_provider):
    routing_provider.enabled = True
    routing_provider.response = {"routes": [{"duration": -120, "legs": {"0": {}}}]}
    params = {"origin_lat": 6.52, "origin_lng": 3.37, "destination_lat": 6.45, "destination_lng": 3.39}

    response = client.get("/eta", params=params)

    assert response.status_code == 200
    assert response.json() is None


def test_eta_missing_destination_is_null(client, routing_provider):
    routing_provider.enabled = True
    routing_provider.response = route_body()

    assert client.get("/eta", params={"origin_lat": 6.52, "origin_lng": 3.37}).json() is None
    assert routing_provider.calls == []


def test_zone_lifecycle(client):
    created = client.post(
        "/zones",
        json={"label": "Home", "zone_type": "home", "latitude": 6.52, "longitude": 3.37},
        headers=USER,
    )
    assert created.status_code == 201
    zone_id = created.json()["id"]

    assert [z["id"] for z in client.get("/zones", headers=USER).json()] == [zone_id]
    assert client.delete(f"/zones/{zone_id}", headers=USER).status_code == 200
    assert client.get("/zones", headers=USER).json() == []
    assert client.delete(f"/zones/{zone_id}", headers=USER).status_code == 404
