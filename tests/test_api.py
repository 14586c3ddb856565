"""
HTTP surface: routing, status codes and the JSON error body.
"""
from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from citizen_api.app import create_app
from citizen_api.core.config import Settings


def _settings(tmp_path, **overrides) -> Settings:
    values = dict(
        app_env="test",
        db_file=str(tmp_path / "api.sqlite"),
        cors_origins=("http://localhost:5173",),
        log_level="WARNING",
        rate_limit_per_minute=1000,
    )
    values.update(overrides)
    return Settings(**values)


@pytest.fixture()
def client(tmp_path):
    with TestClient(create_app(_settings(tmp_path))) as test_client:
        yield test_client


def test_health(client):
    resp = client.get("/api/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"
    assert resp.headers["X-Content-Type-Options"] == "nosniff"


def test_seeded_schemes_available(client):
    titles = {s["title"] for s in client.get("/api/schemes").json()}
    assert titles == {"Farmers Support Scheme", "Healthcare Assistance", "Education Scholarship"}


def test_scheme_crud(client):
    created = client.post(
        "/api/schemes", json={"title": "Widow Pension", "description": "Monthly support", "department": "Social"}
    )
    assert created.status_code == 201
    scheme_id = created.json()["id"]

    updated = client.put(f"/api/schemes/{scheme_id}", json={"department": "Welfare"})
    assert updated.json()["department"] == "Welfare"
    assert updated.json()["title"] == "Widow Pension"

    assert client.delete(f"/api/schemes/{scheme_id}").status_code == 204
    missing = client.get(f"/api/schemes/{scheme_id}")
    assert missing.status_code == 404
    assert missing.json() == {"error": "Scheme not found", "code": "not_found"}


def test_application_flow(client):
    created = client.post(
        "/api/applications",
        json={"schemeId": 1, "data": {"landAcres": 2}, "user": {"name": "Ramesh Patil", "email": "ramesh@example.com"}},
    )
    assert created.status_code == 201
    tracking_id = created.json()["tracking_id"]

    tracked = client.get(f"/api/applications/track/{tracking_id}")
    assert tracked.status_code == 200
    assert tracked.json()["status"] == "submitted"
    assert tracked.json()["data"] == {"landAcres": 2}

    patched = client.patch(f"/api/applications/{tracked.json()['id']}", json={"status": "approved"})
    assert patched.status_code == 200
    assert patched.json()["status"] == "approved"


def test_unknown_tracking_id_is_404(client):
    resp = client.get("/api/applications/track/T-MISSING-000000")
    assert resp.status_code == 404
    assert resp.json()["code"] == "not_found"


def test_unknown_scheme_reference_is_409(client):
    resp = client.post("/api/applications", json={"schemeId": 999, "data": {}})
    assert resp.status_code == 409
    assert resp.json()["code"] == "constraint_violation"


def test_invalid_status_rejected(client):
    created = client.post("/api/applications", json={"schemeId": 1, "data": {}}).json()
    resp = client.patch(f"/api/applications/{created['id']}", json={"status": "archived"})
    assert resp.status_code == 422


def test_grievance_feedback(client):
    grievance = client.post(
        "/api/grievances", json={"subject": "No water", "description": "Supply cut for a week"}
    ).json()
    assert grievance["status"] == "open"

    bad = client.post(f"/api/grievances/{grievance['id']}/feedback", json={"rating": 6})
    assert bad.status_code == 422

    good = client.post(f"/api/grievances/{grievance['id']}/feedback", json={"rating": 4, "comments": "Fixed"})
    assert good.status_code == 201
    assert len(client.get(f"/api/grievances/{grievance['id']}/feedback").json()) == 1

    assert client.delete(f"/api/grievances/{grievance['id']}").status_code == 204
    assert client.get(f"/api/grievances/{grievance['id']}/feedback").status_code == 404


def test_contact_and_report(client):
    assert client.post("/api/contact", json={"name": "Asha", "message": "Hello there"}).status_code == 201
    client.post("/api/applications", json={"schemeId": 2, "data": {}})
    report = client.get("/api/reports/benefit-distribution").json()
    assert report[0] == {"sector": "Health", "count": 1}


def test_dev_seed_twice_conflicts(client):
    first = client.post("/api/dev/seed-applications")
    assert first.status_code == 200
    assert first.json()["inserted"] == 11
    second = client.post("/api/dev/seed-applications")
    assert second.status_code == 409


def test_dev_routes_hidden_in_production(tmp_path):
    with TestClient(create_app(_settings(tmp_path, app_env="production"))) as prod:
        assert prod.post("/api/dev/seed-applications").status_code == 404
        assert "Strict-Transport-Security" in prod.get("/api/health").headers


def test_rate_limit(tmp_path):
    with TestClient(create_app(_settings(tmp_path, rate_limit_per_minute=2))) as limited:
        assert limited.get("/api/health").status_code == 200
        assert limited.get("/api/health").status_code == 200
        blocked = limited.get("/api/health")
        assert blocked.status_code == 429
        assert "Retry-After" in blocked.headers


def test_data_survives_restart(tmp_path):
    settings = _settings(tmp_path)
    with TestClient(create_app(settings)) as first:
        tracking_id = first.post("/api/applications", json={"schemeId": 1, "data": {"a": 1}}).json()["tracking_id"]
    with TestClient(create_app(settings)) as second:
        assert second.get(f"/api/applications/track/{tracking_id}").json()["data"] == {"a": 1}
