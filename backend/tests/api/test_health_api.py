"""Smoke tests for the health endpoint and the request-id plumbing."""

from __future__ import annotations

from tests.helpers.http import API


def test_health_reports_db_and_redis(client) -> None:
    resp = client.get(f"{API}/health")

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["status"] == "ok"
    assert body["db"] == "ok"
    assert body["redis"] == "ok"


def test_health_without_redis(app, db) -> None:
    resp = app.test_client().get(f"{API}/health")
    assert resp.get_json()["redis"] == "disabled"


def test_request_id_is_echoed(client) -> None:
    resp = client.get(f"{API}/health", headers={"X-Request-ID": "req-123"})
    assert resp.headers["X-Request-ID"] == "req-123"


def test_unknown_route_is_problem_json(client) -> None:
    resp = client.get(f"{API}/nope")

    assert resp.status_code == 404
    assert resp.mimetype == "application/problem+json"
    assert resp.get_json()["code"] == "not_found"
