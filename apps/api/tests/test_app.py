import json
import logging
import re

from fastapi.testclient import TestClient

from roster.core.store import StoreError


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "ok"
    assert body["version"] == "0.1.0"
    assert body["db"]["status"] == "ok"
    assert body["db"]["kind"] == "sqlite"


def test_request_id_echoed_and_generated(client):
    resp = client.get("/health", headers={"X-Request-Id": "abc-123"})
    assert resp.headers["X-Request-Id"] == "abc-123"

    generated = client.get("/health").headers["X-Request-Id"]
    assert re.fullmatch(r"[0-9A-F]{32}", generated)


def test_error_envelope_carries_request_id(client):
    resp = client.get("/races/999", headers={"X-Request-Id": "req-1"})
    body = resp.json()
    assert set(body) == {"success", "error", "message", "details", "request_id"}
    assert body["request_id"] == "req-1"
    assert resp.headers["X-Request-Id"] == "req-1"


def test_unknown_route(client):
    resp = client.get("/dragons")
    assert resp.status_code == 404
    assert resp.json()["error"] == "not_found"


def test_store_failure_is_internal_error(client, store, monkeypatch):
    def boom(*args, **kwargs):
        raise StoreError("disk I/O error")

    monkeypatch.setattr(store, "find_many", boom)
    resp = client.get("/races")
    assert resp.status_code == 500
    assert resp.json()["error"] == "internal_error"


def test_unhandled_exception_hides_details(app, store, monkeypatch, caplog):
    def boom(*args, **kwargs):
        raise RuntimeError("secret stack detail")

    monkeypatch.setattr(store, "find_many", boom)
    with TestClient(app, raise_server_exceptions=False) as c:
        resp = c.get("/races", headers={"X-Request-Id": "req-500"})
    assert resp.status_code == 500
    body = resp.json()
    assert body["error"] == "internal_error"
    assert "secret" not in body["message"]
    assert body["request_id"] == "req-500"

    logged = [e for e in _events(caplog) if e["event"] == "http.request.unhandled"]
    assert logged[0]["request_id"] == "req-500"


def _events(caplog):
    out = []
    for rec in caplog.records:
        if rec.name == "roster":
            out.append(json.loads(rec.getMessage()))
    return out


def test_mutations_are_logged(client, caplog):
    caplog.set_level(logging.INFO, logger="roster")
    client.post("/races", json={"name": "Orc", "slug": "orc", "factionId": 2}, headers={"X-Request-Id": "log-1"})
    client.post("/races", json={"name": "Orc", "slug": "orc", "factionId": 2})

    events = _events(caplog)
    created = [e for e in events if e["event"] == "race.created"]
    assert len(created) == 1
    assert created[0]["request_id"] == "log-1"
    assert created[0]["level"] == "info"

    rejected = [e for e in events if e["event"] == "race.rejected"]
    assert rejected[0]["error"] == "duplicate"
    assert rejected[0]["level"] == "warning"
