"""
Tests for the root-level routes: /health, / and /db-test.
"""
from netzero_chat.config import database


def test_health(client):
    resp = client.get("/health")

    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    assert body["message"] == "NetZero Chat Server is running"
    assert body["service"] == "netzero-chat-server"
    assert body["environment"] == "development"
    assert body["port"] == 3004
    assert body["uptime"] >= 0
    assert body["memory"]["maxRssKb"] > 0
    assert "data" not in body  # already an envelope, passed through unchanged


def test_api_information(client):
    resp = client.get("/")

    assert resp.status_code == 200
    body = resp.json()
    assert body["message"] == "Welcome to NetZero Chat API"
    assert body["documentation"]["chat"] == "/api/v1/chat"
    assert body["endpoints"]["chat"]["welcome"] == "GET /api/v1/chat/:chatid"
    assert body["endpoints"]["chat"]["sendMessage"] == "POST /api/v1/chat/:chatid/message"
    assert body["usage"]["rateLimit"] == "100 requests per 60 seconds per IP"


def test_request_logging_sets_process_time(client):
    resp = client.get("/api/v1/chat/shop42")

    assert float(resp.headers["X-Process-Time"]) >= 0


class TestDatabaseDiagnostics:
    def test_connected(self, client, monkeypatch):
        monkeypatch.setattr(database, "check_connection", lambda: True)

        resp = client.get("/db-test")

        assert resp.status_code == 200
        body = resp.json()
        assert body["success"] is True
        assert body["message"] == "Chat Server - Database connection successful"
        assert body["database"] == {
            "host": "127.0.0.1",
            "port": 3306,
            "database": "netzero",
            "user": "netzeroadmin",
        }

    def test_connection_failed(self, client, monkeypatch):
        monkeypatch.setattr(database, "check_connection", lambda: False)

        resp = client.get("/db-test")

        assert resp.status_code == 500
        assert resp.json() == {
            "success": False,
            "message": "Chat Server - Database connection failed",
            "timestamp": resp.json()["timestamp"],
        }

    def test_connection_error(self, client, monkeypatch):
        def broken():
            raise OSError("socket closed")

        monkeypatch.setattr(database, "check_connection", broken)

        resp = client.get("/db-test")

        assert resp.status_code == 500
        assert resp.json()["message"] == "Chat Server - Database connection error"
        assert resp.json()["error"] == "socket closed"


def test_lifespan_probes_and_closes_database(monkeypatch):
    from fastapi.testclient import TestClient

    from main import app

    calls = []
    monkeypatch.setattr(database, "check_connection", lambda: calls.append("probe") or False)
    monkeypatch.setattr(database, "close_pool", lambda: calls.append("close"))

    with TestClient(app) as client:
        assert client.get("/health").status_code == 200

    assert calls == ["probe", "close"]


def test_openapi_documents_envelopes(client):
    resp = client.get("/openapi.json")

    assert resp.status_code == 200
    schemas = resp.json()["components"]["schemas"]
    assert "ResponseEnvelope" in schemas
    assert "ErrorResponse" in schemas
    assert "/api/v1/chat/{chat_id}/message" in resp.json()["paths"]
