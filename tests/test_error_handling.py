"""
Tests for error classification, the error middleware and envelope formatting.
"""
import pytest
from authlib.jose.errors import BadSignatureError, DecodeError, ExpiredTokenError
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.exc import IntegrityError

from netzero_chat.api.exceptions import InvalidIdError, RateLimitExceededException
from netzero_chat.api.models import ApiResult, ChatMessageRequest
from netzero_chat.api.responses import build_envelope, envelope_response, format_payload
from netzero_chat.middleware.error_handling import (
    ErrorHandlingMiddleware,
    classify_exception,
    register_exception_handlers,
)


def _integrity_error(code: int) -> IntegrityError:
    return IntegrityError("INSERT INTO chats ...", {}, Exception(code, "constraint failed"))


def _validation_error():
    try:
        ChatMessageRequest(message="")
    except Exception as e:
        return e


ERRORS = {
    "validation": _validation_error(),
    "invalid-id": InvalidIdError("chat id must be numeric"),
    "expired": ExpiredTokenError(),
    "decode": DecodeError("bad segments"),
    "signature": BadSignatureError(result=None),
    "duplicate": _integrity_error(1062),
    "foreign-key": _integrity_error(1452),
    "other-integrity": _integrity_error(1048),
    "unexpected": RuntimeError("kaboom"),
}

EXPECTED = {
    "validation": (400, "Validation Error"),
    "invalid-id": (400, "Invalid ID format"),
    "expired": (401, "Token expired"),
    "decode": (401, "Invalid token"),
    "signature": (401, "Invalid token"),
    "duplicate": (409, "Duplicate entry"),
    "foreign-key": (400, "Referenced record does not exist"),
    "other-integrity": (500, "Internal Server Error"),
    "unexpected": (500, "Internal Server Error"),
}


def _failing_app() -> FastAPI:
    app = FastAPI()
    app.add_middleware(ErrorHandlingMiddleware)
    register_exception_handlers(app)

    @app.get("/fail/{kind}")
    async def fail(kind: str):
        raise ERRORS[kind]

    @app.get("/limited")
    async def limited():
        raise RateLimitExceededException()

    return app


@pytest.fixture
def failing_client():
    return TestClient(_failing_app())


# ── classify_exception ───────────────────────────────────────

@pytest.mark.parametrize("kind", sorted(ERRORS))
def test_classify_exception(kind):
    assert classify_exception(ERRORS[kind]) == EXPECTED[kind]


# ── ErrorHandlingMiddleware ──────────────────────────────────

class TestErrorHandlingMiddleware:
    @pytest.mark.parametrize("kind", sorted(ERRORS))
    def test_errors_become_envelopes(self, failing_client, kind):
        status_code, message = EXPECTED[kind]

        resp = failing_client.get(f"/fail/{kind}")

        assert resp.status_code == status_code
        body = resp.json()
        assert body["success"] is False
        assert body["message"] == message
        assert body["timestamp"]

    def test_development_includes_stack(self, failing_client):
        body = failing_client.get("/fail/unexpected").json()

        assert body["error"]["name"] == "RuntimeError"
        assert body["error"]["message"] == "kaboom"
        assert "Traceback" in body["error"]["stack"]

    def test_production_hides_details(self, failing_client, monkeypatch):
        from netzero_chat.config.settings import get_settings

        monkeypatch.setenv("NODE_ENV", "production")
        get_settings.cache_clear()

        body = failing_client.get("/fail/unexpected").json()

        assert body["message"] == "Internal Server Error"
        assert "error" not in body
        assert "kaboom" not in str(body)

    def test_http_exceptions_keep_their_status(self, failing_client):
        resp = failing_client.get("/limited")

        assert resp.status_code == 429
        assert resp.json()["message"] == "Too many chat requests. Please try again later"

    def test_not_found_includes_query(self, failing_client):
        resp = failing_client.get("/missing?x=1")

        assert resp.status_code == 404
        assert resp.json()["message"] == "Chat API endpoint not found: GET /missing?x=1"


# ── Envelope formatting ──────────────────────────────────────

class TestEnvelope:
    def test_success_envelope(self):
        envelope = build_envelope(200, message="done", data={"a": 1})

        assert envelope["success"] is True
        assert envelope["message"] == "done"
        assert envelope["data"] == {"a": 1}
        assert "error" not in envelope

    def test_default_messages(self):
        assert build_envelope(201)["message"] == "Request successful"
        assert build_envelope(404)["message"] == "Request failed"
        assert build_envelope(399)["success"] is True
        assert build_envelope(400)["success"] is False

    def test_error_drops_data(self):
        envelope = build_envelope(500, data={"a": 1}, error={"message": "x"})

        assert "data" not in envelope
        assert envelope["error"] == {"message": "x"}

    def test_existing_envelope_passes_through(self):
        payload = {"success": False, "message": "custom", "extra": 1}

        assert format_payload(payload, 200, message="ignored") is payload

    def test_plain_payload_is_wrapped(self):
        envelope = format_payload(["a", "b"], 200)

        assert envelope["success"] is True
        assert envelope["data"] == ["a", "b"]

    def test_envelope_response_uses_camel_case(self):
        from netzero_chat.api.models import ChatWelcomeResponse

        result = ApiResult.ok(
            ChatWelcomeResponse(chat_id="c", user_id="u", message="m"), message="ok"
        )

        resp = envelope_response(result)

        assert resp.status_code == 200
        assert b'"chatId":"c"' in resp.body
        assert b'"userId":"u"' in resp.body
