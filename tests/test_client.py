"""
Tests for ChatClient, exercised against the app through TestClient.
"""
import httpx
import pytest
from fastapi.testclient import TestClient

from main import app
from netzero_chat.client import (
    DEFAULT_CHAT_SERVER_URL,
    ApiError,
    ChatClient,
    get_chat_server_url,
)


@pytest.fixture
def chat_http():
    return TestClient(app, base_url="http://testserver/api/v1/chat")


def test_get_chat_welcome(chat_http):
    chat = ChatClient(http_client=chat_http)

    response = chat.get_chat_welcome("shop42")

    assert response.success is True
    assert response.message == "Welcome message generated successfully"
    assert response.data == {
        "chatId": "shop42",
        "userId": "anonymous",
        "message": "Welcome to shop42! How can I help you today?",
    }


def test_send_message_with_token(chat_http, make_token):
    chat = ChatClient(http_client=chat_http, token=make_token({"userId": "buyer-3"}))

    response = chat.send_message("tree market", "Is the mango sapling available?")

    assert response.data["chatId"] == "tree market"
    assert response.data["userId"] == "buyer-3"
    assert response.data["userMessage"] == "Is the mango sapling available?"
    assert response.data["botResponse"] == "Welcome to tree market! How can I help you today?"


def test_check_chat_health(chat_http):
    response = ChatClient(http_client=chat_http).check_chat_health()

    assert response.success is True
    assert response.data["status"] == "healthy"


def test_client_error_raises_api_error(chat_http):
    chat = ChatClient(http_client=chat_http)

    with pytest.raises(ApiError) as excinfo:
        chat.send_message("shop42", "")

    error = excinfo.value
    assert error.message == "Failed to send message"
    assert error.status_code == 400
    assert error.details["original_error"]["message"] == "Validation Error"


def test_transport_error_raises_api_error():
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    http = httpx.Client(
        base_url="http://chat.invalid/api/v1/chat", transport=httpx.MockTransport(refuse)
    )

    with pytest.raises(ApiError) as excinfo:
        ChatClient(http_client=http).check_chat_health()

    assert excinfo.value.message == "Chat server is not available"
    assert excinfo.value.status_code == 500
    assert "connection refused" in excinfo.value.details["original_error"]


def test_chat_server_url(monkeypatch):
    monkeypatch.delenv("CHAT_SERVER_URL", raising=False)
    assert get_chat_server_url() == DEFAULT_CHAT_SERVER_URL

    monkeypatch.setenv("CHAT_SERVER_URL", "https://chat.example.org/api/v1/chat")
    assert get_chat_server_url() == "https://chat.example.org/api/v1/chat"


def test_owned_client_is_closed():
    with ChatClient(base_url="http://localhost:3004/api/v1/chat") as chat:
        http = chat._client
    assert http.is_closed
