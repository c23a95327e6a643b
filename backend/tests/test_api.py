"""Tests for the HTTP API with services swapped out."""

import pytest
from fastapi.testclient import TestClient

from config import Settings, get_settings
from dependencies import get_assistant_service, get_session_store
from llm import LLMError, LLMRateLimitError
from main import app
from services.chat_session import GREETING
from services.session_store import SessionStore


@pytest.fixture
def store(mock_assistant):
    return SessionStore(mock_assistant)


@pytest.fixture
def client(mock_assistant, store):
    app.dependency_overrides[get_assistant_service] = lambda: mock_assistant
    app.dependency_overrides[get_session_store] = lambda: store
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


class TestHealth:
    """Tests for GET /api/health."""

    def test_health(self, client):
        response = client.get("/api/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["active_sessions"] == 0
        assert body["models"]["primary"]

    def test_unknown_route(self, client):
        response = client.get("/api/nope")

        assert response.status_code == 404
        assert response.json()["code"] == "1003"

    def test_method_not_allowed_keeps_status(self, client):
        response = client.delete("/api/health")

        assert response.status_code == 405
        body = response.json()
        assert body["code"] == "1000"
        assert body["success"] is False
        assert body["error_details"] is None
        assert response.headers["X-Request-ID"] == body["request_id"]


class TestChatEndpoints:
    """Tests for the stateless chat endpoints."""

    def test_ask(self, client, mock_assistant):
        response = client.post(
            "/api/chat/ask", json={"question": "What is a mapping?", "mode": "standard"}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["code"] == "0001"
        answer = body["data"]["answer"]
        assert answer == "Mappings move data between sources and targets."
        mock_assistant.ask.assert_awaited_once()
        assert mock_assistant.ask.call_args.args[0] == "What is a mapping?"

    def test_ask_empty_question(self, client, mock_assistant):
        response = client.post("/api/chat/ask", json={"question": ""})

        assert response.status_code == 422
        assert response.json()["code"] == "1000"
        mock_assistant.ask.assert_not_awaited()

    def test_ask_unknown_mode(self, client):
        response = client.post(
            "/api/chat/ask", json={"question": "What is IDMC?", "mode": "psychic"}
        )

        assert response.status_code == 422
        body = response.json()
        assert body["message"] == "Validation failed for field 'mode'"
        assert body["error_details"]["validation_errors"]

    def test_ask_llm_failure(self, client, mock_assistant):
        mock_assistant.ask.side_effect = LLMError("upstream")

        response = client.post("/api/chat/ask", json={"question": "What is IDMC?"})

        assert response.status_code == 502
        assert response.json()["code"] == "3000"

    def test_ask_rate_limited(self, client, mock_assistant):
        mock_assistant.ask.side_effect = LLMRateLimitError("slow down")

        response = client.post("/api/chat/ask", json={"question": "What is IDMC?"})

        assert response.status_code == 429
        assert response.json()["code"] == "3001"

    def test_attachment(self, client, mock_assistant, png_payload):
        response = client.post(
            "/api/chat/attachment",
            json={"attachment_payload": png_payload, "filename": "../arch.png"},
        )

        assert response.status_code == 200
        assert response.json()["data"]["mode"] == "attachment-analysis"
        args = mock_assistant.analyze_attachment.call_args.args
        assert args == ("", png_payload, None, "arch.png")

    def test_attachment_too_large(self, client, mock_assistant):
        app.dependency_overrides[get_settings] = lambda: Settings(
            anthropic_api_key="test-anthropic-key", max_attachment_size_mb=1
        )

        response = client.post(
            "/api/chat/attachment",
            json={"attachment_payload": "A" * (2 * 1024 * 1024)},
        )

        assert response.status_code == 413
        assert response.json()["code"] == "1002"
        mock_assistant.analyze_attachment.assert_not_awaited()


class TestSessionEndpoints:
    """Tests for the stateful session endpoints."""

    def test_new_session_has_greeting(self, client):
        response = client.get("/api/session")

        assert response.status_code == 200
        assert "session_id" in response.cookies
        session = response.json()["data"]["session"]
        assert session["state"] == "idle"
        assert session["mode"] == "comprehensive"
        assert session["pending_attachment"] is None
        assert [m["content"] for m in session["messages"]] == [GREETING]

    def test_session_persists_across_requests(self, client, store):
        client.get("/api/session")
        client.put("/api/session/mode", json={"mode": "contextual"})

        session = client.get("/api/session").json()["data"]["session"]

        assert session["mode"] == "contextual"
        assert len(store) == 1

    def test_submit_message(self, client, mock_assistant):
        client.put("/api/session/mode", json={"mode": "standard"})

        response = client.post("/api/session/messages", json={"text": "What is CDI?"})

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["reply"]["role"] == "assistant"
        roles = [m["role"] for m in data["session"]["messages"]]
        assert roles == ["assistant", "user", "assistant"]
        assert mock_assistant.ask.call_args.args[1].value == "standard"

    def test_submit_failure_returns_apology(self, client, mock_assistant):
        mock_assistant.ask.side_effect = LLMError("upstream")

        response = client.post("/api/session/messages", json={"text": "What is CDI?"})

        assert response.status_code == 200
        assert response.json()["data"]["reply"]["content"].startswith(
            "I encountered an error"
        )

    def test_empty_submit_rejected(self, client):
        response = client.post("/api/session/messages", json={"text": "  "})

        assert response.status_code == 422
        assert response.json()["code"] == "1000"

    def test_staged_attachment_flow(self, client, mock_assistant, png_payload):
        response = client.put(
            "/api/session/attachment",
            json={"attachment_payload": png_payload, "filename": "arch.png"},
        )
        pending = response.json()["data"]["session"]["pending_attachment"]
        assert pending == {"name": "arch.png", "mime_type": "image/png"}

        locked = client.put("/api/session/mode", json={"mode": "standard"})
        assert locked.status_code == 409
        assert locked.json()["code"] == "1008"

        response = client.post("/api/session/messages", json={"text": ""})

        assert response.status_code == 200
        session = response.json()["data"]["session"]
        assert session["pending_attachment"] is None
        assert session["messages"][1]["content"] == "Analyzing arch.png..."
        mock_assistant.analyze_attachment.assert_awaited_once()
        mock_assistant.ask.assert_not_awaited()

    def test_clear_attachment(self, client, png_payload):
        client.put(
            "/api/session/attachment",
            json={"attachment_payload": png_payload, "filename": "arch.png"},
        )

        response = client.delete("/api/session/attachment")

        assert response.json()["data"]["session"]["pending_attachment"] is None
        mode_change = client.put("/api/session/mode", json={"mode": "standard"})
        assert mode_change.status_code == 200

    def test_reset(self, client):
        client.post("/api/session/messages", json={"text": "What is CDI?"})

        response = client.delete("/api/session")

        assert response.status_code == 200
        assert response.json()["code"] == "0002"
        messages = response.json()["data"]["session"]["messages"]
        assert [m["content"] for m in messages] == [GREETING]
