"""Tests for the HTTP API."""

import pytest
from fastapi.testclient import TestClient

from voicecommands import api
from voicecommands.commands.router import DispatchResult


@pytest.fixture
def client():
    """Create a test client with fresh in-memory state."""
    api.reset_state()
    yield TestClient(api.app)
    api.reset_state()


def _say(client: TestClient, text: str, session_id: str = "s1") -> dict:
    response = client.post("/v1/command", json={"text": text}, headers={"X-Session-Id": session_id})
    assert response.status_code == 200
    return response.json()


def test_health(client) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


class TestParseEndpoint:
    def test_matched(self, client) -> None:
        response = client.post("/v1/parse", json={"text": "check my balance"})

        assert response.status_code == 200
        assert response.json() == {
            "matched": True,
            "intent": {"command": {"type": "check_balance"}, "confidence": 0.95, "original": "check my balance"},
        }

    def test_no_match(self, client) -> None:
        response = client.post("/v1/parse", json={"text": "asdkjhasdkjh"})
        assert response.json() == {"matched": False, "intent": None}

    def test_missing_text_is_rejected(self, client) -> None:
        assert client.post("/v1/parse", json={}).status_code == 422


class TestCommandEndpoint:
    """Test parse-and-dispatch through the interaction modes."""

    def test_builtin_command_executes(self, client) -> None:
        body = _say(client, "switch to preview mode")

        assert body["status"] == "execute"
        assert body["session_id"] == "s1"
        assert body["command"] == {"type": "set_interaction_mode", "mode": "preview"}
        assert body["result"]["ok"] is True
        assert body["result"]["message"] == "Switched to preview mode"

    def test_no_match(self, client) -> None:
        body = _say(client, "asdkjhasdkjh")

        assert body["status"] == "no_match"
        assert body["intent"] is None
        assert body["looks_like_question"] is False

    def test_session_id_is_issued(self, client) -> None:
        response = client.post("/v1/command", json={"text": "check my balance"})
        assert response.json()["session_id"]

    def test_question_fallback_waits_for_confirmation(self, client) -> None:
        body = _say(client, "What is the capital of France?")

        assert body["status"] == "needs_confirmation"
        assert body["intent"]["command"] == {"type": "ask_atlas", "question": "What is the capital of France?"}
        assert body["looks_like_question"] is True

    def test_unhandled_command_reports_failure(self, client) -> None:
        body = _say(client, "check my balance")

        assert body["status"] == "execute"
        assert body["result"]["ok"] is False
        assert body["result"]["message"] == "No handler registered for check_balance"

    def test_mode_is_kept_per_session(self, client) -> None:
        _say(client, "switch to preview mode", session_id="s1")

        assert _say(client, "check my balance", session_id="s1")["status"] == "needs_confirmation"
        assert _say(client, "check my balance", session_id="s2")["status"] == "execute"

    def test_undo_through_api(self, client) -> None:
        created: list[str] = []

        async def create(command, context):
            created.append(command.title)
            return DispatchResult(ok=True, command_type=command.type)

        async def remove(command, context):
            created.remove(command.title)
            return DispatchResult(ok=True, command_type=command.type)

        api.get_command_router().register("create_task", create, undo=remove)

        assert _say(client, "create a task to call mom")["result"]["ok"] is True
        assert created == ["call mom"]

        body = _say(client, "undo that")
        assert body["result"]["message"] == "Undid create task"
        assert created == []


class TestConfirmation:
    """Test the preview-and-confirm flow."""

    def test_confirm_dispatches_once(self, client) -> None:
        _say(client, "switch to preview mode")
        body = _say(client, "check my balance")

        pending = body["pending"]
        assert pending["preview"] == {"description": "Check balance", "impact": "low", "reversible": True}
        assert body["command"] is None

        response = client.post("/v1/commands/confirm", json={"token": pending["token"]})
        assert response.status_code == 200
        confirmed = response.json()
        assert confirmed["status"] == "execute"
        assert confirmed["session_id"] == "s1"
        assert confirmed["command"] == {"type": "check_balance"}

        again = client.post("/v1/commands/confirm", json={"token": pending["token"]})
        assert again.status_code == 404
        assert again.json() == {"error": "not_found", "message": "Pending command not found or expired"}

    def test_cancel(self, client) -> None:
        _say(client, "switch to preview mode")
        token = _say(client, "check my balance")["pending"]["token"]

        response = client.post("/v1/commands/cancel", json={"token": token})
        assert response.status_code == 200
        assert response.json() == {"cancelled": True}

        assert client.post("/v1/commands/cancel", json={"token": token}).status_code == 404
        assert client.post("/v1/commands/confirm", json={"token": token}).status_code == 404

    def test_unknown_token(self, client) -> None:
        response = client.post("/v1/commands/confirm", json={"token": "nope"})

        assert response.status_code == 404
        assert response.json()["error"] == "not_found"


class TestCapabilitiesAndMetrics:
    def test_capabilities(self, client) -> None:
        response = client.get("/v1/capabilities")

        assert response.status_code == 200
        categories = {entry["category"]: entry for entry in response.json()["categories"]}
        assert "create_task" in categories["tasks"]["commands"]
        assert categories["tasks"]["examples"]

    def test_metrics_disabled_by_default(self, client) -> None:
        response = client.get("/v1/metrics")

        assert response.status_code == 404
        assert response.json()["error"] == "not_found"

    def test_metrics_snapshot(self, client, monkeypatch) -> None:
        monkeypatch.setenv("VOICECOMMANDS_ENABLE_METRICS", "true")
        _say(client, "check my balance")
        _say(client, "asdkjhasdkjh")

        snapshot = client.get("/v1/metrics").json()
        assert snapshot["disposition_counts"] == {"execute": 1, "no_match": 1}
        assert snapshot["parse_counts"] == {"check_balance": 1, "no_match": 1}
        assert snapshot["command_latency_ms"]["count"] == 2
