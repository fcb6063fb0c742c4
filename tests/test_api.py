"""HTTP tests for the chat relay, with fake model and fake upstream APIs."""

from __future__ import annotations

import pytest
from conftest import COINGECKO_HOST, FOOTBALL_HOST, FakeChatModel, FakeUpstreams, make_config
from fastapi.testclient import TestClient

from dobby.app import app
from dobby.configs.config import get_app_config
from dobby.configs.persona import ANI, ARI, DEFAULT_SYSTEM_INSTRUCTION
from dobby.core.llm import get_llm
from dobby.infra.http_client import get_http_client

MODEL_CALL_FAILED = {"error": "Something went wrong with the model call."}


class Harness:
    """Wires fakes into the module-level app via ``dependency_overrides``."""

    def __init__(self) -> None:
        self.llm = FakeChatModel()
        self.upstreams = FakeUpstreams()
        self.config = make_config()
        self.client = TestClient(app)

        app.dependency_overrides[get_llm] = lambda: self.llm
        app.dependency_overrides[get_http_client] = lambda: self.upstreams.client()
        app.dependency_overrides[get_app_config] = lambda: self.config

    def chat(self, persona_id: str, message: str = "hello"):
        return self.client.post(f"/api/chat/{persona_id}", json={"message": message})


@pytest.fixture()
def harness():
    yield Harness()
    app.dependency_overrides.clear()


class TestChatEndpoint:
    def test_plain_persona(self, harness):
        response = harness.chat("ARI", "hello")

        assert response.status_code == 200
        assert response.json() == {"reply": "Yo, what's good?"}
        assert harness.llm.system_prompts == [ARI.system_instruction]
        assert harness.llm.calls[0][1].content == "hello"
        assert harness.upstreams.requests == []

    def test_context_aware_persona(self, harness):
        response = harness.chat("ANI", "who's winning?")

        assert response.status_code == 200
        (system,) = harness.llm.system_prompts
        assert system.startswith(ANI.system_instruction)
        assert "Use this current Premier League info" in system
        assert "BITCOIN: $" in system
        assert harness.upstreams.requests_to(FOOTBALL_HOST)
        assert harness.upstreams.requests_to(COINGECKO_HOST)

    def test_unknown_persona_uses_default(self, harness):
        response = harness.chat("unknownbot", "hi")

        assert response.status_code == 200
        assert response.json()["reply"]
        assert harness.llm.system_prompts == [DEFAULT_SYSTEM_INSTRUCTION]
        assert harness.upstreams.requests == []

    def test_two_model_failures_return_500(self, harness):
        harness.llm = FakeChatModel(RuntimeError("down"), RuntimeError("down again"))
        response = harness.chat("ARI")

        assert response.status_code == 500
        assert response.json() == MODEL_CALL_FAILED
        assert len(harness.llm.calls) == 2

    def test_retry_recovers(self, harness):
        harness.llm = FakeChatModel(RuntimeError("blip"), "second try")
        response = harness.chat("ARI")

        assert response.status_code == 200
        assert response.json() == {"reply": "second try"}
        assert len(harness.llm.calls) == 2

    def test_upstream_failures_still_answer(self, harness):
        harness.upstreams = FakeUpstreams(fail={FOOTBALL_HOST, COINGECKO_HOST})
        response = harness.chat("ANI")

        assert response.status_code == 200
        (system,) = harness.llm.system_prompts
        assert "Unable to fetch latest football info" in system
        assert "Unable to fetch latest crypto info" in system

    def test_missing_football_key(self, harness):
        harness.config = make_config(football_key="")
        response = harness.chat("ANI")

        assert response.status_code == 200
        assert harness.upstreams.requests_to(FOOTBALL_HOST) == []
        assert "Premier League info" not in harness.llm.system_prompts[0]

    def test_missing_message_is_rejected(self, harness):
        response = harness.client.post("/api/chat/ARI", json={})

        assert response.status_code == 422
        assert harness.llm.calls == []


class TestAuxiliaryRoutes:
    def test_health(self, harness):
        response = harness.client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    def test_personas(self, harness):
        response = harness.client.get("/api/personas")
        assert response.status_code == 200
        assert response.json() == ["ANI", "ARI"]

    def test_static_widget(self, harness):
        response = harness.client.get("/")
        assert response.status_code == 200
        assert "messageInput" in response.text

    def test_metrics(self, harness):
        harness.chat("ARI")
        response = harness.client.get("/metrics")
        assert response.status_code == 200
        assert "dobby_chat_requests_total" in response.text
