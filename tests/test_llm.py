"""The real ChatOpenAI client against a mocked LLM endpoint.

These run ``build_llm`` end to end through ``httpx.MockTransport`` so the
wire payload and the HTTP call count are checked, not just the number of
``ainvoke`` calls.
"""

from __future__ import annotations

import json

import httpx
import pytest

from dobby.configs.persona import ARI, BUILTIN_PERSONAS
from dobby.configs.system import LLMConfig
from dobby.core.llm import build_llm
from dobby.core.personas import PersonaRegistry
from dobby.core.service import ChatOrchestrator, UpstreamCompletionFailure


def _completion(content: str) -> dict:
    return {
        "id": "chatcmpl-test",
        "object": "chat.completion",
        "created": 1_700_000_000,
        "model": "test-model",
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": content},
                "finish_reason": "stop",
            }
        ],
        "usage": {"prompt_tokens": 5, "completion_tokens": 3, "total_tokens": 8},
    }


class FakeCompletionsAPI:
    """Answers ``/chat/completions`` from a list of status codes."""

    def __init__(self, *statuses: int, content: str = "hey babe") -> None:
        self.statuses = list(statuses) or [200]
        self.content = content
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        index = min(len(self.requests), len(self.statuses)) - 1
        status = self.statuses[index]
        if status != 200:
            return httpx.Response(status, json={"error": {"message": "unavailable"}})
        return httpx.Response(200, json=_completion(self.content))

    def bodies(self) -> list[dict]:
        return [json.loads(r.content) for r in self.requests]


def _orchestrator(api: FakeCompletionsAPI, config: LLMConfig) -> ChatOrchestrator:
    client = httpx.AsyncClient(transport=httpx.MockTransport(api))
    llm = build_llm(config, http_async_client=client)
    return ChatOrchestrator(llm, PersonaRegistry(BUILTIN_PERSONAS), {})


class TestChatCompletionsWire:
    @pytest.mark.asyncio
    async def test_request_payload(self):
        api = FakeCompletionsAPI()
        config = LLMConfig(api_key="k")

        reply = await _orchestrator(api, config).handle("ARI", "miss me?")

        assert reply == "hey babe"
        (request,) = api.requests
        assert request.method == "POST"
        assert str(request.url) == f"{config.endpoint}/chat/completions"
        assert request.headers["Authorization"] == "Bearer k"

        (body,) = api.bodies()
        assert body["model"] == config.model_name
        assert body["messages"] == [
            {"role": "system", "content": ARI.system_instruction},
            {"role": "user", "content": "miss me?"},
        ]
        assert body["temperature"] == 0.85
        assert body["max_tokens"] == 1024
        assert "max_completion_tokens" not in body
        assert body["top_p"] == 0.9
        assert body["top_k"] == 40
        assert body["presence_penalty"] == 0.5
        assert body["frequency_penalty"] == 0.3
        assert not body.get("stream")

    @pytest.mark.asyncio
    async def test_server_errors_stop_after_two_requests(self):
        api = FakeCompletionsAPI(503)

        with pytest.raises(UpstreamCompletionFailure):
            await _orchestrator(api, LLMConfig(api_key="k")).handle("ARI", "hi")

        assert len(api.requests) == 2
        assert api.bodies()[0] == api.bodies()[1]

    @pytest.mark.asyncio
    async def test_retry_after_one_server_error(self):
        api = FakeCompletionsAPI(500, 200, content="second time lucky")

        reply = await _orchestrator(api, LLMConfig(api_key="k")).handle("ARI", "hi")

        assert reply == "second time lucky"
        assert len(api.requests) == 2

    @pytest.mark.asyncio
    async def test_missing_key_still_sends_a_bearer_header(self):
        api = FakeCompletionsAPI(401)

        with pytest.raises(UpstreamCompletionFailure):
            await _orchestrator(api, LLMConfig(api_key="")).handle("ARI", "hi")

        assert len(api.requests) == 2
        assert api.requests[0].headers["Authorization"] == "Bearer unset"
