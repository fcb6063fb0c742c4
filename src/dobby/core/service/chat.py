"""Chat orchestration: persona -> context -> one completion (retried once)."""

from __future__ import annotations

import logging
import time
from collections.abc import Mapping
from typing import Any

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import BaseMessage, HumanMessage, SystemMessage

from dobby.configs.persona import PersonaConfig
from dobby.core.context import ContextEnricher, gather_context, select_enrichers
from dobby.core.metrics import (
    CHAT_DURATION_SECONDS,
    CHAT_REQUESTS_TOTAL,
    LLM_ATTEMPTS_TOTAL,
)
from dobby.core.personas import PersonaRegistry
from dobby.core.prompt import PromptBuilder
from dobby.infra.telemetry import (
    ATTR_LLM_ATTEMPT,
    ATTR_PERSONA_ID,
    ATTR_PERSONA_KNOWN,
    SPAN_CHAT_HANDLE,
    SPAN_LLM_ATTEMPT,
    tracer,
)

logger = logging.getLogger(__name__)

# First call plus exactly one retry, no backoff.
LLM_ATTEMPTS = 2


class DobbyError(Exception):
    """Base class for errors surfaced to the transport layer."""


class UpstreamCompletionFailure(DobbyError):
    """The LLM API failed on the first attempt and on the retry."""

    def __init__(self, attempts: int, cause: BaseException | None = None) -> None:
        super().__init__(f"Model call failed after {attempts} attempts: {cause!r}")
        self.attempts = attempts
        self.cause = cause


def message_text(message: Any) -> str:
    """Text of a chat model reply (string or content-block list)."""
    content = getattr(message, "content", message)
    if isinstance(content, str):
        return content
    parts = []
    for block in content or []:
        if isinstance(block, str):
            parts.append(block)
        elif isinstance(block, dict) and block.get("type") == "text":
            parts.append(block.get("text", ""))
    return "".join(parts)


class ChatOrchestrator:
    """Stateless single-turn chat over one persona.

    Every ``handle`` call builds its prompt from scratch; nothing is kept
    between requests.
    """

    def __init__(
        self,
        llm: BaseChatModel,
        personas: PersonaRegistry,
        enrichers: Mapping[str, ContextEnricher],
    ) -> None:
        self._llm = llm
        self._personas = personas
        self._enrichers = enrichers

    async def compose_instruction(self, persona: PersonaConfig) -> str:
        """Persona instruction plus any live context sections."""
        builder = PromptBuilder(persona.system_instruction)
        if persona.context_aware:
            selected = select_enrichers(self._enrichers, persona.context_sources)
            for result in await gather_context(selected):
                builder.add_context(result.source, result.label, result.text)
        return builder.build()

    async def build_messages(
        self, persona: PersonaConfig, message: str
    ) -> list[BaseMessage]:
        return [
            SystemMessage(content=await self.compose_instruction(persona)),
            HumanMessage(content=message),
        ]

    async def handle(self, persona_id: str, message: str) -> str:
        """Answer ``message`` as ``persona_id``.

        Raises:
            UpstreamCompletionFailure: both completion attempts failed.
        """
        persona = self._personas.lookup(persona_id)
        start = time.monotonic()
        status = "ok"
        with tracer.start_as_current_span(SPAN_CHAT_HANDLE) as span:
            span.set_attribute(ATTR_PERSONA_ID, persona.id)
            span.set_attribute(ATTR_PERSONA_KNOWN, persona_id in self._personas)
            try:
                messages = await self.build_messages(persona, message)
                return await self._complete(messages)
            except Exception:
                status = "error"
                raise
            finally:
                CHAT_REQUESTS_TOTAL.labels(persona=persona.id, status=status).inc()
                CHAT_DURATION_SECONDS.labels(persona=persona.id).observe(
                    time.monotonic() - start
                )

    async def _complete(self, messages: list[BaseMessage]) -> str:
        last_error: Exception | None = None
        for attempt in range(1, LLM_ATTEMPTS + 1):
            with tracer.start_as_current_span(SPAN_LLM_ATTEMPT) as span:
                span.set_attribute(ATTR_LLM_ATTEMPT, attempt)
                try:
                    reply = await self._llm.ainvoke(messages)
                except Exception as exc:
                    last_error = exc
                    LLM_ATTEMPTS_TOTAL.labels(attempt=str(attempt), outcome="error").inc()
                    span.record_exception(exc)
                    if attempt < LLM_ATTEMPTS:
                        logger.warning("First model call failed (%r), retrying once...", exc)
                    continue
            LLM_ATTEMPTS_TOTAL.labels(attempt=str(attempt), outcome="ok").inc()
            return message_text(reply)

        logger.error("Final failure talking to the model: %r", last_error)
        raise UpstreamCompletionFailure(LLM_ATTEMPTS, last_error)
