"""FastAPI dependency factories for the chat service.

``get_http_client`` reads from ``app.state`` (created in lifespan).
``get_chat_service`` is a per-request ``Depends`` factory with an
explicit parameter chain; tests override ``get_llm``, ``get_http_client``
or ``get_app_config`` via ``app.dependency_overrides``.
"""

from typing import Annotated

import httpx
from fastapi import Depends
from langchain_core.language_models import BaseChatModel

from dobby.configs.config import AppConfig, get_app_config
from dobby.core.context import ContextEnricher, build_enrichers
from dobby.core.llm import get_llm
from dobby.core.personas import PersonaRegistry
from dobby.infra.http_client import get_http_client

from .chat import ChatOrchestrator


def get_persona_registry(
    config: Annotated[AppConfig, Depends(get_app_config)],
) -> PersonaRegistry:
    return PersonaRegistry(config.personas)


def get_enrichers(
    client: Annotated[httpx.AsyncClient, Depends(get_http_client)],
    config: Annotated[AppConfig, Depends(get_app_config)],
) -> dict[str, ContextEnricher]:
    return build_enrichers(client, config)


def get_chat_service(
    llm: Annotated[BaseChatModel, Depends(get_llm)],
    personas: Annotated[PersonaRegistry, Depends(get_persona_registry)],
    enrichers: Annotated[dict[str, ContextEnricher], Depends(get_enrichers)],
) -> ChatOrchestrator:
    """Create the orchestrator for one request.

    All collaborators are injected explicitly via ``Depends()``.
    """
    return ChatOrchestrator(llm, personas, enrichers)
