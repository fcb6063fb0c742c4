"""LLM client factory functions."""

import logging
from typing import Annotated

import httpx
from fastapi import Depends
from langchain_openai import ChatOpenAI

from dobby.configs.config import AppConfig, get_app_config
from dobby.configs.system import LLMConfig

logger = logging.getLogger(__name__)

# Sent when no key is configured; the provider answers 401 and the chat
# request ends in the regular model-call failure path.
_MISSING_API_KEY = "unset"


def build_llm(
    config: LLMConfig,
    http_async_client: httpx.AsyncClient | None = None,
) -> ChatOpenAI:
    """Create the chat model for ``POST {endpoint}/chat/completions``.

    ``max_retries=0``: the orchestrator owns the retry budget.
    ``top_k`` is not an OpenAI parameter, so it travels in the extra body.
    So does ``max_tokens``: langchain-openai renames its own field to
    ``max_completion_tokens``, which not every compatible provider reads.
    """
    return ChatOpenAI(
        base_url=config.endpoint,
        api_key=config.api_key or _MISSING_API_KEY,
        model=config.model_name,
        temperature=config.temperature,
        top_p=config.top_p,
        presence_penalty=config.presence_penalty,
        frequency_penalty=config.frequency_penalty,
        extra_body={"top_k": config.top_k, "max_tokens": config.max_tokens},
        max_retries=0,
        streaming=False,
        http_async_client=http_async_client,
    )


def get_llm(
    config: Annotated[AppConfig, Depends(get_app_config)],
) -> ChatOpenAI:
    """FastAPI dependency: chat model built from the process config."""
    return build_llm(config.llm)
