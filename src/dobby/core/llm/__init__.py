"""LLM client object as a LangChain chat model."""

from .deps import build_llm, get_llm  # noqa: F401
