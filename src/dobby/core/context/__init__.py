"""Context enrichers: live third-party data rendered for the system prompt."""

import asyncio
import logging
from collections.abc import Mapping, Sequence

import httpx

from dobby.configs.config import AppConfig
from dobby.infra.telemetry import SPAN_CONTEXT_GATHER, tracer

from .base import ContextEnricher, ContextResult  # noqa: F401
from .crypto import CryptoEnricher
from .football import FootballEnricher

logger = logging.getLogger(__name__)


def build_enrichers(
    client: httpx.AsyncClient, config: AppConfig
) -> dict[str, ContextEnricher]:
    """All known enrichers, keyed by the name personas refer to them by."""
    enrichers: list[ContextEnricher] = [
        FootballEnricher(client, config.football),
        CryptoEnricher(client, config.crypto),
    ]
    return {enricher.name: enricher for enricher in enrichers}


def select_enrichers(
    enrichers: Mapping[str, ContextEnricher], sources: Sequence[str]
) -> list[ContextEnricher]:
    """Pick enrichers by name in ``sources`` order; unknown names are skipped."""
    selected = []
    for source in sources:
        enricher = enrichers.get(source)
        if enricher is None:
            logger.warning("Unknown context source %r; skipping.", source)
            continue
        selected.append(enricher)
    return selected


async def gather_context(enrichers: Sequence[ContextEnricher]) -> list[ContextResult]:
    """Run ``enrichers`` concurrently and wait for all of them.

    Results keep the order of ``enrichers``.  Each enricher converts its
    own upstream failures, so one failing never cancels the others.
    """
    if not enrichers:
        return []
    with tracer.start_as_current_span(SPAN_CONTEXT_GATHER):
        return list(await asyncio.gather(*(e.fetch() for e in enrichers)))
