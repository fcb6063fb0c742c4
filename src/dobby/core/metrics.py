"""Prometheus metrics for Dobby Chat.

Business metrics that complement the auto-instrumented HTTP metrics
provided by ``prometheus-fastapi-instrumentator``.  All metrics use the
``dobby_`` prefix.
"""

import logging

from fastapi import FastAPI
from prometheus_client import Counter, Histogram
from prometheus_fastapi_instrumentator import Instrumentator

from dobby.configs.system import TracingConfig

logger = logging.getLogger(__name__)

METRICS_ENDPOINT = "/metrics"

# ---------------------------------------------------------------------------
# Chat request metrics
# ---------------------------------------------------------------------------

CHAT_REQUESTS_TOTAL = Counter(
    "dobby_chat_requests_total",
    "Total chat requests handled, by resolved persona and outcome",
    ["persona", "status"],  # status: ok | error
)

CHAT_DURATION_SECONDS = Histogram(
    "dobby_chat_duration_seconds",
    "End-to-end duration of a chat request (context + completion)",
    ["persona"],
    buckets=(0.5, 1, 2, 5, 10, 20, 30, 60, 120),
)

# ---------------------------------------------------------------------------
# LLM metrics
# ---------------------------------------------------------------------------

LLM_ATTEMPTS_TOTAL = Counter(
    "dobby_llm_attempts_total",
    "Completion attempts against the LLM API",
    ["attempt", "outcome"],  # attempt: 1 | 2, outcome: ok | error
)

# ---------------------------------------------------------------------------
# Context enrichment metrics
# ---------------------------------------------------------------------------

CONTEXT_FETCHES_TOTAL = Counter(
    "dobby_context_fetches_total",
    "Context enricher runs, by source and outcome",
    ["source", "status"],  # status: ok | disabled | failed
)

CONTEXT_FETCH_SECONDS = Histogram(
    "dobby_context_fetch_seconds",
    "Latency of a context enricher run (all of its upstream calls)",
    ["source"],
    buckets=(0.1, 0.25, 0.5, 1, 2, 5, 10),
)


def setup_metrics(app: FastAPI, config: TracingConfig) -> None:
    """Attach HTTP instrumentation and the ``/metrics`` endpoint.

    Must run while the app is being built: the instrumentator adds
    middleware.
    """
    Instrumentator(
        excluded_handlers=config.excluded_urls,
    ).instrument(app).expose(app, endpoint=METRICS_ENDPOINT)

    logger.info("Prometheus metrics initialised")
