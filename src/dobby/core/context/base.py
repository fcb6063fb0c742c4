"""Base classes for context enrichers.

A context enricher calls one read-only public API and renders the result
as a few lines of text for the system prompt.  ``fetch`` never raises for
upstream trouble: it reports one of three outcomes through
``ContextResult``:

* ``ok``: text rendered from fresh data.
* ``disabled``: the enricher lacks a credential; empty text, no I/O.
* ``failed``: the upstream call failed or returned garbage; the text is a
  short placeholder the model can relay to the user.
"""

from __future__ import annotations

import json
import logging
import time
from abc import ABC, abstractmethod
from typing import Literal

import httpx
from pydantic import BaseModel, ConfigDict

from dobby.core.metrics import CONTEXT_FETCH_SECONDS, CONTEXT_FETCHES_TOTAL
from dobby.infra.telemetry import (
    ATTR_CONTEXT_SOURCE,
    ATTR_CONTEXT_STATUS,
    SPAN_CONTEXT_FETCH,
    tracer,
)

logger = logging.getLogger(__name__)

ContextStatus = Literal["ok", "disabled", "failed"]

FAILURE_PLACEHOLDER = "(Unable to fetch latest {subject} info right now, check back soon!)"

# Transport errors, non-2xx statuses (raise_for_status), undecodable bodies
# and bodies missing the fields we read.
UPSTREAM_ERRORS: tuple[type[Exception], ...] = (
    httpx.HTTPError,
    json.JSONDecodeError,
    KeyError,
    TypeError,
    ValueError,
    AttributeError,
)


class ContextResult(BaseModel):
    """Outcome of one enricher run, owned by a single chat request."""

    model_config = ConfigDict(frozen=True)

    source: str
    label: str
    status: ContextStatus
    text: str = ""
    reason: str | None = None


class ContextEnricher(ABC):
    """Fetches live data from one upstream and renders it as text.

    Subclasses set ``name``, ``subject`` and ``label`` and implement
    ``_collect``; credential checks, error conversion, logging and
    metrics live here.
    """

    name: str = ""
    # Used in the failure placeholder: "latest <subject> info".
    subject: str = ""
    # Used in the prompt section header: "Use this current <label> ...".
    label: str = ""

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    @property
    def enabled(self) -> bool:
        return True

    async def fetch(self) -> ContextResult:
        with tracer.start_as_current_span(SPAN_CONTEXT_FETCH) as span:
            span.set_attribute(ATTR_CONTEXT_SOURCE, self.name)
            result = await self._fetch()
            span.set_attribute(ATTR_CONTEXT_STATUS, result.status)
            return result

    async def _fetch(self) -> ContextResult:
        if not self.enabled:
            CONTEXT_FETCHES_TOTAL.labels(source=self.name, status="disabled").inc()
            return ContextResult(source=self.name, label=self.label, status="disabled")

        start = time.monotonic()
        try:
            text = await self._collect()
        except UPSTREAM_ERRORS as exc:
            logger.warning("Error fetching %s data: %r", self.name, exc)
            CONTEXT_FETCHES_TOTAL.labels(source=self.name, status="failed").inc()
            return ContextResult(
                source=self.name,
                label=self.label,
                status="failed",
                text=FAILURE_PLACEHOLDER.format(subject=self.subject),
                reason=f"{type(exc).__name__}: {exc}",
            )
        finally:
            CONTEXT_FETCH_SECONDS.labels(source=self.name).observe(
                time.monotonic() - start
            )

        CONTEXT_FETCHES_TOTAL.labels(source=self.name, status="ok").inc()
        return ContextResult(source=self.name, label=self.label, status="ok", text=text)

    async def _get_json(
        self,
        url: str,
        params: dict[str, str | int] | None = None,
        headers: dict[str, str] | None = None,
    ):
        response = await self._client.get(url, params=params, headers=headers)
        response.raise_for_status()
        return response.json()

    @abstractmethod
    async def _collect(self) -> str:
        """Query the upstream and render the context text."""
        ...
