"""Shared outbound HTTP client.

Pure infra, no domain imports.  One ``httpx.AsyncClient`` is opened in
the lifespan and reused by every context enricher; it keeps httpx's
default timeout.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from typing import Annotated

import httpx
from fastapi import Depends, FastAPI, Request

from .lifespan import get_app

logger = logging.getLogger(__name__)

USER_AGENT = "dobby-chat/0.1"


def new_http_client(**kwargs) -> httpx.AsyncClient:
    headers = {"User-Agent": USER_AGENT, **kwargs.pop("headers", {})}
    return httpx.AsyncClient(headers=headers, **kwargs)


async def build_http_client(
    app: Annotated[FastAPI, Depends(get_app)],
) -> AsyncGenerator[None, None]:
    """Open the shared client on ``app.state`` and close it on shutdown."""
    client = new_http_client()
    app.state.http_client = client
    logger.info("Shared HTTP client opened")
    try:
        yield
    finally:
        await client.aclose()
        logger.info("Shared HTTP client closed")


def get_http_client(request: Request) -> httpx.AsyncClient:
    """FastAPI dependency: reads the client from ``app.state``."""
    return request.app.state.http_client
