"""FastAPI application entry point."""

import logging
from pathlib import Path
from typing import Annotated

import uvicorn
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from dobby.api.chat import health_router
from dobby.api.chat import router as chat_router
from dobby.api.exceptions import add_exception_handlers
from dobby.configs.config import AppConfig, get_app_config
from dobby.core.metrics import setup_metrics
from dobby.infra.http_client import build_http_client
from dobby.infra.lifespan import inject
from dobby.infra.logging import setup_logging
from dobby.infra.telemetry import init_telemetry

logger = logging.getLogger(__name__)

PUBLIC_DIR = Path(__file__).resolve().parent / "public"


def log_startup_checks(config: AppConfig) -> None:
    """Warn about missing credentials; never refuses to start."""
    if not config.llm.api_key:
        logger.warning(
            "No LLM API key set (DOBBY_LLM__API_KEY); every model call will fail."
        )
    if not config.football.api_key:
        logger.info(
            "No football API key set (DOBBY_FOOTBALL__API_KEY); "
            "football context disabled."
        )


@inject
async def lifespan(
    app: FastAPI,
    config: Annotated[AppConfig, Depends(get_app_config)],
    _http: Annotated[None, Depends(build_http_client)],
):
    log_startup_checks(config)
    logger.info(
        "Dobby Chat running on http://%s:%s (model=%s)",
        config.server.host,
        config.server.port,
        config.llm.model_name,
    )
    yield
    logger.info("Shutting down Dobby Chat...")


def get_app(config: AppConfig | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    if config is None:
        config = get_app_config()

    app = FastAPI(
        title="Dobby Chat",
        description="Persona chat relay with live football and crypto context",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.server.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    add_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(chat_router)

    setup_metrics(app, config.tracing)
    init_telemetry(app, config.tracing)

    # Catch-all static mount goes last so API routes take precedence.
    app.mount("/", StaticFiles(directory=PUBLIC_DIR, html=True), name="public")

    return app


app = get_app()


def main() -> None:
    config = get_app_config()
    setup_logging(config.logging)
    uvicorn.run(
        "dobby.app:app",
        host=config.server.host,
        port=config.server.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
