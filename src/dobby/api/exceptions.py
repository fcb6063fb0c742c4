"""Global exception handlers."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from dobby.core.service import UpstreamCompletionFailure

from .models import MODEL_CALL_FAILED_MESSAGE, ErrorResponse


def add_exception_handlers(app: FastAPI) -> None:
    """Register custom exception handlers on ``app``.

    Runs while the app is being built, before the middleware stack (and
    its exception middleware) is assembled.
    """

    @app.exception_handler(UpstreamCompletionFailure)
    async def handle_upstream_completion_failure(
        request: Request, exc: UpstreamCompletionFailure
    ) -> JSONResponse:
        # The cause stays in the logs; callers only learn the call failed.
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(error=MODEL_CALL_FAILED_MESSAGE).model_dump(),
        )
