"""Chat API endpoint implementation."""

from fastapi import APIRouter

from .deps import ChatServiceDep, PersonaRegistryDep
from .models import ChatRequest, ChatResponse, ErrorResponse, HealthResponse

router = APIRouter(prefix="/api", tags=["chat"])
health_router = APIRouter(tags=["health"])


@router.post(
    "/chat/{persona_id}",
    response_model=ChatResponse,
    responses={500: {"model": ErrorResponse}},
)
async def chat(
    persona_id: str,
    chat_request: ChatRequest,
    chat_service: ChatServiceDep,
) -> ChatResponse:
    """
    Answer one message as the given persona.

    Unknown persona ids fall back to a generic assistant.  When the model
    call fails twice the ``UpstreamCompletionFailure`` handler turns it
    into ``500 {"error": ...}``.
    """
    reply = await chat_service.handle(persona_id, chat_request.message)
    return ChatResponse(reply=reply)


@router.get("/personas")
async def list_personas(personas: PersonaRegistryDep) -> list[str]:
    """Registered persona ids (the browser widget's ``?bot=`` values)."""
    return personas.ids


@health_router.get("/health")
async def health() -> HealthResponse:
    return HealthResponse()
