"""Pydantic models for the chat API."""

from pydantic import BaseModel, Field

CHAT_MESSAGE_MAX_LENGTH = 4096

MODEL_CALL_FAILED_MESSAGE = "Something went wrong with the model call."


class ChatRequest(BaseModel):
    """Request body for ``POST /api/chat/{persona_id}``."""

    message: str = Field(
        description="User message to answer", max_length=CHAT_MESSAGE_MAX_LENGTH
    )


class ChatResponse(BaseModel):
    """Successful single-turn reply."""

    reply: str = Field(description="Model reply text")


class ErrorResponse(BaseModel):
    """Body returned when the model call failed after its retry."""

    error: str = Field(description="Human readable error message")


class HealthResponse(BaseModel):
    status: str = "ok"
