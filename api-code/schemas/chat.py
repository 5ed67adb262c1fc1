from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from domain import ReplySource


MISSING_MESSAGE_ERROR = "Message field is required"


class ChatRequest(BaseModel):
    message: str = Field(..., min_length=1, description="User message for the chatbot.")

    @field_validator("message")
    @classmethod
    def _reject_blank_message(cls, value: str) -> str:
        # Only the emptiness check trims; the text itself is relayed verbatim.
        if not value.strip():
            raise ValueError(MISSING_MESSAGE_ERROR)
        return value


class ChatResponse(BaseModel):
    reply: str = Field(..., description="Chatbot-generated or echoed response.")
    source: ReplySource = Field(..., description="Which path produced the reply.")
    error: Optional[str] = Field(
        default=None, description="Upstream failure description, set only for fallback replies."
    )


class ErrorResponse(BaseModel):
    error: str = Field(..., description="Human-readable error summary.")


class HealthResponse(BaseModel):
    status: str = Field(..., description="Always ok while the process serves requests.")
    mode: ReplySource = Field(..., description="upstream when an API key is configured, else static.")
    model: str = Field(..., description="Configured Gemini model name.")
