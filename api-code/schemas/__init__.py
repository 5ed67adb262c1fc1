from .chat import (
    MISSING_MESSAGE_ERROR,
    ChatRequest,
    ChatResponse,
    ErrorResponse,
    HealthResponse,
)

__all__ = [
    "MISSING_MESSAGE_ERROR",
    "ChatRequest",
    "ChatResponse",
    "ErrorResponse",
    "HealthResponse",
]
