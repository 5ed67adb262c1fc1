from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from schemas import ChatRequest, ChatResponse, ErrorResponse
from services import GeminiChatService


def build_chat_router(chat_service: GeminiChatService) -> APIRouter:
    """Create the chat router wired to the provided chat service."""
    router = APIRouter(tags=["chat"])

    @router.post(
        "/chat",
        response_model=ChatResponse,
        response_model_exclude_none=True,
        responses={
            status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
            status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
        },
        summary="Relay a chat message to Gemini, or echo it back when Gemini is unavailable.",
    )
    async def chat_endpoint(payload: ChatRequest) -> ChatResponse:
        try:
            return await chat_service.relay(payload.message)
        except ValueError as exc:  # Defensive guard; should be caught by request validation.
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    return router
