from __future__ import annotations

from fastapi import APIRouter

from schemas import HealthResponse
from services import GeminiChatService


def build_health_router(chat_service: GeminiChatService) -> APIRouter:
    router = APIRouter()

    @router.get("/healthz", response_model=HealthResponse)
    async def healthcheck() -> HealthResponse:
        # Reports configuration only; Gemini itself is never probed here.
        return HealthResponse(
            status="ok",
            mode=chat_service.mode,
            model=chat_service.model_name,
        )

    return router
