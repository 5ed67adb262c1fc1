from __future__ import annotations

import logging
from typing import Optional

from domain import FALLBACK_REPLY_PREFIX, STATIC_REPLY_PREFIX, ReplySource
from schemas import MISSING_MESSAGE_ERROR, ChatResponse

from .gemini_client import DEFAULT_MODEL_NAME, DEFAULT_TIMEOUT_SECONDS, GeminiClient, UpstreamError


logger = logging.getLogger("chat-relay.chat")


class GeminiChatService:
    """Relays chat messages to Gemini, degrading to echo replies when it cannot."""

    def __init__(
        self,
        api_key: Optional[str],
        *,
        model_name: str = DEFAULT_MODEL_NAME,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        client: Optional[GeminiClient] = None,
    ):
        self.api_key = (api_key or "").strip() or None
        self.model_name = model_name
        if not self.api_key:
            # Without a key the relay stays in static mode, even with a client injected.
            client = None
        elif client is None:
            client = GeminiClient(self.api_key, model_name, timeout_seconds)
        self.client = client

    @property
    def configured(self) -> bool:
        return self.api_key is not None

    @property
    def mode(self) -> ReplySource:
        return ReplySource.UPSTREAM if self.configured else ReplySource.STATIC

    async def relay(self, message: str) -> ChatResponse:
        if not message or not message.strip():
            raise ValueError(MISSING_MESSAGE_ERROR)

        if self.client is None:
            return self._static_response(message)

        try:
            reply = await self.client.generate(message)
        except UpstreamError as exc:
            logger.warning(
                "Gemini unavailable (%s), using fallback: %s", exc.kind.value, exc.detail
            )
            return self._fallback_response(message, exc.detail)

        return ChatResponse(reply=reply, source=ReplySource.UPSTREAM)

    @staticmethod
    def _static_response(message: str) -> ChatResponse:
        return ChatResponse(reply=STATIC_REPLY_PREFIX + message, source=ReplySource.STATIC)

    @staticmethod
    def _fallback_response(message: str, error: str) -> ChatResponse:
        return ChatResponse(
            reply=FALLBACK_REPLY_PREFIX + message,
            source=ReplySource.FALLBACK,
            error=error or "Gemini request failed",
        )
