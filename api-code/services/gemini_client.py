from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional

try:
    import google.generativeai as genai
    from google.api_core import exceptions as google_exceptions
except ImportError as exc:  # pragma: no cover - dependency managed via pyproject.toml
    raise RuntimeError(
        "google-generativeai must be installed; see the dependencies in pyproject.toml."
    ) from exc

from domain import UpstreamFailureKind


logger = logging.getLogger("chat-relay.gemini")

DEFAULT_MODEL_NAME = "gemini-1.5-flash"
DEFAULT_TIMEOUT_SECONDS = 30.0
MAX_ERROR_CHARS = 400


class UpstreamError(Exception):
    """Gemini could not produce a usable reply."""

    def __init__(
        self,
        kind: UpstreamFailureKind,
        detail: str,
        *,
        status_code: Optional[int] = None,
    ) -> None:
        self.kind = kind
        self.detail = detail[:MAX_ERROR_CHARS]
        self.status_code = status_code
        super().__init__(self.detail)


class GeminiClient:
    """Thin async wrapper around a single Gemini generateContent call."""

    def __init__(
        self,
        api_key: str,
        model_name: str = DEFAULT_MODEL_NAME,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    ):
        if not api_key:
            raise ValueError("GeminiClient requires a non-empty API key.")
        self.api_key = api_key
        self.model_name = model_name
        self.timeout_seconds = timeout_seconds

    async def generate(self, prompt: str) -> str:
        try:
            response = await asyncio.wait_for(
                asyncio.to_thread(self._call_gemini, prompt),
                timeout=self.timeout_seconds,
            )
        except asyncio.TimeoutError as exc:
            raise UpstreamError(
                UpstreamFailureKind.TIMEOUT,
                f"Gemini request timed out after {self.timeout_seconds:g}s",
            ) from exc
        except google_exceptions.DeadlineExceeded as exc:
            raise UpstreamError(
                UpstreamFailureKind.TIMEOUT,
                f"Gemini request timed out after {self.timeout_seconds:g}s",
            ) from exc
        except google_exceptions.GoogleAPICallError as exc:
            code = int(exc.code) if exc.code is not None else None
            raise UpstreamError(
                UpstreamFailureKind.HTTP_STATUS,
                f"Gemini API error: {code if code is not None else 'unknown'} - {exc.message}",
                status_code=code,
            ) from exc
        except Exception as exc:  # pylint: disable=broad-except
            raise UpstreamError(
                UpstreamFailureKind.TRANSPORT,
                f"Gemini request failed: {type(exc).__name__}: {exc}",
            ) from exc

        return extract_reply_text(response)

    def _call_gemini(self, prompt: str) -> Any:
        genai.configure(api_key=self.api_key)
        model = genai.GenerativeModel(self.model_name)
        return model.generate_content(
            prompt,
            request_options={"timeout": self.timeout_seconds},
        )


def extract_reply_text(response: Any) -> str:
    """Return ``candidates[0].content.parts[0].text``.

    Raises ``UpstreamError`` with ``MALFORMED_PAYLOAD`` when the payload does
    not have that shape or that text is empty.
    """
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        raise UpstreamError(
            UpstreamFailureKind.MALFORMED_PAYLOAD,
            "Gemini response contained no candidates",
        )

    content = getattr(candidates[0], "content", None)
    parts = getattr(content, "parts", None) or []
    text = getattr(parts[0], "text", None) if parts else None
    if not text:
        raise UpstreamError(
            UpstreamFailureKind.MALFORMED_PAYLOAD,
            "Gemini response is missing reply text",
        )
    return text
