from __future__ import annotations

from enum import Enum


class ReplySource(str, Enum):
    UPSTREAM = "upstream"
    FALLBACK = "fallback"
    STATIC = "static"


class UpstreamFailureKind(str, Enum):
    HTTP_STATUS = "http_status"
    TIMEOUT = "timeout"
    TRANSPORT = "transport"
    MALFORMED_PAYLOAD = "malformed_payload"


STATIC_REPLY_PREFIX = "Echo (No API key configured): "
FALLBACK_REPLY_PREFIX = "Echo (Gemini unavailable): "
