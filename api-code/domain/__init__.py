from .reply_sources import (
    FALLBACK_REPLY_PREFIX,
    STATIC_REPLY_PREFIX,
    ReplySource,
    UpstreamFailureKind,
)

__all__ = [
    "FALLBACK_REPLY_PREFIX",
    "STATIC_REPLY_PREFIX",
    "ReplySource",
    "UpstreamFailureKind",
]
