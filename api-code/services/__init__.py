from .chat_service import GeminiChatService
from .gemini_client import GeminiClient, UpstreamError, extract_reply_text

__all__ = ["GeminiChatService", "GeminiClient", "UpstreamError", "extract_reply_text"]
