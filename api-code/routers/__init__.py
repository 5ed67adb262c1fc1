from .chat import build_chat_router
from .health import build_health_router
from .page import build_page_router

__all__ = ["build_chat_router", "build_health_router", "build_page_router"]
