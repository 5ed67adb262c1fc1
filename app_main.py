from __future__ import annotations

import logging
import sys
from pathlib import Path
from time import perf_counter
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException


PROJECT_ROOT = Path(__file__).resolve().parent
API_CODE_PATH = PROJECT_ROOT / "api-code"
if str(API_CODE_PATH) not in sys.path:
    sys.path.insert(0, str(API_CODE_PATH))

from env_loader import load_local_env  # noqa: E402
from routers import build_chat_router, build_health_router, build_page_router  # noqa: E402
from schemas import MISSING_MESSAGE_ERROR  # noqa: E402
from services import GeminiChatService  # noqa: E402
from settings import Settings, get_settings  # noqa: E402


INTERNAL_ERROR_MESSAGE = "Internal server error"
BODY_PARSE_ERROR_DETAIL = "There was an error parsing the body"
KEEP_ALIVE_TIMEOUT_SECONDS = 120

logger = logging.getLogger("chat-relay")
http_logger = logging.getLogger("chat-relay.http")


def create_app(
    settings: Optional[Settings] = None,
    chat_service: Optional[GeminiChatService] = None,
) -> FastAPI:
    """Build the relay application from explicit settings."""
    settings = settings or get_settings()
    if chat_service is None:
        chat_service = GeminiChatService(
            api_key=settings.gemini_api_key,
            model_name=settings.gemini_model_name,
            timeout_seconds=settings.gemini_timeout_seconds,
        )

    app = FastAPI(
        title="Chat Relay API",
        version="0.1.0",
        description="Relays chat messages to Gemini and serves a browser chat widget.",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = perf_counter()
        response = None
        try:
            response = await call_next(request)
            return response
        finally:
            duration = (perf_counter() - start) * 1000
            status_code = response.status_code if response is not None else 500
            http_logger.info(
                "%s %s status=%s %.1fms",
                request.method,
                request.url.path,
                status_code,
                duration,
            )

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = exc.errors()
        if any(error.get("type") == "json_invalid" for error in errors):
            # An unreadable body never reached message validation.
            logger.error("Unparseable request body on %s: %s", request.url.path, errors)
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={"error": INTERNAL_ERROR_MESSAGE},
            )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": MISSING_MESSAGE_ERROR},
        )

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        if exc.detail == BODY_PARSE_ERROR_DETAIL and exc.__cause__ is not None:
            # Raised by FastAPI when the body cannot even be decoded.
            logger.error(
                "Unreadable request body on %s: %r", request.url.path, exc.__cause__
            )
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={"error": INTERNAL_ERROR_MESSAGE},
            )
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Error in %s %s", request.method, request.url.path, exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": INTERNAL_ERROR_MESSAGE},
        )

    app.include_router(build_page_router())
    app.include_router(build_chat_router(chat_service))
    app.include_router(build_health_router(chat_service))

    logger.info(
        "Chat relay ready in %s mode (model=%s).",
        chat_service.mode.value,
        chat_service.model_name,
    )
    return app


load_local_env()
settings = get_settings()

logging.basicConfig(level=settings.log_level.upper())

app = create_app(settings)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app_main:app",
        host=settings.host,
        port=settings.port,
        timeout_keep_alive=KEEP_ALIVE_TIMEOUT_SECONDS,
    )
