from __future__ import annotations

from pathlib import Path

from fastapi import APIRouter
from fastapi.responses import HTMLResponse


STATIC_DIR = Path(__file__).resolve().parent / "static"


def build_page_router(page_path: Path = STATIC_DIR / "index.html") -> APIRouter:
    """Serve the browser chat widget at the root path."""
    router = APIRouter(include_in_schema=False)
    html = page_path.read_text(encoding="utf-8")

    @router.get("/", response_class=HTMLResponse)
    async def index() -> HTMLResponse:
        return HTMLResponse(content=html)

    return router
