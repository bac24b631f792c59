"""Laboratorio A: servidor de Server-Sent Events.

Expone dos flujos ``text/event-stream`` y el cliente de navegador que los
consume:

- ``/events``: un comentario de conexión y luego un evento de datos cada
  intervalo mientras el cliente siga conectado.
- ``/notification``: tres notificaciones con nombre (info, warning, success)
  en instantes fijos; después el flujo se cierra.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, HTMLResponse, StreamingResponse
from fastapi.staticfiles import StaticFiles

from . import __version__
from .config import Settings, get_settings
from .eventos import delayed_notifications, periodic_events
from .logs import get_logger

BASE_DIR = Path(__file__).resolve().parent
STATIC_DIR = BASE_DIR / "static"
INDEX_HTML = STATIC_DIR / "index.html"

SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
    "X-Accel-Buffering": "no",
}

log = get_logger(__name__)


class SSEApplication:
    """Compone la app FastAPI del laboratorio SSE."""

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self.settings = settings or get_settings()

        self.app = FastAPI(title="Laboratorio SSE", version=__version__)
        self.app.add_middleware(
            CORSMiddleware,
            allow_origins=self.settings.cors_origins,
            allow_methods=["GET"],
            allow_headers=["*"],
        )
        self.app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")
        self._configure_routes()

    # ------------------------------------------------------------------
    # Route wiring
    # ------------------------------------------------------------------

    def _configure_routes(self) -> None:
        app = self.app
        settings = self.settings

        @app.get("/health")
        async def health() -> Dict[str, str]:
            return {"status": "ok"}

        @app.get("/", response_class=HTMLResponse)
        async def root():
            if not INDEX_HTML.exists():
                return HTMLResponse("index.html not found", status_code=404)
            return FileResponse(str(INDEX_HTML))

        @app.get("/events")
        async def events(request: Request):
            stream = periodic_events(request.is_disconnected, interval=settings.events_interval)
            return StreamingResponse(stream, media_type="text/event-stream", headers=SSE_HEADERS)

        @app.get("/notification")
        async def notification(request: Request):
            stream = delayed_notifications(settings.notification_delays, request.is_disconnected)
            return StreamingResponse(stream, media_type="text/event-stream", headers=SSE_HEADERS)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Factory for ASGI servers."""
    return SSEApplication(settings).app
