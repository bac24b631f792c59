"""End-to-end tests for the SSE application."""

from __future__ import annotations

import asyncio
import json

from fastapi.routing import APIRoute
from fastapi.testclient import TestClient
from starlette.responses import StreamingResponse

from labs.config import Settings
from labs.eventos import MENSAJE_PERIODICO, NOTIFICACIONES
from labs.sse_server import create_app
from tests.helpers import DisconnectAfter, collect, parse_frame, split_frames


class StubRequest:
    """Only what the streaming endpoints read from the request."""

    def __init__(self, disconnect: DisconnectAfter) -> None:
        self.is_disconnected = disconnect


def _endpoint(app, path: str):
    return next(route.endpoint for route in app.routes if isinstance(route, APIRoute) and route.path == path)


def test_events_route_streams_until_client_disconnects(fast_settings: Settings) -> None:
    disconnect = DisconnectAfter(2)
    endpoint = _endpoint(create_app(fast_settings), "/events")

    response = asyncio.run(endpoint(StubRequest(disconnect)))

    assert isinstance(response, StreamingResponse)
    assert response.media_type == "text/event-stream"
    assert response.headers["cache-control"] == "no-cache"
    assert response.headers["x-accel-buffering"] == "no"

    frames = collect(response.body_iterator)
    assert frames[0] == ": conectado\n\n"
    data_frames = [json.loads(parse_frame(frame)["data"]) for frame in frames[1:]]
    assert len(data_frames) == 2
    assert all(payload["mensaje"] == MENSAJE_PERIODICO for payload in data_frames)
    assert disconnect.checked == 3


def test_notification_sends_three_named_frames_then_ends(sse_client: TestClient) -> None:
    response = sse_client.get("/notification")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/event-stream")
    assert response.headers["cache-control"] == "no-cache"

    frames = [parse_frame(frame) for frame in split_frames(response.text)]
    assert [frame["event"] for frame in frames] == ["info", "warning", "success"]
    for frame, (event, mensaje) in zip(frames, NOTIFICACIONES):
        assert json.loads(frame["data"]) == {"tipo": event, "mensaje": mensaje}


def test_cors_allows_any_origin(sse_client: TestClient) -> None:
    response = sse_client.get("/health", headers={"Origin": "http://otro-origen.test"})
    assert response.json() == {"status": "ok"}
    assert response.headers["access-control-allow-origin"] == "*"


def test_index_serves_browser_client(sse_client: TestClient) -> None:
    response = sse_client.get("/")
    assert response.status_code == 200
    assert "/static/client.js" in response.text


def test_static_assets(sse_client: TestClient) -> None:
    script = sse_client.get("/static/client.js")
    assert script.status_code == 200
    assert "new EventSource('/events')" in script.text
    assert sse_client.get("/static/style.css").status_code == 200
