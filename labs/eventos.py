"""Server-Sent Events: framing helpers and the two stream schedules of the SSE lab.

A frame is a block of ``event:``/``data:`` lines closed by a blank line::

    event: info
    data: {"mensaje": "..."}

Comment frames start with ``:`` and are ignored by ``EventSource``; the
periodic stream sends one on open so proxies and browsers see bytes straight
away.
"""

from __future__ import annotations

import asyncio
import json
import random
from datetime import datetime, timezone
from typing import Any, AsyncIterator, Awaitable, Callable, Optional, Sequence, Tuple

from .logs import get_logger

log = get_logger(__name__)

MENSAJE_PERIODICO = "Actualización del servidor"
COMENTARIO_CONEXION = "conectado"

# (tipo de evento, mensaje) en el orden en que se envían.
NOTIFICACIONES: Tuple[Tuple[str, str], ...] = (
    ("info", "Procesando tu solicitud..."),
    ("warning", "La operación está tardando más de lo normal"),
    ("success", "¡Operación completada con éxito!"),
)


def format_frame(data: Any, event: Optional[str] = None) -> str:
    """Render one SSE frame. Non-string payloads are JSON encoded."""
    if not isinstance(data, str):
        data = json.dumps(data, ensure_ascii=False)
    lines = []
    if event:
        lines.append(f"event: {event}")
    # A payload with newlines needs one data: line per line.
    lines.extend(f"data: {line}" for line in data.split("\n"))
    return "\n".join(lines) + "\n\n"


def format_comment(text: str) -> str:
    return f": {text}\n\n"


def periodic_payload(rng: random.Random, clock: Callable[[], datetime]) -> dict:
    return {
        "timestamp": clock().isoformat(),
        "mensaje": MENSAJE_PERIODICO,
        "numero": rng.randrange(100),
    }


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


async def periodic_events(
    is_disconnected: Callable[[], Awaitable[bool]],
    interval: float = 2.0,
    rng: Optional[random.Random] = None,
    clock: Callable[[], datetime] = _utc_now,
) -> AsyncIterator[str]:
    """Yield the opening comment, then one data frame every ``interval`` seconds.

    Stops as soon as ``is_disconnected`` reports the client gone. When the
    server tears the stream down the pending sleep is cancelled instead, which
    ends the generator the same way.
    """
    rng = rng or random.Random()
    log.info("Cliente conectado a /events")
    sent = 0
    try:
        yield format_comment(COMENTARIO_CONEXION)
        while True:
            await asyncio.sleep(interval)
            if await is_disconnected():
                break
            yield format_frame(periodic_payload(rng, clock))
            sent += 1
    finally:
        log.info("Cliente desconectado de /events (%d eventos enviados)", sent)


async def delayed_notifications(
    delays: Sequence[float] = (3.0, 6.0, 9.0),
    is_disconnected: Optional[Callable[[], Awaitable[bool]]] = None,
) -> AsyncIterator[str]:
    """Yield the three notifications at their offsets from stream open, then end.

    Offsets are absolute: with ``(3, 6, 9)`` the frames leave at 3 s, 6 s and 9 s.
    """
    if len(delays) != len(NOTIFICACIONES):
        raise ValueError(f"Se esperaban {len(NOTIFICACIONES)} retardos, llegaron {len(delays)}")

    loop = asyncio.get_running_loop()
    opened_at = loop.time()
    log.info("Cliente conectado a /notification")
    for delay, (event, mensaje) in zip(delays, NOTIFICACIONES):
        await asyncio.sleep(max(0.0, opened_at + delay - loop.time()))
        if is_disconnected is not None and await is_disconnected():
            log.info("Cliente de /notification desconectado antes de '%s'", event)
            return
        yield format_frame({"tipo": event, "mensaje": mensaje}, event=event)
    log.info("Notificaciones enviadas, cerrando /notification")


__all__ = [
    "MENSAJE_PERIODICO",
    "NOTIFICACIONES",
    "delayed_notifications",
    "format_comment",
    "format_frame",
    "periodic_events",
    "periodic_payload",
]
