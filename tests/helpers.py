"""Helpers shared by the SSE tests."""

from __future__ import annotations

import asyncio
from typing import AsyncIterator, Dict, List


def collect(stream: AsyncIterator[str], limit: int = 100) -> List[str]:
    """Drain an async frame generator (at most ``limit`` items) on a fresh loop."""

    async def _run() -> List[str]:
        frames: List[str] = []
        async for frame in stream:
            frames.append(frame)
            if len(frames) >= limit:
                break
        await stream.aclose()  # type: ignore[attr-defined]
        return frames

    return asyncio.run(_run())


def split_frames(body: str) -> List[str]:
    """Split a raw event-stream body into frames (without the blank line)."""
    return [chunk for chunk in body.split("\n\n") if chunk]


def parse_frame(frame: str) -> Dict[str, str]:
    """Map field name to value; repeated ``data`` lines are joined with newlines."""
    fields: Dict[str, str] = {}
    for line in frame.rstrip("\n").split("\n"):
        name, _, value = line.partition(": ")
        if name == "data" and "data" in fields:
            fields["data"] += "\n" + value
        else:
            fields[name] = value
    return fields


class DisconnectAfter:
    """Async ``is_disconnected`` stand-in that reports a disconnect on call number ``calls + 1``."""

    def __init__(self, calls: int) -> None:
        self.remaining = calls
        self.checked = 0

    async def __call__(self) -> bool:
        self.checked += 1
        if self.remaining <= 0:
            return True
        self.remaining -= 1
        return False
