"""
Pytest configuration for the web labs.

Provides fixtures for:
- Settings with millisecond-scale SSE timings
- A fresh seeded catalog per test
- TestClient instances built from the application factories
"""

from __future__ import annotations

from typing import Generator

import pytest
from fastapi.testclient import TestClient

from labs.config import Settings
from labs.productos import CatalogoProductos
from labs.productos_server import create_app as create_productos_app
from labs.sse_server import create_app as create_sse_app


@pytest.fixture
def fast_settings() -> Settings:
    """Settings with short SSE timings so streams finish within a test."""
    return Settings(
        events_interval_ms=10,
        notification_delays_ms=[30, 60, 90],
        log_level="DEBUG",
    )


@pytest.fixture
def catalogo() -> CatalogoProductos:
    return CatalogoProductos.con_semilla()


@pytest.fixture
def productos_client(catalogo: CatalogoProductos, fast_settings: Settings) -> Generator[TestClient, None, None]:
    app = create_productos_app(catalogo, fast_settings)
    with TestClient(app) as client:
        yield client


@pytest.fixture
def sse_client(fast_settings: Settings) -> Generator[TestClient, None, None]:
    with TestClient(create_sse_app(fast_settings)) as client:
        yield client
