"""Unit tests for settings loading."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from labs.config import Settings, get_settings


def test_defaults() -> None:
    settings = Settings(_env_file=None)
    assert settings.sse_port == 3000
    assert settings.productos_port == 3001
    assert settings.events_interval == 2.0
    assert settings.notification_delays == [3.0, 6.0, 9.0]
    assert settings.cors_origins == ["*"]


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LABS_EVENTS_INTERVAL_MS", "500")
    monkeypatch.setenv("LABS_NOTIFICATION_DELAYS_MS", "[100, 200, 300]")
    monkeypatch.setenv("LABS_PRODUCTOS_PORT", "8081")
    settings = Settings(_env_file=None)
    assert settings.events_interval == 0.5
    assert settings.notification_delays == [0.1, 0.2, 0.3]
    assert settings.productos_port == 8081


@pytest.mark.parametrize("delays", [[1000, 2000], [3000, 2000, 1000], [-1, 0, 1]])
def test_invalid_notification_delays(delays: list) -> None:
    with pytest.raises(ValidationError):
        Settings(_env_file=None, notification_delays_ms=delays)


def test_interval_must_be_positive() -> None:
    with pytest.raises(ValidationError):
        Settings(_env_file=None, events_interval_ms=0)


def test_get_settings_is_cached() -> None:
    get_settings.cache_clear()
    assert get_settings() is get_settings()
    get_settings.cache_clear()
