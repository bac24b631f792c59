"""Configuración de los laboratorios leída del entorno (prefijo ``LABS_``) o de ``.env``."""

from __future__ import annotations

from functools import lru_cache
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Servidores
    host: str = "127.0.0.1"
    sse_port: int = 3000
    productos_port: int = 3001
    reload: bool = False

    # Logging
    log_level: str = "INFO"
    json_logs: bool = False

    # Laboratorio SSE
    events_interval_ms: int = Field(default=2000, gt=0)
    notification_delays_ms: List[int] = Field(default_factory=lambda: [3000, 6000, 9000])
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])

    model_config = SettingsConfigDict(
        env_prefix="LABS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("notification_delays_ms")
    @classmethod
    def _three_ordered_delays(cls, value: List[int]) -> List[int]:
        if len(value) != 3:
            raise ValueError("Se necesitan exactamente tres retardos (info, warning, success)")
        if any(delay < 0 for delay in value) or value != sorted(value):
            raise ValueError("Los retardos deben ser positivos y crecientes")
        return value

    @property
    def events_interval(self) -> float:
        return self.events_interval_ms / 1000.0

    @property
    def notification_delays(self) -> List[float]:
        return [delay / 1000.0 for delay in self.notification_delays_ms]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Instancia cacheada para no volver a leer el entorno en cada petición."""
    return Settings()


__all__ = ["Settings", "get_settings"]
