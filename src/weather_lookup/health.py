"""One-shot startup probe of the weather service."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .base import WeatherService
from .exceptions import WeatherServiceError
from .models import ServerHealth

HEALTH_FAILURE_MESSAGE = (
    "Unable to connect to weather server. Please ensure the server is running."
)


@dataclass(frozen=True, slots=True)
class HealthStatus:
    """Outcome of the startup probe; `health` is None when the probe failed."""

    health: ServerHealth | None = None
    error: str | None = None

    @property
    def online(self) -> bool:
        return self.health is not None

    def status_line(self) -> str:
        if self.health is None:
            return self.error or HEALTH_FAILURE_MESSAGE
        return f"Server Online • {self.health.cache_entries} cached cities"


UNKNOWN_HEALTH = HealthStatus()


class HealthProber:
    """Issue a single reachability probe; never retries and never gates search."""

    def __init__(self, client: WeatherService, logger: logging.Logger) -> None:
        self.client = client
        self.logger = logger
        self.status = UNKNOWN_HEALTH

    async def probe(self) -> HealthStatus:
        try:
            health = await self.client.fetch_health()
        except WeatherServiceError as exc:
            self.logger.warning("Health check failed: %s", exc)
            self.status = HealthStatus(health=None, error=HEALTH_FAILURE_MESSAGE)
        else:
            self.logger.info("Server health: %d cached entries", health.cache_entries)
            self.status = HealthStatus(health=health, error=None)
        return self.status
