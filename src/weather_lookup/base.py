"""Service-agnostic weather lookup interface."""

from __future__ import annotations

from abc import ABC, abstractmethod

from .models import ServerHealth, WeatherSnapshot


class WeatherService(ABC):
    """Base contract for the remote service used by the probe and the controller."""

    @abstractmethod
    async def fetch_health(self) -> ServerHealth:
        """Probe service reachability and return its health metadata."""

    @abstractmethod
    async def fetch_weather(self, city: str) -> WeatherSnapshot:
        """Fetch the current weather snapshot for a city name."""
