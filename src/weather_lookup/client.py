"""Async HTTP client for the remote weather service."""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from .base import WeatherService
from .config import Settings
from .exceptions import (
    SERVICE_FALLBACK_MESSAGE,
    ConnectivityError,
    EmptyCityError,
    MalformedResponseError,
    ServiceError,
)
from .models import ServerHealth, WeatherSnapshot


class WeatherServiceClient(WeatherService):
    """Fetches health metadata and city snapshots from the weather service."""

    def __init__(self, settings: Settings, logger: logging.Logger) -> None:
        self.settings = settings
        self.logger = logger
        self._client = httpx.AsyncClient(
            base_url=settings.base_url,
            timeout=settings.weather_timeout_seconds,
            headers={
                "Accept": "application/json",
                "User-Agent": "weather-lookup/0.1",
            },
        )

    async def __aenter__(self) -> WeatherServiceClient:
        return self

    async def __aexit__(self, exc_type: Any, exc: Any, exc_tb: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close underlying HTTP client."""
        await self._client.aclose()

    async def fetch_health(self) -> ServerHealth:
        payload = await self._request_json("/health", context="health probe")
        try:
            return ServerHealth.model_validate(payload)
        except ValidationError as exc:
            raise MalformedResponseError(
                f"Weather service health payload invalid: {exc.error_count()} error(s)."
            ) from exc

    async def fetch_weather(self, city: str) -> WeatherSnapshot:
        """Fetch the current snapshot for a city name; the name is trimmed first."""
        query = city.strip()
        if not query:
            raise EmptyCityError("City name must not be empty.")

        payload = await self._request_json(
            "/weather", params={"city": query}, context="weather fetch"
        )
        try:
            snapshot = WeatherSnapshot.model_validate(payload)
        except ValidationError as exc:
            raise MalformedResponseError(
                f"Weather payload for {query!r} invalid: {exc.error_count()} error(s)."
            ) from exc
        self.logger.info(
            "Weather fetched for %s (%s), cache_hit=%s",
            snapshot.name,
            snapshot.country or "?",
            snapshot.cache_hit,
        )
        return snapshot

    async def _request_json(
        self,
        endpoint: str,
        *,
        context: str,
        params: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        try:
            response = await self._client.get(endpoint, params=params)
        except httpx.HTTPError as exc:
            # Transport/protocol failures: timeouts, refused connections, DNS.
            self.logger.warning("Weather service %s failed (%s)", context, type(exc).__name__)
            raise ConnectivityError(f"Weather service {context} request failed: {exc}") from exc

        try:
            body: Any = response.json()
        except ValueError:
            body = None

        if not response.is_success:
            message = self._error_text(body) or SERVICE_FALLBACK_MESSAGE
            self.logger.warning(
                "Weather service %s returned HTTP %d: %s",
                context,
                response.status_code,
                message,
                extra={"status_code": response.status_code},
            )
            raise ServiceError(message, status_code=response.status_code)

        if not isinstance(body, dict):
            kind = "non-JSON" if body is None else type(body).__name__
            raise MalformedResponseError(
                f"Weather service {context} returned {kind} response at {endpoint}."
            )
        return body

    @staticmethod
    def _error_text(body: Any) -> str | None:
        """Pick the user-facing error text, preferring `error` over `message`."""
        if not isinstance(body, dict):
            return None
        for key in ("error", "message"):
            value = body.get(key)
            if isinstance(value, str) and value.strip():
                return value
        return None
