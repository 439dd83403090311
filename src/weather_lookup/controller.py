"""Search controller: owns the request lifecycle for city lookups."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Sequence

from .base import WeatherService
from .config import DEFAULT_QUICK_CITIES
from .exceptions import ConnectivityError, MalformedResponseError, WeatherServiceError
from .state import (
    ErrorKind,
    SearchEvent,
    SearchFailed,
    SearchSession,
    SearchStarted,
    SearchSucceeded,
    apply_event,
    is_stale,
    normalize_city_input,
)

Listener = Callable[[SearchSession], None]


def _error_kind(exc: WeatherServiceError) -> ErrorKind:
    if isinstance(exc, ConnectivityError):
        return "connectivity"
    if isinstance(exc, MalformedResponseError):
        return "malformed"
    return "service"


class SearchController:
    """Drive Idle -> Loading -> Success/Error for manual and quick-pick searches.

    `submit` and `quick_search` are fire-and-forget: the Loading transition is
    applied before they return and the fetch runs as a task on the running
    event loop. Every issued request gets the next sequence number and only
    the newest one may resolve the session.
    """

    def __init__(
        self,
        client: WeatherService,
        logger: logging.Logger,
        quick_cities: Sequence[str] = DEFAULT_QUICK_CITIES,
    ) -> None:
        self.client = client
        self.logger = logger
        self.quick_cities = tuple(quick_cities)
        self._session = SearchSession()
        self._listeners: list[Listener] = []
        self._pending: set[asyncio.Task[SearchSession]] = set()

    @property
    def session(self) -> SearchSession:
        return self._session

    @property
    def input_enabled(self) -> bool:
        """Manual submission is disabled while a request is in flight."""
        return not self._session.loading

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener for applied transitions; returns an unsubscribe callable."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def submit(self, text: str) -> asyncio.Task[SearchSession] | None:
        """Handle a form submission; blank input or a busy form is declined silently."""
        city = normalize_city_input(text)
        if city is None:
            self.logger.debug("Ignoring blank city submission.")
            return None
        if not self.input_enabled:
            self.logger.debug("Ignoring submission for %s while loading.", city)
            return None
        return self._schedule(city)

    def quick_search(self, city: str) -> asyncio.Task[SearchSession] | None:
        """Search a predefined city; allowed even while another request is loading."""
        normalized = normalize_city_input(city)
        if normalized is None:
            return None
        return self._schedule(normalized)

    async def search(self, city: str) -> SearchSession:
        """Awaitable search; returns the session as it stands after resolution."""
        normalized = normalize_city_input(city)
        if normalized is None:
            return self._session
        request_id = self._begin(normalized)
        return await self._resolve(request_id, normalized)

    async def wait_pending(self) -> SearchSession:
        """Wait for every scheduled search to finish."""
        while self._pending:
            await asyncio.gather(*list(self._pending))
        return self._session

    def _schedule(self, city: str) -> asyncio.Task[SearchSession]:
        request_id = self._begin(city)
        task = asyncio.get_running_loop().create_task(self._resolve(request_id, city))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    def _begin(self, city: str) -> int:
        request_id = self._session.last_issued + 1
        self.logger.info(
            "Searching weather for %s (request %d)",
            city,
            request_id,
            extra={"city": city, "request_id": request_id},
        )
        self._apply(SearchStarted(request_id=request_id, city=city))
        return request_id

    async def _resolve(self, request_id: int, city: str) -> SearchSession:
        event: SearchSucceeded | SearchFailed
        try:
            snapshot = await self.client.fetch_weather(city)
        except WeatherServiceError as exc:
            kind = _error_kind(exc)
            self.logger.warning(
                "Weather search for %s failed: %s",
                city,
                exc,
                extra={"city": city, "request_id": request_id, "error_kind": kind},
            )
            event = SearchFailed(request_id=request_id, message=exc.user_message, kind=kind)
        else:
            event = SearchSucceeded(request_id=request_id, snapshot=snapshot)

        if is_stale(self._session, event):
            self.logger.debug(
                "Discarding stale result for %s (request %d, latest %d)",
                city,
                request_id,
                self._session.last_issued,
                extra={"city": city, "request_id": request_id},
            )
            return self._session
        self._apply(event)
        return self._session

    def _apply(self, event: SearchEvent) -> None:
        self._session = apply_event(self._session, event)
        for listener in list(self._listeners):
            listener(self._session)
