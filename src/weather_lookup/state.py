"""Request lifecycle states and the pure transition function."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Literal

from .models import WeatherSnapshot

ErrorKind = Literal["connectivity", "service", "malformed"]


@dataclass(frozen=True, slots=True)
class Idle:
    """No search has been issued yet."""


@dataclass(frozen=True, slots=True)
class Loading:
    city: str
    request_id: int


@dataclass(frozen=True, slots=True)
class Success:
    city: str
    request_id: int
    snapshot: WeatherSnapshot


@dataclass(frozen=True, slots=True)
class Error:
    city: str
    request_id: int
    message: str
    kind: ErrorKind = "service"


RequestState = Idle | Loading | Success | Error

IDLE = Idle()


@dataclass(frozen=True, slots=True)
class SearchStarted:
    request_id: int
    city: str


@dataclass(frozen=True, slots=True)
class SearchSucceeded:
    request_id: int
    snapshot: WeatherSnapshot


@dataclass(frozen=True, slots=True)
class SearchFailed:
    request_id: int
    message: str
    kind: ErrorKind = "service"


SearchEvent = SearchStarted | SearchSucceeded | SearchFailed


@dataclass(frozen=True, slots=True)
class SearchSession:
    """Everything the interface shows about searching, as one immutable value."""

    request: RequestState = IDLE
    city_input: str = ""
    last_issued: int = 0

    @property
    def loading(self) -> bool:
        return isinstance(self.request, Loading)

    @property
    def error(self) -> str | None:
        return self.request.message if isinstance(self.request, Error) else None

    @property
    def snapshot(self) -> WeatherSnapshot | None:
        return self.request.snapshot if isinstance(self.request, Success) else None


def normalize_city_input(text: str | None) -> str | None:
    """Trim a city name; blank input yields None."""
    if text is None:
        return None
    city = text.strip()
    return city or None


def is_stale(session: SearchSession, event: SearchSucceeded | SearchFailed) -> bool:
    """True when a resolution no longer belongs to the newest in-flight request."""
    return event.request_id != session.last_issued or not isinstance(session.request, Loading)


def apply_event(session: SearchSession, event: SearchEvent) -> SearchSession:
    """Return the session that results from one lifecycle event.

    Starting a search drops any previous snapshot or error immediately. A
    resolution is applied only when it answers the most recently issued
    request; anything older is discarded so out-of-order responses can never
    overwrite newer results.
    """
    if isinstance(event, SearchStarted):
        if event.request_id <= session.last_issued:
            raise ValueError(
                f"Request ids must increase: {event.request_id} <= {session.last_issued}"
            )
        return SearchSession(
            request=Loading(city=event.city, request_id=event.request_id),
            city_input=event.city,
            last_issued=event.request_id,
        )

    if is_stale(session, event):
        return session

    city = session.city_input
    if isinstance(event, SearchSucceeded):
        return replace(
            session,
            request=Success(city=city, request_id=event.request_id, snapshot=event.snapshot),
        )
    return replace(
        session,
        request=Error(
            city=city,
            request_id=event.request_id,
            message=event.message,
            kind=event.kind,
        ),
    )
