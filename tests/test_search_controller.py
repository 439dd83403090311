"""Search controller tests for validation, error mapping and overlapping searches."""

from __future__ import annotations

import asyncio
import logging

from weather_lookup.base import WeatherService
from weather_lookup.controller import SearchController
from weather_lookup.exceptions import (
    CONNECTIVITY_MESSAGE,
    ConnectivityError,
    MalformedResponseError,
    ServiceError,
)
from weather_lookup.models import ServerHealth, WeatherSnapshot
from weather_lookup.state import Error, Loading, SearchSession, Success


class _FakeService(WeatherService):
    def __init__(self, outcomes: dict[str, WeatherSnapshot | Exception]) -> None:
        self.outcomes = outcomes
        self.calls: list[str] = []
        self.gates: dict[str, asyncio.Event] = {}

    async def fetch_health(self) -> ServerHealth:
        return ServerHealth(cache_entries=0)

    async def fetch_weather(self, city: str) -> WeatherSnapshot:
        self.calls.append(city)
        gate = self.gates.get(city)
        if gate is not None:
            await gate.wait()
        outcome = self.outcomes[city]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


def _controller(outcomes: dict[str, WeatherSnapshot | Exception]) -> tuple[
    SearchController, _FakeService
]:
    service = _FakeService(outcomes)
    logger = logging.getLogger("test.search_controller")
    return SearchController(service, logger), service


def _snapshot(name: str, country: str = "GB") -> WeatherSnapshot:
    return WeatherSnapshot(name=name, country=country)


def test_search_trims_city_and_resolves_success() -> None:
    controller, service = _controller({"London": _snapshot("London")})

    session = asyncio.run(controller.search("  London  "))

    assert service.calls == ["London"]
    assert isinstance(session.request, Success)
    assert session.snapshot is not None
    assert session.snapshot.name == "London"
    assert session.city_input == "London"
    assert session.error is None


def test_service_error_message_is_used_verbatim() -> None:
    controller, _ = _controller({"Atlantis": ServiceError("city not found", status_code=404)})

    session = asyncio.run(controller.search("Atlantis"))

    assert session.request == Error(
        city="Atlantis", request_id=1, message="city not found", kind="service"
    )
    assert session.snapshot is None


def test_connectivity_and_malformed_failures_use_generic_message() -> None:
    controller, _ = _controller(
        {
            "London": ConnectivityError("connection refused"),
            "Paris": MalformedResponseError("not json"),
        }
    )

    first = asyncio.run(controller.search("London"))
    assert isinstance(first.request, Error)
    assert first.request.message == CONNECTIVITY_MESSAGE
    assert first.request.kind == "connectivity"

    second = asyncio.run(controller.search("Paris"))
    assert isinstance(second.request, Error)
    assert second.request.message == CONNECTIVITY_MESSAGE
    assert second.request.kind == "malformed"


def test_blank_submission_issues_no_request_and_keeps_state() -> None:
    controller, service = _controller({})

    assert controller.submit("") is None
    assert controller.submit("   \t ") is None
    assert asyncio.run(controller.search("  ")) == SearchSession()

    assert service.calls == []
    assert controller.session == SearchSession()


def test_blank_submission_keeps_prior_success() -> None:
    controller, service = _controller({"Paris": _snapshot("Paris", "FR")})
    before = asyncio.run(controller.search("Paris"))

    assert controller.submit("  ") is None
    assert controller.session is before
    assert service.calls == ["Paris"]


def test_later_resolving_search_wins() -> None:
    controller, service = _controller(
        {"London": _snapshot("London"), "Tokyo": _snapshot("Tokyo", "JP")}
    )

    async def _scenario() -> SearchSession:
        service.gates = {"London": asyncio.Event(), "Tokyo": asyncio.Event()}
        london = controller.submit("London")
        assert london is not None
        assert controller.session.request == Loading(city="London", request_id=1)

        tokyo = controller.quick_search("Tokyo")
        assert tokyo is not None
        assert controller.session.snapshot is None

        service.gates["London"].set()
        await london
        assert controller.session.loading

        service.gates["Tokyo"].set()
        await tokyo
        return controller.session

    session = asyncio.run(_scenario())
    assert session.snapshot is not None
    assert session.snapshot.name == "Tokyo"
    assert service.calls == ["London", "Tokyo"]


def test_stale_response_arriving_last_is_discarded() -> None:
    controller, service = _controller(
        {"London": _snapshot("London"), "Tokyo": _snapshot("Tokyo", "JP")}
    )

    async def _scenario() -> SearchSession:
        service.gates = {"London": asyncio.Event(), "Tokyo": asyncio.Event()}
        london = controller.quick_search("London")
        tokyo = controller.quick_search("Tokyo")
        assert london is not None and tokyo is not None

        service.gates["Tokyo"].set()
        await tokyo
        service.gates["London"].set()
        await london
        return controller.session

    session = asyncio.run(_scenario())
    assert session.snapshot is not None
    assert session.snapshot.name == "Tokyo"
    assert session.last_issued == 2


def test_submit_is_declined_while_loading_but_quick_search_is_not() -> None:
    controller, service = _controller(
        {"London": _snapshot("London"), "Dubai": _snapshot("Dubai", "AE")}
    )

    async def _scenario() -> SearchSession:
        service.gates = {"London": asyncio.Event()}
        assert controller.submit("London") is not None
        assert not controller.input_enabled

        assert controller.submit("Berlin") is None
        assert controller.quick_search("Dubai") is not None

        service.gates["London"].set()
        return await controller.wait_pending()

    session = asyncio.run(_scenario())
    assert service.calls == ["London", "Dubai"]
    assert session.snapshot is not None
    assert session.snapshot.name == "Dubai"
    assert controller.input_enabled


def test_listeners_see_each_applied_transition() -> None:
    controller, _ = _controller({"Sydney": _snapshot("Sydney", "AU")})
    seen: list[SearchSession] = []
    unsubscribe = controller.subscribe(seen.append)

    asyncio.run(controller.search("Sydney"))
    assert [type(item.request).__name__ for item in seen] == ["Loading", "Success"]

    unsubscribe()
    asyncio.run(controller.search("Sydney"))
    assert len(seen) == 2


def test_quick_cities_default_list() -> None:
    controller, _ = _controller({})
    assert controller.quick_cities[0] == "London"
    assert "Singapore" in controller.quick_cities
    assert len(controller.quick_cities) == 8
