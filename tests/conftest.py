import asyncio

import httpx
import pytest

from tripchat.services.models import Coordinates, HistoricalInfo, Hotel, PopularPlace, RouteStep, RouteSummary
from tripchat.services.result import Ok, not_found


def run(coro):
    """Drive a coroutine to completion from a sync test."""
    return asyncio.run(coro)


def json_router(routes: dict, calls: list | None = None):
    """MockTransport whose handler answers by URL path.

    `routes` maps a path to either a JSON body, an httpx.Response, an
    exception instance to raise, or a callable taking the request.
    """
    def handler(request: httpx.Request) -> httpx.Response:
        if calls is not None:
            calls.append(request)
        answer = routes.get(request.url.path)
        if answer is None:
            return httpx.Response(404, json={"message": "not mocked"})
        if callable(answer) and not isinstance(answer, httpx.Response):
            answer = answer(request)
        if isinstance(answer, Exception):
            raise answer
        if isinstance(answer, httpx.Response):
            return answer
        return httpx.Response(200, json=answer)

    return httpx.MockTransport(handler)


# ─── Provider payloads ───

@pytest.fixture
def mapbox_route_payload():
    return {
        "code": "Ok",
        "routes": [
            {
                "distance": 1500.0,
                "duration": 125.0,
                "legs": [
                    {
                        "steps": [
                            {"name": "Market Street", "distance": 400.0, "duration": 60.0,
                             "maneuver": {"instruction": "Head east on Market Street"}},
                            {"name": "", "distance": 20.0, "duration": 5.0,
                             "maneuver": {"instruction": "Continue straight"}},
                            {"name": "Embarcadero", "distance": 1080.0, "duration": 60.0,
                             "maneuver": {"instruction": "Turn left onto Embarcadero"}},
                        ]
                    }
                ],
            },
            {"distance": 9999.0, "duration": 9999.0, "legs": [{"steps": []}]},
        ],
    }


@pytest.fixture
def origin_coords():
    return Coordinates(lat=37.7749, lon=-122.4194)


@pytest.fixture
def destination_coords():
    return Coordinates(lat=37.8651, lon=-119.5383)


# ─── Fake providers for planner tests ───

class FakeMapbox:
    def __init__(self, geocodes: dict, route_result=None):
        self.geocodes = geocodes
        self.route_result = route_result
        self.route_calls = []
        self.closed = False

    async def geocode(self, location):
        return self.geocodes.get(location) or not_found("mapbox", f"No coordinates found for {location}.")

    async def get_route(self, origin, destination, travel_mode="driving"):
        self.route_calls.append((origin, destination, travel_mode))
        if isinstance(self.route_result, Exception):
            raise self.route_result
        return self.route_result

    async def close(self):
        self.closed = True


class FakeWikipedia:
    def __init__(self, places=None, history=None):
        self.places = places
        self.history = history
        self.closed = False

    async def get_popular_places(self, destination):
        if isinstance(self.places, Exception):
            raise self.places
        return self.places

    async def get_historical_info(self, destination):
        if isinstance(self.history, Exception):
            raise self.history
        return self.history

    async def close(self):
        self.closed = True


class FakeFoursquare:
    def __init__(self, hotels=None):
        self.hotels = hotels
        self.calls = []
        self.closed = False

    async def find_hotels(self, near, limit=5):
        self.calls.append(near)
        if isinstance(self.hotels, Exception):
            raise self.hotels
        return self.hotels

    async def close(self):
        self.closed = True


@pytest.fixture
def sample_route():
    return RouteSummary(
        duration_text="2 minutes",
        distance_text="1.50 km",
        directions="Head east on Market Street -> Continue straight -> Turn left onto Embarcadero",
        steps=(
            RouteStep("Market Street", "Head east on Market Street", 400.0, 60.0),
            RouteStep("Embarcadero", "Turn left onto Embarcadero", 1080.0, 60.0),
        ),
    )


@pytest.fixture
def fake_providers(origin_coords, destination_coords, sample_route):
    mapbox = FakeMapbox(
        geocodes={"San Francisco": Ok(origin_coords), "Yosemite": Ok(destination_coords)},
        route_result=Ok(sample_route),
    )
    wikipedia = FakeWikipedia(
        places=Ok([PopularPlace("Half Dome", "Granite dome.", "https://en.wikipedia.org/wiki/Half_Dome")]),
        history=Ok(HistoricalInfo("Yosemite was protected in 1864.", "https://en.wikipedia.org/wiki/Yosemite")),
    )
    foursquare = FakeFoursquare(
        hotels=Ok([Hotel("The Ahwahnee", "9.1", "1 Ahwahnee Dr", "Hotel", "https://foursquare.com/v/abc")]),
    )
    return mapbox, wikipedia, foursquare
