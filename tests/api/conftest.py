"""Shared fixtures for API tests."""

from __future__ import annotations

import httpx
import pytest

from tripcore.api.app import app
from tripcore.config import Settings
from tripcore.services.geocoding_client import NominatimClient

from tests.services.fake_directions import FakeDirections, road

REVERSE_RESPONSE = {
    "display_name": "Fira, Thira, Cyclades, South Aegean, Greece",
    "address": {"village": "Fira", "country": "Greece"},
}

SEARCH_RESPONSE = [
    {
        "place_id": 123,
        "lat": "45.7578137",
        "lon": "4.8320114",
        "display_name": "Lyon, Rhône, Auvergne-Rhône-Alpes, France",
        "address": {"city": "Lyon", "country": "France"},
    },
]


def _nominatim_handler(request: httpx.Request) -> httpx.Response:
    if request.url.params.get("q") == "fail":
        return httpx.Response(503, text="busy")
    if request.url.path == "/search":
        return httpx.Response(200, json=SEARCH_RESPONSE)
    if request.url.path == "/reverse":
        if request.url.params.get("lat") == "0.0":
            return httpx.Response(200, json={"error": "Unable to geocode"})
        return httpx.Response(200, json=REVERSE_RESPONSE)
    return httpx.Response(404, json={})


@pytest.fixture
def directions():
    """Road between Paris and Lyon; every other land pair has no route."""
    return FakeDirections(routes={
        ((48.8566, 2.3522), (45.764, 4.8357)): road(
            (2.3522, 48.8566), (3.5, 47.2), (4.8357, 45.764), distance_km=465.4
        ),
    })


@pytest.fixture
async def test_app(directions):
    """App with fake provider clients on ``app.state``."""
    async with httpx.AsyncClient(transport=httpx.MockTransport(_nominatim_handler)) as http:
        app.state.settings = Settings(mapbox_token="pk.test")
        app.state.directions = directions
        app.state.geocoder = NominatimClient(http_client=http)
        yield app


@pytest.fixture
async def client(test_app):
    """httpx AsyncClient wired to the test app."""
    transport = httpx.ASGITransport(app=test_app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
