"""Tests for the Nominatim client with mocked HTTP responses."""

from __future__ import annotations

import httpx
import pytest

from tripcore.services.errors import GeocodingError
from tripcore.services.geocoding_client import UNKNOWN_CITY, NominatimClient

SEARCH_RESPONSE = [
    {
        "place_id": 123,
        "lat": "45.7578137",
        "lon": "4.8320114",
        "display_name": "Lyon, Rhône, Auvergne-Rhône-Alpes, France",
        "address": {"city": "Lyon", "country": "France", "country_code": "fr"},
    },
    {
        "place_id": 456,
        "lat": "44.0",
        "lon": "-73.0",
        "display_name": "Lyon Mountain, Clinton County, New York, United States",
        "address": {"hamlet": "Lyon Mountain", "country": "United States"},
    },
    {"place_id": 789, "display_name": "broken entry"},
]

REVERSE_RESPONSE = {
    "display_name": "Fira, Thira, Cyclades, South Aegean, Greece",
    "address": {"village": "Fira", "municipality": "Thira", "country": "Greece"},
}


def _routed(routes: dict[str, object], status: int = 200):
    """Mock transport answering by request path."""

    def handler(request: httpx.Request) -> httpx.Response:
        body = routes.get(request.url.path)
        if body is None:
            return httpx.Response(404, json={})
        return httpx.Response(status, json=body)

    return httpx.MockTransport(handler)


class TestSearch:
    @pytest.mark.asyncio
    async def test_search_parses_cities(self):
        async with httpx.AsyncClient(transport=_routed({"/search": SEARCH_RESPONSE})) as http:
            cities = await NominatimClient(http_client=http).search("Lyon", limit=3)
        assert [c.name for c in cities] == ["Lyon", "Lyon Mountain"]
        assert cities[0].country == "France"
        assert cities[0].latitude == pytest.approx(45.7578137)
        assert cities[0].id == "osm-123"
        assert [c.order for c in cities] == [0, 1]

    @pytest.mark.asyncio
    async def test_short_query_skips_request(self):
        def handler(request):
            raise AssertionError("no request expected")

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http:
            assert await NominatimClient(http_client=http).search("ly") == []

    @pytest.mark.asyncio
    async def test_search_params_and_user_agent(self):
        captured = None

        def handler(request: httpx.Request) -> httpx.Response:
            nonlocal captured
            captured = request
            return httpx.Response(200, json=[])

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http:
            client = NominatimClient(http_client=http, user_agent="tripcore-tests/1.0")
            await client.search("Santorini", limit=8)

        assert captured.headers["User-Agent"] == "tripcore-tests/1.0"
        assert captured.url.params["q"] == "Santorini"
        assert captured.url.params["limit"] == "8"
        assert captured.url.params["addressdetails"] == "1"

    @pytest.mark.asyncio
    async def test_provider_error_raises(self):
        transport = httpx.MockTransport(lambda req: httpx.Response(503, text="busy"))
        async with httpx.AsyncClient(transport=transport) as http:
            with pytest.raises(GeocodingError) as exc_info:
                await NominatimClient(http_client=http).search("Lyon")
        assert exc_info.value.status_code == 503

    @pytest.mark.asyncio
    async def test_invalid_json_raises(self):
        transport = httpx.MockTransport(lambda req: httpx.Response(200, text="<html>"))
        async with httpx.AsyncClient(transport=transport) as http:
            with pytest.raises(GeocodingError):
                await NominatimClient(http_client=http).search("Lyon")


class TestReverseGeocode:
    @pytest.mark.asyncio
    async def test_region_name_preferred(self):
        async with httpx.AsyncClient(transport=_routed({"/reverse": REVERSE_RESPONSE})) as http:
            found = await NominatimClient(http_client=http).reverse_geocode(36.41, 25.43)
        assert found.name == "Fira"
        assert found.country == "Greece"
        assert found.address.startswith("Fira")

    @pytest.mark.asyncio
    async def test_display_name_fallback(self):
        payload = {"display_name": "Atlantic Ocean, Somewhere", "address": {}}
        async with httpx.AsyncClient(transport=_routed({"/reverse": payload})) as http:
            found = await NominatimClient(http_client=http).reverse_geocode(30.0, -40.0)
        assert found.name == "Atlantic Ocean"
        assert found.country == ""

    @pytest.mark.asyncio
    async def test_unable_to_geocode(self):
        payload = {"error": "Unable to geocode"}
        async with httpx.AsyncClient(transport=_routed({"/reverse": payload})) as http:
            assert await NominatimClient(http_client=http).reverse_geocode(0.0, -30.0) is None

    @pytest.mark.asyncio
    async def test_http_error_is_none(self):
        transport = httpx.MockTransport(lambda req: httpx.Response(500, text="oops"))
        async with httpx.AsyncClient(transport=transport) as http:
            assert await NominatimClient(http_client=http).reverse_geocode(1.0, 1.0) is None


class TestCountryLookup:
    @pytest.mark.asyncio
    async def test_country_from_place(self):
        async with httpx.AsyncClient(transport=_routed({"/search": SEARCH_RESPONSE[:1]})) as http:
            info = await NominatimClient(http_client=http).get_country_from_place_name("Lyon")
        assert info.country_name == "France"
        assert info.country_code == "FR"

    @pytest.mark.asyncio
    async def test_blank_name(self):
        async with httpx.AsyncClient(transport=_routed({})) as http:
            assert await NominatimClient(http_client=http).get_country_from_place_name(" ") is None


class TestMapClick:
    @pytest.mark.asyncio
    async def test_city_from_click(self):
        async with httpx.AsyncClient(transport=_routed({"/reverse": REVERSE_RESPONSE})) as http:
            city = await NominatimClient(http_client=http).city_from_map_click(36.41, 25.43, order=3)
        assert city.name == "Fira"
        assert city.country == "Greece"
        assert city.order == 3
        assert city.id.startswith("temp-")
        assert city.has_coordinates

    @pytest.mark.asyncio
    async def test_country_looked_up_by_name_when_missing(self):
        routes = {
            "/reverse": {"address": {"city": "Lyon"}},
            "/search": SEARCH_RESPONSE[:1],
        }
        async with httpx.AsyncClient(transport=_routed(routes)) as http:
            city = await NominatimClient(http_client=http).city_from_map_click(45.75, 4.83)
        assert city.name == "Lyon"
        assert city.country == "France"

    @pytest.mark.asyncio
    async def test_unknown_place(self):
        transport = httpx.MockTransport(lambda req: httpx.Response(500, text="down"))
        async with httpx.AsyncClient(transport=transport) as http:
            city = await NominatimClient(http_client=http).city_from_map_click(0.0, -30.0)
        assert city.name == UNKNOWN_CITY
        assert city.country == ""
