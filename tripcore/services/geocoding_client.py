"""OpenStreetMap Nominatim client: search, reverse geocoding, place -> country.

Used when the user searches for a destination or drops a pin on the
map.  The routing pipeline itself only consumes the resulting ``City``
objects.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass

import httpx

from tripcore.config import DEFAULT_NOMINATIM_URL
from tripcore.contracts.city import City
from tripcore.services.errors import GeocodingError

logger = logging.getLogger(__name__)

MIN_QUERY_LENGTH = 3
UNKNOWN_CITY = "Unknown City"

# Address keys tried in order for the region-level name of a point
_REGION_KEYS = ("city", "town", "village", "municipality", "county", "state")
_SEARCH_CITY_KEYS = ("city", "town", "village", "hamlet")


@dataclass
class ReverseGeocodeResult:
    name: str
    address: str
    country: str = ""


@dataclass
class CountryInfo:
    country_name: str
    country_code: str | None = None


class NominatimClient:
    """Async HTTP client for the Nominatim API."""

    def __init__(
        self,
        http_client: httpx.AsyncClient | None = None,
        base_url: str = DEFAULT_NOMINATIM_URL,
        user_agent: str = "tripcore/0.1",
        timeout: float = 15.0,
    ):
        self._base_url = base_url.rstrip("/")
        self._headers = {"User-Agent": user_agent, "Accept": "application/json"}
        self._client = http_client or httpx.AsyncClient(timeout=timeout)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _get(self, path: str, params: dict) -> object:
        try:
            resp = await self._client.get(
                f"{self._base_url}{path}", params=params, headers=self._headers
            )
        except httpx.HTTPError as exc:
            raise GeocodingError(f"Nominatim request failed: {exc}") from exc
        if resp.status_code >= 400:
            raise GeocodingError(
                f"Nominatim returned {resp.status_code}", status_code=resp.status_code
            )
        try:
            return resp.json()
        except ValueError as exc:
            raise GeocodingError("Nominatim returned invalid JSON") from exc

    async def search(self, query: str, limit: int = 5) -> list[City]:
        """Search places by free text; results are unordered ``City`` stubs.

        Queries shorter than three characters return nothing without a
        request.  Provider failures raise ``GeocodingError``.
        """
        query = (query or "").strip()
        if len(query) < MIN_QUERY_LENGTH:
            return []

        start = time.monotonic()
        data = await self._get(
            "/search",
            {"q": query, "format": "json", "limit": limit, "addressdetails": 1},
        )

        cities: list[City] = []
        for i, entry in enumerate(data if isinstance(data, list) else []):
            city = _city_from_search_entry(entry, order=i)
            if city is not None:
                cities.append(city)
        logger.debug(
            "Geocoding search %r: %d results in %.0f ms",
            query, len(cities), (time.monotonic() - start) * 1000,
        )
        return cities

    async def reverse_geocode(self, lat: float, lon: float) -> ReverseGeocodeResult | None:
        """Region-level name and address for a point, ``None`` on failure."""
        if lat is None or lon is None:
            return None
        try:
            data = await self._get(
                "/reverse",
                {"lat": lat, "lon": lon, "format": "json", "addressdetails": 1},
            )
        except GeocodingError as exc:
            logger.warning("Reverse geocode failed for %s,%s: %s", lat, lon, exc)
            return None
        if not isinstance(data, dict) or "error" in data:
            return None

        address = data.get("address") or {}
        display_name = data.get("display_name") or ""
        region = next((address[k] for k in _REGION_KEYS if address.get(k)), "")
        name = region or (display_name.split(",")[0].strip() if display_name else "")
        return ReverseGeocodeResult(
            name=name or "Unknown place",
            address=display_name,
            country=address.get("country", "") or "",
        )

    async def get_country_from_place_name(self, name: str) -> CountryInfo | None:
        """Country of the best match for a place name."""
        if not name or not name.strip():
            return None
        try:
            data = await self._get(
                "/search",
                {"q": name.strip(), "format": "json", "limit": 1, "addressdetails": 1},
            )
        except GeocodingError as exc:
            logger.warning("Country lookup failed for %r: %s", name, exc)
            return None
        if not isinstance(data, list) or not data:
            return None
        address = data[0].get("address") or {}
        country = address.get("country")
        if not country:
            return None
        code = address.get("country_code")
        return CountryInfo(country_name=country, country_code=code.upper() if code else None)

    async def city_from_map_click(self, lat: float, lon: float, order: int = 0) -> City:
        """Build a new ``City`` for a point picked on the map.

        Falls back to "Unknown City" with an empty country when the
        provider knows nothing about the point.
        """
        name = UNKNOWN_CITY
        country = ""
        try:
            geocoded = await self.reverse_geocode(lat, lon)
            if geocoded is not None:
                name = geocoded.name or (geocoded.address.split(",")[0].strip() or UNKNOWN_CITY)
                country = geocoded.country
                if not country and geocoded.address:
                    country = geocoded.address.split(",")[-1].strip()
            if not country and name != UNKNOWN_CITY:
                info = await self.get_country_from_place_name(name)
                if info is not None:
                    country = info.country_name
        except Exception:
            logger.exception("Error resolving map click at %s,%s", lat, lon)

        return City(name=name, country=country, latitude=lat, longitude=lon, order=order)


def _city_from_search_entry(entry: dict, order: int) -> City | None:
    """Map one Nominatim search hit to a ``City``."""
    if not isinstance(entry, dict):
        return None
    try:
        lat = float(entry["lat"])
        lon = float(entry["lon"])
    except (KeyError, TypeError, ValueError):
        return None

    display_name = entry.get("display_name") or ""
    address = entry.get("address") or {}
    name = next((address[k] for k in _SEARCH_CITY_KEYS if address.get(k)), "")
    if not name and display_name:
        name = display_name.split(",")[0].strip()
    if not name:
        return None

    place_id = entry.get("place_id")
    return City(
        id=f"osm-{place_id}" if place_id is not None else f"osm-{lat},{lon}",
        name=name,
        country=address.get("country", "") or "",
        latitude=lat,
        longitude=lon,
        order=order,
    )
