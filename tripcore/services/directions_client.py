"""Mapbox Directions API client for road-following leg geometry."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

import httpx

from tripcore.config import DEFAULT_DIRECTIONS_URL
from tripcore.services.errors import DirectionsError

logger = logging.getLogger(__name__)

METERS_PER_KM = 1000.0


@dataclass
class DirectionsResult:
    """Route returned by the provider.

    ``coordinates`` are GeoJSON ``(lon, lat)`` pairs.  ``distance_km`` is
    ``None`` when the provider did not report a usable distance.
    """

    coordinates: list[tuple[float, float]]
    distance_km: float | None = None


class MapboxDirectionsClient:
    """Async HTTP client for the Mapbox Directions v5 API.

    Without an access token every lookup returns ``None``, which the
    geometry fetcher treats like any other missing route.
    """

    def __init__(
        self,
        access_token: str,
        http_client: httpx.AsyncClient | None = None,
        base_url: str = DEFAULT_DIRECTIONS_URL,
        timeout: float = 15.0,
    ):
        self._token = access_token
        self._base_url = base_url.rstrip("/")
        self._client = http_client or httpx.AsyncClient(timeout=timeout)

    @property
    def enabled(self) -> bool:
        return bool(self._token)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def get_route_directions(
        self,
        lat1: float,
        lon1: float,
        lat2: float,
        lon2: float,
        profile: str = "driving",
    ) -> DirectionsResult | None:
        """Fetch the route between two points.

        Returns ``None`` when no token is configured or no route exists.
        Raises ``DirectionsError`` on HTTP failures and malformed payloads.
        """
        if not self._token:
            return None

        url = f"{self._base_url}/{profile}/{lon1},{lat1};{lon2},{lat2}"
        params = {
            "geometries": "geojson",
            "overview": "full",
            "access_token": self._token,
        }
        try:
            resp = await self._client.get(url, params=params)
        except httpx.HTTPError as exc:
            raise DirectionsError(f"Directions request failed: {exc}") from exc

        if resp.status_code == 404:
            # Mapbox answers 404 "NoRoute" / "NoSegment" for unroutable pairs
            return None
        if resp.status_code >= 400:
            raise DirectionsError(
                f"Directions API returned {resp.status_code}",
                status_code=resp.status_code,
            )

        try:
            data = resp.json()
        except ValueError as exc:
            raise DirectionsError("Directions API returned invalid JSON") from exc
        return _parse_directions(data)


def _parse_directions(data: dict) -> DirectionsResult | None:
    """Parse a Directions response into the first route."""
    if not isinstance(data, dict):
        raise DirectionsError("Directions payload is not an object")

    code = data.get("code")
    if code and code != "Ok":
        logger.debug("Directions API returned code %s", code)
        return None

    routes = data.get("routes") or []
    if not routes:
        return None

    route = routes[0]
    geometry = route.get("geometry") or {}
    raw_coords = geometry.get("coordinates")
    if not isinstance(raw_coords, list):
        raise DirectionsError("Directions route has no coordinate list")

    coordinates: list[tuple[float, float]] = []
    for pair in raw_coords:
        try:
            lon, lat = float(pair[0]), float(pair[1])
        except (TypeError, ValueError, IndexError) as exc:
            raise DirectionsError(f"Malformed coordinate {pair!r}") from exc
        coordinates.append((lon, lat))

    distance_km = None
    distance_m = route.get("distance")
    if isinstance(distance_m, (int, float)) and math.isfinite(distance_m) and distance_m >= 0:
        distance_km = distance_m / METERS_PER_KM

    return DirectionsResult(coordinates=coordinates, distance_km=distance_km)
