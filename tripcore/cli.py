"""CLI entry point: compute a trip route from a JSON city list.

Usage:
    python -m tripcore.cli trip.json --home 48.85,2.35 -v
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
from pathlib import Path

from tripcore.config import get_settings
from tripcore.contracts.city import City, HomeLocation
from tripcore.contracts.leg import TripRoute
from tripcore.services.directions_client import MapboxDirectionsClient
from tripcore.services.geo import format_distance
from tripcore.services.route_planner import RoutePlanner
from tripcore.services.transport_suggestion import sea_hint

logger = logging.getLogger(__name__)


def _parse_home(value: str) -> HomeLocation:
    try:
        lat, lon = (float(part) for part in value.split(","))
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Expected LAT,LON, got {value!r}") from exc
    return HomeLocation(latitude=lat, longitude=lon)


def load_cities(path: Path) -> list[City]:
    """Read a JSON list of cities (or ``{"cities": [...]}``)."""
    data = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(data, dict):
        data = data.get("cities", [])
    return [City.model_validate(item) for item in data]


def format_route(route: TripRoute) -> list[str]:
    """One line per leg, then the rounded total."""
    lines = []
    for i, leg in enumerate(route.legs, start=1):
        line = (
            f"{i}. {leg.from_point.label} -> {leg.to_point.label}  "
            f"{leg.mode}  {format_distance(leg.distance_km)}"
        )
        if leg.geometry is None:
            line += "  (gap)"
        hint = sea_hint(leg)
        if hint:
            line += f"  [{hint}]"
        lines.append(line)
    lines.append(f"Total: {route.total_distance_display} km")
    return lines


async def _run(cities: list[City], home: HomeLocation | None, offline: bool) -> TripRoute:
    settings = get_settings()
    token = "" if offline else settings.mapbox_token
    directions = MapboxDirectionsClient(
        access_token=token,
        base_url=settings.directions_url,
        timeout=settings.directions_timeout_s,
    )
    try:
        return await RoutePlanner(directions).compute(cities, home)
    finally:
        await directions.aclose()


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Multi-city trip route calculator")
    parser.add_argument("cities", type=Path, help="Path to a JSON list of cities")
    parser.add_argument("--home", type=_parse_home, default=None, help="Home as LAT,LON")
    parser.add_argument("--offline", action="store_true", help="Skip the directions provider")
    parser.add_argument("--json", action="store_true", help="Print the full result as JSON")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    cities = load_cities(args.cities)
    logger.info("Loaded %d cities from %s", len(cities), args.cities)

    route = asyncio.run(_run(cities, args.home, args.offline))
    if args.json:
        print(json.dumps(route.to_dict(), indent=2))
    else:
        for line in format_route(route):
            print(line)


if __name__ == "__main__":
    main()
