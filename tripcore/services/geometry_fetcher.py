"""Geometry fetcher: one directions lookup per land leg, run concurrently.

Flight and ferry legs are drawn as a straight segment and never reach
the provider.  A land leg without a usable route becomes a gap: no
geometry at all, distance from the haversine estimate.  Land routes are
never replaced by a straight line, since that would draw a road over
open water.
"""

from __future__ import annotations

import asyncio
import logging
import math
from dataclasses import dataclass
from typing import Protocol

from tripcore.contracts.enums import STRAIGHT_LINE_MODES, TransportMode, mode_value
from tripcore.contracts.leg import Leg
from tripcore.services.directions_client import DirectionsResult
from tripcore.services.mode_resolver import leg_haversine_km

logger = logging.getLogger(__name__)

ROUTING_PROFILE = "driving"


class DirectionsProvider(Protocol):
    async def get_route_directions(
        self,
        lat1: float,
        lon1: float,
        lat2: float,
        lon2: float,
        profile: str = "driving",
    ) -> DirectionsResult | None: ...


@dataclass
class GeometryResult:
    geometry: list[tuple[float, float]] | None
    used_fallback: bool
    distance_km: float


def straight_segment(leg: Leg) -> list[tuple[float, float]]:
    """Two-point ``(lon, lat)`` line between the leg endpoints."""
    return [leg.from_point.coordinates, leg.to_point.coordinates]


def _provider_distance(result: DirectionsResult, fallback_km: float) -> float:
    d = result.distance_km
    if isinstance(d, (int, float)) and math.isfinite(d) and d >= 0:
        return float(d)
    return fallback_km


async def fetch_geometry(
    leg: Leg,
    mode: TransportMode | str,
    directions: DirectionsProvider,
) -> GeometryResult:
    """Geometry and distance for a single leg.  Never raises."""
    estimate_km = leg_haversine_km(leg)

    if mode_value(mode) in STRAIGHT_LINE_MODES:
        return GeometryResult(
            geometry=straight_segment(leg),
            used_fallback=False,
            distance_km=estimate_km,
        )

    a, b = leg.from_point, leg.to_point
    try:
        result = await directions.get_route_directions(
            a.latitude, a.longitude, b.latitude, b.longitude, profile=ROUTING_PROFILE
        )
    except Exception as exc:
        logger.warning("Directions lookup failed for leg %s: %s", leg.key, exc)
        result = None

    geometry = None
    if result is not None:
        try:
            geometry = [(float(p[0]), float(p[1])) for p in result.coordinates or []]
        except (AttributeError, TypeError, ValueError, IndexError) as exc:
            logger.warning("Malformed route geometry for leg %s: %s", leg.key, exc)
            geometry = None

    if not geometry or len(geometry) < 2:
        logger.info("No land route for leg %s (%s), leaving a gap", leg.key, mode_value(mode))
        return GeometryResult(geometry=None, used_fallback=True, distance_km=estimate_km)

    return GeometryResult(
        geometry=geometry,
        used_fallback=False,
        distance_km=_provider_distance(result, estimate_km),
    )


async def fetch_all(
    legs: list[Leg],
    modes: list[TransportMode | str],
    directions: DirectionsProvider,
) -> list[GeometryResult]:
    """Fetch every leg concurrently; results follow the input order.

    Each task converts its own failure into a fallback result, so one
    leg cannot abort or corrupt its siblings.
    """
    if len(legs) != len(modes):
        raise ValueError(f"Got {len(legs)} legs but {len(modes)} modes")
    return list(await asyncio.gather(
        *[fetch_geometry(leg, mode, directions) for leg, mode in zip(legs, modes)]
    ))
