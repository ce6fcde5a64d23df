"""Route planner: the full leg pipeline plus stale-run handling.

Pipeline per run:

1. Build legs from the ordered cities and optional home
2. Resolve each leg's transport mode
3. Fetch geometry for all legs concurrently
4. Aggregate features and distances into a ``TripRoute``

Runs are triggered by the caller whenever cities, their order, a city's
mode or the home location change.  Runs are not coalesced: every call to
``recompute`` starts a new generation, and a run only publishes if no
newer run was started meanwhile (last write wins).
"""

from __future__ import annotations

import logging
from typing import Awaitable, Callable

from tripcore.contracts.city import City, HomeLocation
from tripcore.contracts.leg import ResolvedLeg, RouteFeatureCollection, TripRoute
from tripcore.services.aggregator import aggregate
from tripcore.services.geometry_fetcher import DirectionsProvider, fetch_all
from tripcore.services.leg_builder import build_legs
from tripcore.services.mode_resolver import SuggestFn, resolve_legs
from tripcore.services.transport_suggestion import get_transport_suggestions

logger = logging.getLogger(__name__)

PublishFn = Callable[[TripRoute], "Awaitable[None] | None"]


class RoutePlanner:
    """Computes trip routes and publishes only the newest result."""

    def __init__(
        self,
        directions: DirectionsProvider,
        suggest: SuggestFn = get_transport_suggestions,
        on_publish: PublishFn | None = None,
    ):
        self._directions = directions
        self._suggest = suggest
        self._on_publish = on_publish
        self._generation = 0
        self._in_flight: set[int] = set()
        self.latest: TripRoute | None = None

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def loading(self) -> bool:
        """True while the most recently started run has not finished."""
        return self._generation in self._in_flight

    async def compute(
        self,
        cities: list[City],
        home: HomeLocation | None = None,
    ) -> TripRoute:
        """Run the pipeline once, without generation bookkeeping."""
        legs = build_legs(cities, home)
        if not legs:
            return TripRoute(route_geojson=RouteFeatureCollection())

        resolutions = resolve_legs(legs, self._suggest)
        modes = [r.mode for r in resolutions]
        geometries = await fetch_all(legs, modes, self._directions)

        resolved: list[ResolvedLeg] = []
        for leg, resolution, geo in zip(legs, resolutions, geometries):
            resolved.append(ResolvedLeg(
                from_point=leg.from_point,
                to_point=leg.to_point,
                explicit_mode=leg.explicit_mode,
                mode=resolution.mode,
                was_inferred=resolution.was_inferred,
                distance_km=geo.distance_km,
                used_fallback=geo.used_fallback,
                geometry=geo.geometry,
            ))

        totals = aggregate(resolved)
        return TripRoute(
            route_geojson=RouteFeatureCollection(features=totals.features),
            per_leg_distance_km=totals.per_leg_distance_km,
            total_distance_km=totals.total_distance_km,
            legs=resolved,
        )

    async def recompute(
        self,
        cities: list[City],
        home: HomeLocation | None = None,
    ) -> TripRoute | None:
        """Start a new run; publish its result unless superseded.

        Returns the published ``TripRoute``, or ``None`` when a newer run
        started before this one finished.
        """
        self._generation += 1
        generation = self._generation
        self._in_flight.add(generation)
        try:
            route = await self.compute(cities, home)
        finally:
            self._in_flight.discard(generation)

        if generation != self._generation:
            logger.debug(
                "Discarding route run %d, superseded by run %d",
                generation, self._generation,
            )
            return None

        self.latest = route
        if self._on_publish is not None:
            outcome = self._on_publish(route)
            if outcome is not None:
                await outcome
        return route
