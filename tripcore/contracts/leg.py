"""Leg, ResolvedLeg, TripRoute: derived view of a trip, never persisted.

Legs are rebuilt wholesale from the city list and home location every
time either changes.  ``TripRoute`` is the published result of one
pipeline run: GeoJSON for the map plus per-leg and total distances.
"""

import math
from typing import Any, Literal

from pydantic import Field, computed_field

from tripcore.contracts.city import City, HomeLocation
from tripcore.contracts.common import TripModel
from tripcore.contracts.enums import EndpointKind, TransportMode

HOME_ID = "home"
HOME_LABEL = "Home"

# A failed land route longer than this is presented as "looks like open water".
# Routing failure is the only signal: no water detection is performed.
SEA_LIKE_THRESHOLD_KM = 20.0


class LegEndpoint(TripModel):
    """One end of a leg: either Home or a City."""

    kind: EndpointKind
    id: str
    label: str
    latitude: float = Field(..., ge=-90.0, le=90.0)
    longitude: float = Field(..., ge=-180.0, le=180.0)

    @property
    def coordinates(self) -> tuple[float, float]:
        """GeoJSON ``(lon, lat)`` pair."""
        return (self.longitude, self.latitude)

    @classmethod
    def from_city(cls, city: City) -> "LegEndpoint":
        return cls(
            kind=EndpointKind.CITY,
            id=city.id,
            label=city.name,
            latitude=city.latitude,
            longitude=city.longitude,
        )

    @classmethod
    def from_home(cls, home: HomeLocation) -> "LegEndpoint":
        return cls(
            kind=EndpointKind.HOME,
            id=HOME_ID,
            label=HOME_LABEL,
            latitude=home.latitude,
            longitude=home.longitude,
        )


class Leg(TripModel):
    """A directed segment between two consecutive endpoints.

    ``explicit_mode`` is the user's choice for this leg, taken from the
    arriving city.  The leg back home never has one.
    """

    from_point: LegEndpoint
    to_point: LegEndpoint
    explicit_mode: TransportMode | None = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def key(self) -> str:
        """``fromId-toId``; Home legs read ``home-<cityId>`` / ``<cityId>-home``."""
        return f"{self.from_point.id}-{self.to_point.id}"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_home_leg(self) -> bool:
        return EndpointKind.HOME in (self.from_point.kind, self.to_point.kind)


class ResolvedLeg(Leg):
    """A leg after mode resolution and geometry lookup.

    ``geometry`` is ``None`` for a gap: a land leg whose real route could
    not be obtained.  It is never replaced by a straight line.
    """

    mode: TransportMode
    was_inferred: bool = False
    distance_km: float = Field(default=0.0, ge=0)
    used_fallback: bool = False
    geometry: list[tuple[float, float]] | None = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_sea_like(self) -> bool:
        return self.used_fallback and self.distance_km > SEA_LIKE_THRESHOLD_KM


# ---------------------------------------------------------------------------
# GeoJSON output
# ---------------------------------------------------------------------------


class LineStringGeometry(TripModel):
    type: Literal["LineString"] = "LineString"
    coordinates: list[tuple[float, float]] = Field(..., min_length=2)


class RouteFeature(TripModel):
    """One rendered leg."""

    type: Literal["Feature"] = "Feature"
    geometry: LineStringGeometry
    properties: dict[str, Any] = Field(default_factory=dict)


class RouteFeatureCollection(TripModel):
    type: Literal["FeatureCollection"] = "FeatureCollection"
    features: list[RouteFeature] = Field(default_factory=list)


class TripRoute(TripModel):
    """Published result of one route computation.

    ``total_distance_km`` is kept unrounded; round only for display.
    """

    route_geojson: RouteFeatureCollection = Field(
        default_factory=RouteFeatureCollection
    )
    per_leg_distance_km: dict[str, float] = Field(default_factory=dict)
    total_distance_km: float = Field(default=0.0, ge=0)
    legs: list[ResolvedLeg] = Field(default_factory=list)
    loading: bool = False

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total_distance_display(self) -> int:
        """Total distance rounded to whole kilometres."""
        if not math.isfinite(self.total_distance_km):
            return 0
        return round(self.total_distance_km)
