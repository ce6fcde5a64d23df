"""tripcore data contracts: Pydantic v2 models for multi-city trip routing.

Caller-owned (supplied on every recomputation)
-----------------------------------------------
- ``City``: ordered trip stops, with an optional explicit incoming mode
- ``HomeLocation``: optional origin / return point

Calculated (never persisted)
----------------------------
- ``Leg`` / ``ResolvedLeg``: directed segments, their resolved mode,
  distance and geometry
- ``TripRoute``: GeoJSON features, per-leg distances and total distance
"""

from tripcore.contracts.enums import (
    STRAIGHT_LINE_MODES,
    EndpointKind,
    TransportMode,
    mode_value,
)
from tripcore.contracts.common import TripModel
from tripcore.contracts.city import City, HomeLocation, temp_city_id
from tripcore.contracts.leg import (
    HOME_ID,
    SEA_LIKE_THRESHOLD_KM,
    Leg,
    LegEndpoint,
    LineStringGeometry,
    ResolvedLeg,
    RouteFeature,
    RouteFeatureCollection,
    TripRoute,
)

__all__ = [
    # Enums
    "EndpointKind",
    "TransportMode",
    "STRAIGHT_LINE_MODES",
    "mode_value",
    # Common
    "TripModel",
    # Domain models
    "City",
    "HomeLocation",
    "temp_city_id",
    "HOME_ID",
    "SEA_LIKE_THRESHOLD_KM",
    "Leg",
    "LegEndpoint",
    "ResolvedLeg",
    "LineStringGeometry",
    "RouteFeature",
    "RouteFeatureCollection",
    "TripRoute",
]
