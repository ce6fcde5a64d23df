"""Aggregator: resolved legs -> GeoJSON features and distance totals."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from tripcore.contracts.enums import STRAIGHT_LINE_MODES, mode_value
from tripcore.contracts.leg import LineStringGeometry, ResolvedLeg, RouteFeature


@dataclass
class Aggregate:
    features: list[RouteFeature] = field(default_factory=list)
    per_leg_distance_km: dict[str, float] = field(default_factory=dict)
    total_distance_km: float = 0.0


def _safe_km(value: float | None) -> float:
    if value is None or not math.isfinite(value):
        return 0.0
    return float(value)


def leg_feature(leg: ResolvedLeg) -> RouteFeature | None:
    """Feature for one leg, or ``None`` for a gap.

    Flight and ferry legs are always a two-point line.  Land legs need a
    real provider geometry.
    """
    if mode_value(leg.mode) in STRAIGHT_LINE_MODES:
        coordinates = [leg.from_point.coordinates, leg.to_point.coordinates]
    elif leg.geometry and len(leg.geometry) >= 2:
        coordinates = list(leg.geometry)
    else:
        return None

    return RouteFeature(
        geometry=LineStringGeometry(coordinates=coordinates),
        properties={
            "leg_key": leg.key,
            "mode": mode_value(leg.mode),
            "from_label": leg.from_point.label,
            "to_label": leg.to_point.label,
            "distance_km": _safe_km(leg.distance_km),
            "used_fallback": leg.used_fallback,
        },
    )


def aggregate(legs: list[ResolvedLeg]) -> Aggregate:
    """Build features, per-leg distances and the unrounded total."""
    result = Aggregate()
    for leg in legs:
        km = _safe_km(leg.distance_km)
        result.per_leg_distance_km[leg.key] = km
        result.total_distance_km += km

        feature = leg_feature(leg)
        if feature is not None:
            result.features.append(feature)
    return result
