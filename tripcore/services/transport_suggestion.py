"""Distance-based transport suggestions.

``get_transport_suggestions`` is the ranking oracle used by the mode
resolver: it maps a leg distance to every supported mode, most plausible
first.  ``allowed_modes`` narrows that list for the per-leg mode picker
when a land route could not be found.
"""

from __future__ import annotations

import math

from tripcore.contracts.enums import TransportMode
from tripcore.contracts.leg import ResolvedLeg

# Modes offered to the user for a leg (``driving`` is internal only)
TRANSPORT_MODES: list[str] = [
    TransportMode.CAR.value,
    TransportMode.TRAIN.value,
    TransportMode.FLIGHT.value,
    TransportMode.BUS.value,
    TransportMode.FERRY.value,
    TransportMode.WALKING.value,
]

# Name fragments that mark a stop as an island
ISLAND_KEYWORDS = (
    "island",
    "isle",
    "mykonos",
    "santorini",
    "crete",
    "rhodes",
    "corfu",
    "ibiza",
    "mallorca",
    "tenerife",
    "cyprus",
    "malta",
    "hawaii",
    "bali",
)

# Upper bound of each band (km) -> ranking
_DISTANCE_BANDS: list[tuple[float, list[str]]] = [
    (5, ["walking", "bus", "car", "train", "ferry", "flight"]),
    (80, ["car", "train", "bus", "walking", "ferry", "flight"]),
    (350, ["train", "car", "bus", "flight", "ferry", "walking"]),
    (500, ["train", "flight", "bus", "car", "ferry", "walking"]),
]
_LONG_HAUL = ["flight", "train", "bus", "car", "ferry", "walking"]
_UNKNOWN_DISTANCE = ["train", "car", "bus", "flight", "ferry", "walking"]

_ISLAND_NEAR_KM = 300
_ISLAND_NEAR = ["ferry", "flight", "car", "bus", "train", "walking"]
_ISLAND_FAR = ["flight", "ferry", "train", "bus", "car", "walking"]

_SEA_LIKE_MODES = [TransportMode.FLIGHT.value, TransportMode.FERRY.value]

SEA_HINT = "This leg looks like open water, so only flight or ferry are available."


def is_island(name: str | None) -> bool:
    if not name:
        return False
    lowered = name.lower()
    return any(k in lowered for k in ISLAND_KEYWORDS)


def get_transport_suggestions(
    distance_km: float | None = None,
    from_name: str | None = None,
    to_name: str | None = None,
) -> list[str]:
    """Rank transport modes for a leg, most recommended first.

    Island stops (recognised by name) favour ferry for short hops and
    flight beyond 300 km.  Without a usable distance a generic ordering
    is returned.
    """
    d = distance_km
    if d is not None and (not isinstance(d, (int, float)) or not math.isfinite(d)):
        d = None

    involves_island = is_island(from_name) or is_island(to_name)

    if d is None:
        return list(_ISLAND_NEAR if involves_island else _UNKNOWN_DISTANCE)

    if involves_island:
        return list(_ISLAND_NEAR if d <= _ISLAND_NEAR_KM else _ISLAND_FAR)

    for upper, ranking in _DISTANCE_BANDS:
        if d <= upper:
            return list(ranking)
    return list(_LONG_HAUL)


def allowed_modes(leg: ResolvedLeg) -> list[str]:
    """Modes the user may pick for ``leg``.

    Sea-like legs (failed land routing over a long distance) are limited
    to flight and ferry.
    """
    if leg.is_sea_like:
        return list(_SEA_LIKE_MODES)
    suggestions = get_transport_suggestions(
        leg.distance_km, leg.from_point.label, leg.to_point.label
    )
    return suggestions or list(TRANSPORT_MODES)


def sea_hint(leg: ResolvedLeg) -> str | None:
    """Hint shown next to a sea-like leg, ``None`` otherwise."""
    return SEA_HINT if leg.is_sea_like else None
