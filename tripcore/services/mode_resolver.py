"""Mode resolver: explicit user choice, else distance-based inference."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from tripcore.contracts.enums import TransportMode
from tripcore.contracts.leg import Leg
from tripcore.services.geo import haversine_km
from tripcore.services.transport_suggestion import get_transport_suggestions

logger = logging.getLogger(__name__)

SuggestFn = Callable[..., list[str]]

_KNOWN_MODES = {m.value for m in TransportMode}


@dataclass
class ModeResolution:
    """Effective mode of one leg."""

    mode: TransportMode
    was_inferred: bool
    distance_km: float  # straight-line estimate between the endpoints


def leg_haversine_km(leg: Leg) -> float:
    a, b = leg.from_point, leg.to_point
    return haversine_km(a.latitude, a.longitude, b.latitude, b.longitude)


def resolve_mode(
    leg: Leg,
    explicit_mode: str | None = None,
    suggest: SuggestFn = get_transport_suggestions,
) -> ModeResolution:
    """Resolve the transport mode of ``leg``.

    A non-empty ``explicit_mode`` is authoritative and is never checked
    against the distance.  Otherwise the first known mode returned by
    ``suggest`` for the great-circle distance is used, and ``driving``
    when there is none.
    """
    distance_km = leg_haversine_km(leg)

    if explicit_mode:
        return ModeResolution(
            mode=TransportMode(explicit_mode),
            was_inferred=False,
            distance_km=distance_km,
        )

    try:
        suggestions = suggest(
            distance_km=distance_km,
            from_name=leg.from_point.label,
            to_name=leg.to_point.label,
        ) or []
    except Exception:
        logger.exception("Transport suggestion failed for leg %s", leg.key)
        suggestions = []

    for candidate in suggestions:
        value = getattr(candidate, "value", candidate)
        if value in _KNOWN_MODES:
            return ModeResolution(
                mode=TransportMode(value),
                was_inferred=True,
                distance_km=distance_km,
            )

    logger.debug("No usable suggestion for leg %s, defaulting to driving", leg.key)
    return ModeResolution(
        mode=TransportMode.DRIVING,
        was_inferred=True,
        distance_km=distance_km,
    )


def resolve_legs(
    legs: list[Leg],
    suggest: SuggestFn = get_transport_suggestions,
) -> list[ModeResolution]:
    """Resolve every leg, preserving order."""
    return [resolve_mode(leg, leg.explicit_mode, suggest) for leg in legs]
