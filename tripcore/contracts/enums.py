"""Enumerations shared across all tripcore contracts."""

from enum import Enum


class TransportMode(str, Enum):
    """Transport mode of a single leg.

    ``DRIVING`` is the generic land fallback used when no usable
    suggestion exists for a leg.
    """
    FLIGHT = "flight"
    TRAIN = "train"
    CAR = "car"
    BUS = "bus"
    FERRY = "ferry"
    WALKING = "walking"
    DRIVING = "driving"


# Modes drawn as a straight segment, never routed over roads
STRAIGHT_LINE_MODES = frozenset({TransportMode.FLIGHT.value, TransportMode.FERRY.value})


def mode_value(mode: "TransportMode | str") -> str:
    """Plain string value of a mode, whether given as enum or string."""
    return mode.value if isinstance(mode, TransportMode) else str(mode)


class EndpointKind(str, Enum):
    """What a leg endpoint refers to."""
    HOME = "home"
    CITY = "city"
