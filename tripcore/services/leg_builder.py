"""Leg builder: ordered cities + optional home -> ordered directed legs."""

from __future__ import annotations

from tripcore.contracts.city import City, HomeLocation
from tripcore.contracts.leg import Leg, LegEndpoint


def order_cities(cities: list[City]) -> list[City]:
    """Cities in trip order; ties keep their input position."""
    return sorted(cities, key=lambda c: c.order)


def build_legs(cities: list[City], home: HomeLocation | None = None) -> list[Leg]:
    """Build the trip's legs in travel order.

    Produces ``Home -> first`` (home and first city both located), then
    ``city_i -> city_i+1`` for every adjacent pair where both ends have
    coordinates, then ``last -> Home``.  Pairs touching a city without
    coordinates are skipped, not reported.
    """
    ordered = order_cities(cities)
    legs: list[Leg] = []

    home_point = None
    if home is not None and home.has_coordinates:
        home_point = LegEndpoint.from_home(home)

    if home_point is not None and ordered and ordered[0].has_coordinates:
        first = ordered[0]
        legs.append(Leg(
            from_point=home_point,
            to_point=LegEndpoint.from_city(first),
            explicit_mode=first.transport_mode,
        ))

    for prev, city in zip(ordered, ordered[1:]):
        if not (prev.has_coordinates and city.has_coordinates):
            continue
        legs.append(Leg(
            from_point=LegEndpoint.from_city(prev),
            to_point=LegEndpoint.from_city(city),
            explicit_mode=city.transport_mode,
        ))

    if home_point is not None and ordered and ordered[-1].has_coordinates:
        legs.append(Leg(
            from_point=LegEndpoint.from_city(ordered[-1]),
            to_point=home_point,
        ))

    return legs
