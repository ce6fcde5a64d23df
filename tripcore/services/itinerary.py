"""Where the traveller is today: current and next stop by date."""

from __future__ import annotations

from datetime import date

from tripcore.contracts.city import City
from tripcore.services.leg_builder import order_cities


def current_and_next_city(cities: list[City], today: date) -> tuple[int, int]:
    """Indices (into the order-sorted list) of the current and next city.

    A city is current when ``today`` falls within its stay; its end date
    defaults to the start date.  Cities without a start date are skipped.
    Either index is -1 when there is none.
    """
    ordered = order_cities(cities)
    for i, city in enumerate(ordered):
        if city.start_date is None:
            continue
        end = city.end_date or city.start_date
        if city.start_date <= today <= end:
            return i, (i + 1 if i < len(ordered) - 1 else -1)
        if today < city.start_date:
            return -1, i
    return -1, -1
