"""City and HomeLocation: the waypoints of a multi-city trip.

A ``City`` is owned by the caller (wizard, backend).  Cities that have
not been saved yet carry a temporary ``temp-...`` identifier.
"""

import uuid
from datetime import date

from pydantic import Field, field_validator

from tripcore.contracts.common import TripModel
from tripcore.contracts.enums import TransportMode


def temp_city_id() -> str:
    """Client-side identifier for a city that has not been persisted."""
    return f"temp-{uuid.uuid4().hex[:12]}"


class City(TripModel):
    """A stop of the trip.

    ``transport_mode`` is the explicit mode of the *incoming* leg, i.e.
    the leg arriving at this city.  ``None`` means "infer from distance".
    A city without both coordinates is a void waypoint: it keeps its
    place in the list but no leg is built to or from it.
    """

    id: str = Field(default_factory=temp_city_id, min_length=1)
    name: str = Field(..., min_length=1, max_length=200)
    country: str = ""
    latitude: float | None = Field(default=None, ge=-90.0, le=90.0)
    longitude: float | None = Field(default=None, ge=-180.0, le=180.0)
    order: int = 0
    transport_mode: TransportMode | None = Field(default=None, alias="transportMode")
    start_date: date | None = Field(default=None, alias="startDate")
    end_date: date | None = Field(default=None, alias="endDate")

    @property
    def has_coordinates(self) -> bool:
        return self.latitude is not None and self.longitude is not None

    @field_validator("id", mode="before")
    @classmethod
    def stringify_id(cls, v):
        # Persisted cities come back from the backend with integer ids
        return str(v) if isinstance(v, int) else v

    @field_validator("name", "country", mode="before")
    @classmethod
    def strip_text(cls, v):
        return v.strip() if isinstance(v, str) else ("" if v is None else v)

    @field_validator("order", mode="before")
    @classmethod
    def default_order(cls, v):
        return 0 if v is None else v

    @field_validator("transport_mode", mode="before")
    @classmethod
    def blank_mode_is_none(cls, v):
        if isinstance(v, str):
            v = v.strip().lower()
            return v or None
        return v

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def date_part_only(cls, v):
        if isinstance(v, str):
            v = v.strip()
            if not v:
                return None
            return v.split("T", 1)[0]
        return v


class HomeLocation(TripModel):
    """The traveller's origin and return point.

    Optional everywhere: when geolocation is denied the caller passes
    ``None`` and the Home legs are simply left out.  A home missing
    either coordinate is treated the same way.
    """

    latitude: float | None = Field(default=None, ge=-90.0, le=90.0)
    longitude: float | None = Field(default=None, ge=-180.0, le=180.0)

    @property
    def has_coordinates(self) -> bool:
        return self.latitude is not None and self.longitude is not None
