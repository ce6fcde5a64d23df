"""Base classes and shared types for tripcore contracts.

Unit conventions (all contracts and API responses):
- **Distances**: kilometres (km): suffix ``_km``
- **Coordinates**: WGS84 decimal degrees
- **Geometry**: GeoJSON order, ``(longitude, latitude)`` pairs
- **Dates**: ISO 8601 calendar dates in serialized form

Field names are snake_case.  The web and mobile clients send camelCase
(``transportMode``, ``startDate``); those are accepted as aliases.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict


class TripModel(BaseModel):
    """Base model with JSON-friendly serialization.

    - Enums serialize as string values.
    - ``to_dict()`` produces a JSON-safe dict (dates as ISO 8601).
    - ``from_dict()`` hydrates from a client payload dict.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        use_enum_values=True,
    )

    def to_dict(self) -> dict[str, Any]:
        """Dump to a JSON-compatible dict."""
        return self.model_dump(mode="json", exclude_none=True)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TripModel":
        """Create model instance from a payload dict."""
        return cls.model_validate(data)
