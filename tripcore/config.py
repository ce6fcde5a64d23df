"""Environment-driven settings.

Values come from the process environment, optionally seeded from a
``.env`` file at the project root.
"""

from __future__ import annotations

import os

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

DEFAULT_DIRECTIONS_URL = "https://api.mapbox.com/directions/v5/mapbox"
DEFAULT_NOMINATIM_URL = "https://nominatim.openstreetmap.org"


class Settings(BaseModel):
    """Provider endpoints, credentials and timeouts."""

    mapbox_token: str = ""
    directions_url: str = DEFAULT_DIRECTIONS_URL
    directions_timeout_s: float = Field(default=15.0, gt=0)
    nominatim_url: str = DEFAULT_NOMINATIM_URL
    nominatim_user_agent: str = "tripcore/0.1"
    geocoding_timeout_s: float = Field(default=15.0, gt=0)
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:5173"]
    )

    model_config = ConfigDict(frozen=True)

    @property
    def directions_enabled(self) -> bool:
        return bool(self.mapbox_token)


def get_settings() -> Settings:
    """Build settings from the environment (``.env`` loaded first)."""
    load_dotenv()
    env = os.environ
    values: dict = {
        "mapbox_token": env.get("MAPBOX_TOKEN", "").strip(),
        "directions_url": env.get("MAPBOX_DIRECTIONS_URL", DEFAULT_DIRECTIONS_URL),
        "nominatim_url": env.get("NOMINATIM_URL", DEFAULT_NOMINATIM_URL),
        "nominatim_user_agent": env.get("NOMINATIM_USER_AGENT", "tripcore/0.1"),
        "cors_origins": [
            o.strip()
            for o in env.get("CORS_ORIGINS", "http://localhost:5173").split(",")
            if o.strip()
        ],
    }
    if "DIRECTIONS_TIMEOUT_S" in env:
        values["directions_timeout_s"] = env["DIRECTIONS_TIMEOUT_S"]
    if "GEOCODING_TIMEOUT_S" in env:
        values["geocoding_timeout_s"] = env["GEOCODING_TIMEOUT_S"]
    return Settings.model_validate(values)
