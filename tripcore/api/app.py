"""FastAPI application factory."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI

# Load .env file from project root (must be before other imports)
load_dotenv()
from fastapi.middleware.cors import CORSMiddleware  # noqa: E402

from tripcore.api.routes import geocoding, trips  # noqa: E402
from tripcore.config import get_settings  # noqa: E402
from tripcore.services.directions_client import MapboxDirectionsClient  # noqa: E402
from tripcore.services.geocoding_client import NominatimClient  # noqa: E402

logger = logging.getLogger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the shared provider clients on startup, close them on shutdown."""
    directions = MapboxDirectionsClient(
        access_token=settings.mapbox_token,
        base_url=settings.directions_url,
        timeout=settings.directions_timeout_s,
    )
    if not directions.enabled:
        logger.warning("MAPBOX_TOKEN not set: land legs will be drawn as gaps")
    geocoder = NominatimClient(
        base_url=settings.nominatim_url,
        user_agent=settings.nominatim_user_agent,
        timeout=settings.geocoding_timeout_s,
    )
    app.state.settings = settings
    app.state.directions = directions
    app.state.geocoder = geocoder
    logger.info("Provider clients initialized")
    try:
        yield
    finally:
        await directions.aclose()
        await geocoder.aclose()


app = FastAPI(
    title="tripcore API",
    description="Multi-city trip legs, transport modes and route distances",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(trips.router, prefix="/api")
app.include_router(geocoding.router, prefix="/api")


@app.get("/api/health")
async def health():
    current = getattr(app.state, "settings", settings)
    return {
        "status": "ok",
        "directions_enabled": current.directions_enabled,
    }
