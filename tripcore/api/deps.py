"""FastAPI dependency injection wiring."""

from __future__ import annotations

from fastapi import Depends, Request

from tripcore.services.directions_client import MapboxDirectionsClient
from tripcore.services.geocoding_client import NominatimClient
from tripcore.services.route_planner import RoutePlanner


# ------------------------------------------------------------------
# Provider clients (singletons from app.state)
# ------------------------------------------------------------------


def get_directions_client(request: Request) -> MapboxDirectionsClient:
    return request.app.state.directions


def get_geocoder(request: Request) -> NominatimClient:
    return request.app.state.geocoder


# ------------------------------------------------------------------
# Services (new instance per request)
# ------------------------------------------------------------------


def get_route_planner(
    directions: MapboxDirectionsClient = Depends(get_directions_client),
) -> RoutePlanner:
    return RoutePlanner(directions)
