"""Trip route endpoints: legs, modes, geometry and distances."""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from tripcore.api.deps import get_route_planner
from tripcore.contracts.city import City, HomeLocation
from tripcore.services.itinerary import current_and_next_city
from tripcore.services.route_planner import RoutePlanner
from tripcore.services.transport_suggestion import allowed_modes, sea_hint

router = APIRouter(prefix="/trips", tags=["trips"])


class RouteRequest(BaseModel):
    """Cities of the trip plus the optional home location."""

    cities: list[City] = Field(default_factory=list)
    home: HomeLocation | None = None


class ProgressRequest(BaseModel):
    cities: list[City] = Field(default_factory=list)
    today: date | None = Field(default=None, description="Defaults to the server date")


@router.post("/route")
async def compute_route(
    request: RouteRequest,
    planner: RoutePlanner = Depends(get_route_planner),
) -> dict:
    """Compute legs, per-leg distances and the route GeoJSON."""
    route = await planner.compute(request.cities, request.home)
    data = route.to_dict()
    # Mode picker hints for each leg, same order as ``legs``
    for leg_data, leg in zip(data.get("legs", []), route.legs):
        leg_data["allowed_modes"] = allowed_modes(leg)
        hint = sea_hint(leg)
        if hint:
            leg_data["hint"] = hint
    return data


@router.post("/progress")
async def trip_progress(request: ProgressRequest) -> dict:
    """Current and next city of the trip for a given day."""
    current, nxt = current_and_next_city(request.cities, request.today or date.today())
    return {"current_index": current, "next_index": nxt}
