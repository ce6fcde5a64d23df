"""Geocoding endpoints: proxied Nominatim lookups for the clients."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field

from tripcore.api.deps import get_geocoder
from tripcore.services.errors import GeocodingError
from tripcore.services.geocoding_client import NominatimClient

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/geocode", tags=["geocoding"])


class MapClick(BaseModel):
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    order: int = Field(default=0, ge=0)


@router.get("")
async def search(
    q: str,
    limit: int = Query(default=5, ge=1, le=20),
    geocoder: NominatimClient = Depends(get_geocoder),
) -> list[dict]:
    try:
        cities = await geocoder.search(q, limit)
    except GeocodingError as e:
        logger.warning("Geocoding search failed for %r: %s", q, e)
        raise HTTPException(status_code=502, detail=f"Geocoding API error: {e}")
    return [city.to_dict() for city in cities]


@router.get("/reverse")
async def reverse(
    lat: float = Query(..., ge=-90, le=90),
    lon: float = Query(..., ge=-180, le=180),
    geocoder: NominatimClient = Depends(get_geocoder),
) -> dict:
    found = await geocoder.reverse_geocode(lat, lon)
    if found is None:
        raise HTTPException(status_code=404, detail="No place found")
    return {"name": found.name, "address": found.address, "country": found.country}


@router.post("/click", status_code=201)
async def city_from_click(
    click: MapClick,
    geocoder: NominatimClient = Depends(get_geocoder),
) -> dict:
    """New city for a point picked on the map."""
    city = await geocoder.city_from_map_click(click.latitude, click.longitude, click.order)
    return city.to_dict()
