"""Places API routes."""

from functools import lru_cache
from typing import Any

from fastapi import APIRouter, Depends, Query

from place_aggregator.backend.service import PlaceAggregatorService
from place_aggregator.config import get_settings

router = APIRouter()


@lru_cache
def get_service() -> PlaceAggregatorService:
    """Return the process-wide aggregator service."""
    return PlaceAggregatorService(get_settings())


@router.get("")
def get_places(
    lat: str | None = Query(None, description="User latitude"),
    lng: str | None = Query(None, description="User longitude"),
    max_distance: str | None = Query(None, alias="maxDistance", description="Meters"),
    category: str | None = Query(None, description="restaurant, bar, event or activity"),
    service: PlaceAggregatorService = Depends(get_service),
) -> list[dict[str, Any]]:
    """
    Aggregate places around a location.

    Caller errors and upstream failures are raised as exceptions and turned into
    400 and 500 responses by the handlers registered in `create_app`.
    """
    places = service.fetch_places(lat, lng, max_distance, category)
    return [place.to_dict() for place in places]
