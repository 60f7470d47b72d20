"""Adapter for the Geoapify places API.

Responses are GeoJSON feature collections; coordinates are ``[lon, lat]``::

    {
        "type": "FeatureCollection",
        "features": [
            {
                "type": "Feature",
                "geometry": {"type": "Point", "coordinates": [2.35, 48.85]},
                "properties": {
                    "place_id": "51a1",
                    "name": "Le Bistrot",
                    "address_line1": "Le Bistrot",
                    "address_line2": "3 Rue Saint-Denis, 75001 Paris, France",
                    "categories": ["catering", "catering.restaurant"]
                }
            }
        ]
    }
"""

from __future__ import annotations

from typing import Any

from place_aggregator.backend.adapters.base import (
    BaseSourceAdapter,
    _as_dict,
    _as_text,
    join_address,
    make_coordinate,
)
from place_aggregator.backend.transport import SourceRequest
from place_aggregator.models import Coordinate, ExtractedTuple, SourceDetails, SourceTag


def get_geoapify_address(properties: dict[str, Any]) -> str:
    """Join the two address lines that are present."""
    return join_address(properties.get("address_line1"), properties.get("address_line2"))


class GeoapifyAdapter(BaseSourceAdapter):
    """Searches a category inside a fixed circle."""

    source = SourceTag.GEOAPIFY

    def build_request(self, query: str) -> SourceRequest:
        circle = f"circle:{self.settings.center_lng},{self.settings.center_lat},{self.settings.radius_m}"
        return SourceRequest(
            source=self.source,
            url=self.settings.geoapify_url,
            params={
                "categories": query,
                "filter": circle,
                "limit": str(self.settings.record_limit),
                "apiKey": self.settings.geoapify_api_key,
            },
        )

    def iter_items(self, body: Any) -> list[dict[str, Any]]:
        return self._items(body, "features")

    def get_coordinates(self, item: dict[str, Any]) -> Coordinate | None:
        coordinates = _as_dict(item.get("geometry")).get("coordinates")
        if not isinstance(coordinates, list) or len(coordinates) < 2:
            return None
        # GeoJSON order is [lon, lat]
        return make_coordinate(coordinates[1], coordinates[0])

    def extract(self, item: dict[str, Any]) -> ExtractedTuple:
        properties = _as_dict(item.get("properties"))
        categories = properties.get("categories")
        return ExtractedTuple(
            id=str(properties.get("place_id", "")),
            title=_as_text(properties.get("name")),
            address=get_geoapify_address(properties),
            location=self.get_coordinates(item),
            source=self.source,
            details=SourceDetails(
                description=_as_text(properties.get("description")),
                opening_hours=_as_text(properties.get("opening_hours")),
                categories=[str(c) for c in categories] if isinstance(categories, list) else [],
            ),
            raw=item,
        )
