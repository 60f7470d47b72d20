"""Adapter for the Overpass tag database.

The interpreter takes a plain-text query and returns tagged nodes::

    {
        "elements": [
            {
                "type": "node",
                "id": 123,
                "lat": 48.8566,
                "lon": 2.3522,
                "tags": {"name": "Chez Paul", "addr:street": "Rue de Charonne"}
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

QUERY_TEMPLATE = """[out:json];
area[name="{area}"]->.searchArea;
node[{selector}](area.searchArea);
out body;"""


def get_overpass_address(tags: dict[str, Any]) -> str:
    """Build an address from house number, street and city tags.

    Absent tags are skipped; no tags gives an empty string.
    """
    return join_address(
        tags.get("addr:housenumber"),
        tags.get("addr:street"),
        tags.get("addr:city"),
    )


class OverpassAdapter(BaseSourceAdapter):
    """Queries named-area nodes matching a tag selector."""

    source = SourceTag.OVERPASS

    def build_request(self, query: str) -> SourceRequest:
        return SourceRequest(
            source=self.source,
            method="POST",
            url=self.settings.overpass_url,
            data=QUERY_TEMPLATE.format(area=self.settings.area_name, selector=query),
            headers={"Content-Type": "text/plain"},
        )

    def iter_items(self, body: Any) -> list[dict[str, Any]]:
        return self._items(body, "elements")

    def get_coordinates(self, item: dict[str, Any]) -> Coordinate | None:
        return make_coordinate(item.get("lat"), item.get("lon"))

    def extract(self, item: dict[str, Any]) -> ExtractedTuple:
        tags = _as_dict(item.get("tags"))
        return ExtractedTuple(
            id=str(item.get("id", "")),
            title=_as_text(tags.get("name")),
            address=get_overpass_address(tags),
            location=self.get_coordinates(item),
            source=self.source,
            details=SourceDetails(
                cuisine=_as_text(tags.get("cuisine")),
                opening_hours=_as_text(tags.get("opening_hours")),
            ),
            raw=item,
        )
