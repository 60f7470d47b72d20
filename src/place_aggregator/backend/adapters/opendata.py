"""Adapter for the open-data catalog (Paris open-data portal, API v2).

Records wrap a ``fields`` object; geolocated datasets expose a ``tt`` point::

    {
        "records": [
            {
                "record": {
                    "id": "abc",
                    "fields": {
                        "titre": "Concert",
                        "adresse": "1 Place du Châtelet",
                        "tt": {"lat": 48.858, "lon": 2.347}
                    }
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
    make_coordinate,
)
from place_aggregator.backend.transport import SourceRequest
from place_aggregator.models import Coordinate, ExtractedTuple, SourceDetails, SourceTag

# Title fields, first present wins.
TITLE_FIELDS = ("titre", "nom_restaurant", "nom_du_bar")


def get_opendata_address(fields: dict[str, Any]) -> str:
    """Return the flat ``adresse`` field, or an empty string."""
    return str(fields.get("adresse") or "")


def _record_fields(item: dict[str, Any]) -> dict[str, Any]:
    return _as_dict(_as_dict(item.get("record")).get("fields"))


class OpenDataAdapter(BaseSourceAdapter):
    """Reads the first page of a catalog dataset."""

    source = SourceTag.OPENDATA

    def build_request(self, query: str) -> SourceRequest:
        base_url = self.settings.opendata_base_url.rstrip("/")
        return SourceRequest(
            source=self.source,
            url=f"{base_url}/catalog/datasets/{query}/records",
            params={"limit": str(self.settings.record_limit)},
        )

    def iter_items(self, body: Any) -> list[dict[str, Any]]:
        return self._items(body, "records")

    def get_coordinates(self, item: dict[str, Any]) -> Coordinate | None:
        point = _record_fields(item).get("tt")
        if not isinstance(point, dict):
            return None
        return make_coordinate(point.get("lat"), point.get("lon"))

    def extract(self, item: dict[str, Any]) -> ExtractedTuple:
        record = _as_dict(item.get("record"))
        fields = _record_fields(item)
        title = next((fields[name] for name in TITLE_FIELDS if fields.get(name)), None)
        return ExtractedTuple(
            id=str(record.get("id", "")),
            title=_as_text(title),
            address=get_opendata_address(fields),
            location=self.get_coordinates(item),
            source=self.source,
            details=SourceDetails(
                description=_as_text(fields.get("descriptif")),
                title=_as_text(fields.get("titre")),
            ),
            raw=item,
        )
