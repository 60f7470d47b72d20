"""Abstract base class for source adapters."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from typing import Any

from place_aggregator.backend.transport import SourceRequest
from place_aggregator.config import SourceSettings
from place_aggregator.models import Coordinate, ExtractedTuple, SourceTag


def _to_float(value: Any) -> float | None:
    """Parse a coordinate component, returning None when it is unusable."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def make_coordinate(lat: Any, lng: Any) -> Coordinate | None:
    """Build a Coordinate from loosely typed values, or None if either is unusable."""
    parsed_lat = _to_float(lat)
    parsed_lng = _to_float(lng)
    if parsed_lat is None or parsed_lng is None:
        return None
    return Coordinate(lat=parsed_lat, lng=parsed_lng)


def _as_dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_text(value: Any) -> str | None:
    if value is None or value == "":
        return None
    return str(value)


def join_address(*parts: Any) -> str:
    """Join the non-empty parts with ``", "``; empty string when none are present."""
    return ", ".join(str(part) for part in parts if part)


class BaseSourceAdapter(ABC):
    """Contract that every provider adapter must satisfy.

    Sub-classes build the outbound request for a registry query parameter and
    translate the provider's raw response into :class:`ExtractedTuple` objects.
    Extraction is total: missing optional fields yield ``None`` or ``""``.
    """

    source: SourceTag

    def __init__(self, settings: SourceSettings) -> None:
        self.settings = settings

    @abstractmethod
    def build_request(self, query: str) -> SourceRequest:
        """Build the request for a registry query parameter.

        Args:
            query: The provider-specific parameter from the category registry.

        Returns:
            The request to send.
        """

    @abstractmethod
    def iter_items(self, body: Any) -> list[dict[str, Any]]:
        """Return the raw items contained in a response body."""

    @abstractmethod
    def extract(self, item: dict[str, Any]) -> ExtractedTuple:
        """Convert one raw item to an :class:`ExtractedTuple`."""

    @abstractmethod
    def get_coordinates(self, item: dict[str, Any]) -> Coordinate | None:
        """Locate the item's coordinates, or None when they cannot be found."""

    def parse_response(self, body: Any) -> list[ExtractedTuple]:
        """Translate a decoded response body into extracted tuples.

        Args:
            body: The decoded JSON body returned by the provider.

        Returns:
            One tuple per raw item, in provider order.
        """
        return [self.extract(item) for item in self.iter_items(body) if isinstance(item, dict)]

    @staticmethod
    def _items(body: Any, key: str) -> list[Any]:
        items = _as_dict(body).get(key)
        return items if isinstance(items, list) else []
