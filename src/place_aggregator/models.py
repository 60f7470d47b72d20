"""Pydantic models for the place_aggregator package.

This module defines the data models used throughout the application: the
coordinate value type, the provider-agnostic tuple every source adapter produces,
and the unified place record returned to callers. It uses Pydantic for data
validation and for the camelCase wire format of the API.
"""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

PLACEHOLDER_IMAGE = "/placeholder.svg?height=400&width=600"


class SourceTag(str, Enum):
    """Upstream providers, in canonical merge order."""

    OVERPASS = "overpass"
    OPENDATA = "opendata"
    GEOAPIFY = "geoapify"


class Category(str, Enum):
    """Categories a caller can ask for."""

    RESTAURANT = "restaurant"
    BAR = "bar"
    EVENT = "event"
    ACTIVITY = "activity"


class Coordinate(BaseModel):
    """A point in decimal degrees.

    Out-of-range values coming from malformed upstream data are kept as-is; the
    distance filter rejects them later instead of raising here.
    """

    model_config = ConfigDict(frozen=True)

    lat: float
    lng: float


class SourceDetails(BaseModel):
    """Enrichment hints an adapter lifts out of its raw payload.

    Attributes:
        cuisine: Cuisine tag (Overpass).
        opening_hours: Opening hours string (Overpass, Geoapify).
        description: Free-text description (catalog ``descriptif``, Geoapify).
        title: Catalog title (``titre``).
        categories: Provider categories (Geoapify).
    """

    cuisine: str | None = None
    opening_hours: str | None = None
    description: str | None = None
    title: str | None = None
    categories: list[str] = Field(default_factory=list)


class ExtractedTuple(BaseModel):
    """Provider-agnostic record produced by a source adapter.

    A missing ``location`` makes the tuple non-filterable: it is still
    transformed, then dropped by the distance filter.
    """

    id: str
    title: str | None = None
    address: str = ""
    location: Coordinate | None = None
    source: SourceTag
    details: SourceDetails = Field(default_factory=SourceDetails)
    raw: dict[str, Any] = Field(default_factory=dict, repr=False)


class Place(BaseModel):
    """Unified point-of-interest record returned to callers.

    ``rating``, ``review_count`` and ``budget`` are synthesized placeholders; no
    review or pricing data exists upstream.

    Attributes:
        id: Identifier, unique within its source only.
        title: Display name.
        description: Free-text description.
        category: Human readable category label.
        image: Image URL.
        address: Postal address, possibly empty.
        location: Coordinates, absent when the provider gave none.
        time_range: Opening hours or default time window.
        start_time: Start of the availability window.
        end_time: End of the availability window.
        budget: Synthesized budget per person.
        min_participants: Lower participant bound.
        max_participants: Upper participant bound.
        rating: Synthesized rating (3.0-5.0).
        review_count: Synthesized review count (0-299).
        highlights: Short selling points.
        source: Provider the record came from.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    title: str
    description: str
    category: str
    image: str = PLACEHOLDER_IMAGE
    address: str = ""
    location: Coordinate | None = None
    time_range: str
    start_time: datetime
    end_time: datetime
    budget: int = Field(..., ge=10, le=59)
    min_participants: int = Field(..., ge=0)
    max_participants: int = Field(..., ge=0)
    rating: float = Field(..., ge=3.0, le=5.0)
    review_count: int = Field(..., ge=0, lt=300)
    highlights: list[str] = Field(default_factory=list)
    source: SourceTag

    def to_dict(self) -> dict[str, Any]:
        """Convert the model to a JSON-ready dictionary using camelCase aliases.

        Returns:
            dict[str, Any]: A dictionary representation of the place.
        """
        return self.model_dump(mode="json", by_alias=True)
