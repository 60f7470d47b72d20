"""Static category registry.

Each category is bound to the sources that serve it (in merge order), the
provider-specific query parameter each source needs, and exactly one transform.
"""

from enum import Enum
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict

from place_aggregator.exceptions import UnsupportedCategoryError
from place_aggregator.models import Category, SourceTag


class TransformKind(str, Enum):
    """Transform implementations a category can be bound to."""

    EVENT = "event"
    PLACE = "place"


class CategoryConfig(BaseModel):
    """Immutable registry entry.

    Attributes:
        category: The category this entry serves.
        sources: Source tag to provider query parameter (Overpass tag selector,
            catalog dataset id or Geoapify category code), in merge order.
        transform: The transform applied to every item of this category.
    """

    model_config = ConfigDict(frozen=True)

    category: Category
    sources: dict[SourceTag, str]
    transform: TransformKind


CATEGORY_REGISTRY: MappingProxyType[Category, CategoryConfig] = MappingProxyType(
    {
        Category.RESTAURANT: CategoryConfig(
            category=Category.RESTAURANT,
            sources={
                SourceTag.OVERPASS: '"amenity"="restaurant"',
                SourceTag.OPENDATA: "restaurants-casvp",
                SourceTag.GEOAPIFY: "catering.restaurant",
            },
            transform=TransformKind.PLACE,
        ),
        Category.BAR: CategoryConfig(
            category=Category.BAR,
            sources={
                SourceTag.OVERPASS: '"amenity"="bar"',
                SourceTag.OPENDATA: "bars-de-paris",
                SourceTag.GEOAPIFY: "catering.bar",
            },
            transform=TransformKind.PLACE,
        ),
        Category.EVENT: CategoryConfig(
            category=Category.EVENT,
            sources={SourceTag.OPENDATA: "que-faire-a-paris-"},
            transform=TransformKind.EVENT,
        ),
        Category.ACTIVITY: CategoryConfig(
            category=Category.ACTIVITY,
            sources={
                SourceTag.OVERPASS: '"leisure"="sports_centre"',
                SourceTag.OPENDATA: "activites-paris",
                SourceTag.GEOAPIFY: "sports.leisure",
            },
            transform=TransformKind.PLACE,
        ),
    }
)


def get_category_config(name: str) -> CategoryConfig:
    """Look up a category by name, case-insensitively.

    Args:
        name: Category name as supplied by the caller.

    Returns:
        The registry entry.

    Raises:
        UnsupportedCategoryError: If the name is not a known category.
    """
    normalized = name.strip().lower()
    try:
        return CATEGORY_REGISTRY[Category(normalized)]
    except ValueError:
        raise UnsupportedCategoryError(normalized) from None
