"""Multi-source point-of-interest aggregator."""

from .backend.registry import CATEGORY_REGISTRY, get_category_config
from .backend.service import PlaceAggregatorService
from .config import Settings, get_settings
from .exceptions import CallerError, ServerError
from .geometry import deduplicate, distance, filter_by_distance, is_near_duplicate
from .logger import configure_logging
from .models import Category, Coordinate, ExtractedTuple, Place, SourceTag

__all__ = [
    "CATEGORY_REGISTRY",
    "CallerError",
    "Category",
    "Coordinate",
    "ExtractedTuple",
    "Place",
    "PlaceAggregatorService",
    "ServerError",
    "Settings",
    "SourceTag",
    "configure_logging",
    "deduplicate",
    "distance",
    "filter_by_distance",
    "get_category_config",
    "get_settings",
    "is_near_duplicate",
]
