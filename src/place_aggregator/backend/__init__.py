"""Backend package for the place aggregator."""

from .registry import CATEGORY_REGISTRY, CategoryConfig, TransformKind, get_category_config
from .service import PlaceAggregatorService, PlaceQuery
from .transport import HttpTransport, SourceRequest

__all__ = [
    "CATEGORY_REGISTRY",
    "CategoryConfig",
    "HttpTransport",
    "PlaceAggregatorService",
    "PlaceQuery",
    "SourceRequest",
    "TransformKind",
    "get_category_config",
]
