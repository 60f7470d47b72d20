"""Source adapters, one per upstream provider."""

from place_aggregator.backend.adapters.base import BaseSourceAdapter
from place_aggregator.backend.adapters.geoapify import GeoapifyAdapter, get_geoapify_address
from place_aggregator.backend.adapters.opendata import OpenDataAdapter, get_opendata_address
from place_aggregator.backend.adapters.overpass import OverpassAdapter, get_overpass_address
from place_aggregator.config import SourceSettings
from place_aggregator.models import SourceTag

ADAPTER_TYPES: dict[SourceTag, type[BaseSourceAdapter]] = {
    SourceTag.OVERPASS: OverpassAdapter,
    SourceTag.OPENDATA: OpenDataAdapter,
    SourceTag.GEOAPIFY: GeoapifyAdapter,
}


def build_adapters(settings: SourceSettings) -> dict[SourceTag, BaseSourceAdapter]:
    """Instantiate one adapter per source tag."""
    return {tag: adapter_type(settings) for tag, adapter_type in ADAPTER_TYPES.items()}


__all__ = [
    "ADAPTER_TYPES",
    "BaseSourceAdapter",
    "GeoapifyAdapter",
    "OpenDataAdapter",
    "OverpassAdapter",
    "build_adapters",
    "get_geoapify_address",
    "get_opendata_address",
    "get_overpass_address",
]
