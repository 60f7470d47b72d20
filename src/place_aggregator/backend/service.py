"""Module for the place aggregation pipeline.

This module provides the core service class `PlaceAggregatorService`, which
resolves a query against the category registry, fans out to the applicable
providers concurrently, normalizes every item into a Place, and filters and
deduplicates the merged result.
"""

import logging
import math
import random
from concurrent.futures import FIRST_EXCEPTION, Future, ThreadPoolExecutor, wait
from typing import Any

from pydantic import BaseModel, ConfigDict

from place_aggregator.backend.adapters import BaseSourceAdapter, build_adapters
from place_aggregator.backend.registry import CategoryConfig, get_category_config
from place_aggregator.backend.transforms import TRANSFORMS, Clock, local_now
from place_aggregator.backend.transport import HttpTransport, Transport
from place_aggregator.config import Settings
from place_aggregator.exceptions import (
    InvalidParameterError,
    MissingCoordinatesError,
    PlaceAggregatorError,
    ServerError,
)
from place_aggregator.geometry import deduplicate, filter_by_distance
from place_aggregator.models import Coordinate, Place, SourceTag

logger = logging.getLogger(__name__)


class PlaceQuery(BaseModel):
    """A validated aggregation request.

    Attributes:
        origin: The user location.
        max_distance: Maximum distance in meters, None for unbounded.
        config: The registry entry for the requested category.
    """

    model_config = ConfigDict(frozen=True)

    origin: Coordinate
    max_distance: float | None
    config: CategoryConfig


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _parse_number(name: str, value: Any) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidParameterError(name, value) from None
    if math.isnan(number):
        raise InvalidParameterError(name, value)
    return number


class PlaceAggregatorService:
    """Core business logic of the aggregator.

    Attributes:
        settings (Settings): Application configuration settings.
        transport (Transport): Executes provider requests.
        adapters (dict[SourceTag, BaseSourceAdapter]): One adapter per provider.
        rng (random.Random): Source of the synthesized rating, review and budget values.
        now (Clock): Clock used for the availability window.
    """

    def __init__(
        self,
        settings: Settings,
        transport: Transport | None = None,
        rng: random.Random | None = None,
        now: Clock = local_now,
    ) -> None:
        """Initialize the PlaceAggregatorService.

        Args:
            settings: Application configuration object.
            transport: Optional transport; defaults to an HttpTransport.
            rng: Optional random source, inject a seeded one for determinism.
            now: Optional clock.
        """
        self.settings = settings
        self.transport = transport or HttpTransport(settings.sources)
        self.adapters: dict[SourceTag, BaseSourceAdapter] = build_adapters(settings.sources)
        self.rng = rng or random.Random()
        self.now = now

    def resolve(
        self,
        lat: Any,
        lng: Any,
        max_distance: Any = None,
        category: str | None = None,
    ) -> PlaceQuery:
        """Validate raw query parameters.

        Args:
            lat: User latitude, number or numeric string.
            lng: User longitude, number or numeric string.
            max_distance: Optional maximum distance in meters.
            category: Optional category name, case-insensitive.

        Returns:
            The validated query.

        Raises:
            MissingCoordinatesError: If lat or lng is missing.
            InvalidParameterError: If a numeric parameter cannot be parsed.
            UnsupportedCategoryError: If the category is unknown.
        """
        if _is_blank(lat) or _is_blank(lng):
            raise MissingCoordinatesError()

        origin = Coordinate(lat=_parse_number("lat", lat), lng=_parse_number("lng", lng))
        distance = None if _is_blank(max_distance) else _parse_number("maxDistance", max_distance)
        name = self.settings.pipeline.default_category if _is_blank(category) else category
        return PlaceQuery(origin=origin, max_distance=distance, config=get_category_config(name))

    def fetch_places(
        self,
        lat: Any,
        lng: Any,
        max_distance: Any = None,
        category: str | None = None,
    ) -> list[Place]:
        """Aggregate, filter and deduplicate places around a location.

        Args:
            lat: User latitude.
            lng: User longitude.
            max_distance: Optional maximum distance in meters.
            category: Optional category name, defaults to the configured one.

        Returns:
            Deduplicated places in source-declaration order.

        Raises:
            CallerError: On missing or invalid input; no provider is contacted.
            ServerError: If any provider call fails; no partial result is returned.
        """
        query = self.resolve(lat, lng, max_distance, category)
        logger.info(
            f"Fetching '{query.config.category.value}' places around "
            f"({query.origin.lat}, {query.origin.lng}), max_distance={query.max_distance}"
        )

        bodies = self._dispatch(query.config)

        try:
            places = self._merge(query.config, bodies)
        except PlaceAggregatorError:
            raise
        except Exception as exception:
            logger.error(f"Failed to normalize provider responses: {exception}", exc_info=True)
            raise ServerError("failed to normalize provider responses") from exception

        nearby = filter_by_distance(places, query.origin, query.max_distance)
        unique = deduplicate(nearby, self.settings.pipeline.duplicate_tolerance)
        logger.info(
            f"Merged {len(places)} places, {len(nearby)} within range, {len(unique)} after dedup"
        )
        return unique

    def _dispatch(self, config: CategoryConfig) -> dict[SourceTag, Any]:
        """Send one request per applicable source concurrently.

        Returns as soon as every call finished or one failed. On failure the
        remaining calls are left to finish on their own and their results are
        discarded.

        Returns:
            Decoded response bodies keyed by source tag.

        Raises:
            ServerError: The first failure observed.
        """
        requests_by_source = {
            tag: self.adapters[tag].build_request(query) for tag, query in config.sources.items()
        }

        executor = ThreadPoolExecutor(
            max_workers=len(requests_by_source), thread_name_prefix="source"
        )
        try:
            futures: dict[Future, SourceTag] = {
                executor.submit(self.transport.send, request): tag
                for tag, request in requests_by_source.items()
            }
            done, _ = wait(futures, return_when=FIRST_EXCEPTION)

            for future in done:
                exception = future.exception()
                if exception is not None:
                    tag = futures[future]
                    logger.error(f"Source '{tag.value}' failed: {exception}", exc_info=exception)
                    if isinstance(exception, ServerError):
                        raise exception
                    raise ServerError(f"source '{tag.value}' failed") from exception

            return {tag: future.result() for future, tag in futures.items()}
        finally:
            executor.shutdown(wait=False, cancel_futures=True)

    def _merge(self, config: CategoryConfig, bodies: dict[SourceTag, Any]) -> list[Place]:
        """Parse and transform every response, concatenated in declaration order."""
        transform = TRANSFORMS[config.transform]
        places: list[Place] = []
        for tag in config.sources:
            items = self.adapters[tag].parse_response(bodies[tag])
            logger.debug(f"Source '{tag.value}' returned {len(items)} items")
            places.extend(transform(item, self.rng, self.now) for item in items)
        return places
