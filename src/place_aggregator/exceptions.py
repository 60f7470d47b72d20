"""Exception hierarchy for the place aggregator.

Caller errors describe bad or missing input and are safe to show to the client.
Server errors describe upstream or internal failures; their details stay in the
server log.
"""

from place_aggregator.models import SourceTag


class PlaceAggregatorError(Exception):
    """Base class for all aggregator errors."""


class CallerError(PlaceAggregatorError):
    """The request was rejected before any provider was contacted."""


class MissingCoordinatesError(CallerError):
    """Latitude or longitude was not supplied."""

    def __init__(self) -> None:
        super().__init__("lat and lng are required")


class InvalidParameterError(CallerError):
    """A query parameter could not be parsed."""

    def __init__(self, name: str, value: object) -> None:
        self.name = name
        self.value = value
        super().__init__(f"parameter '{name}' must be a number, got {value!r}")


class UnsupportedCategoryError(CallerError):
    """The requested category is not in the registry."""

    def __init__(self, category: str) -> None:
        self.category = category
        super().__init__(f"category '{category}' not supported")


class ServerError(PlaceAggregatorError):
    """The aggregation failed on the server side."""


class UpstreamError(ServerError):
    """A provider call failed at the transport level or returned a bad status."""

    def __init__(self, source: SourceTag, message: str) -> None:
        self.source = source
        super().__init__(f"{source.value}: {message}")
