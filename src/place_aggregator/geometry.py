"""Geometry helpers: great-circle distance, proximity tests and the two
pipeline steps built on them."""

import math
from collections.abc import Sequence

import numpy as np

from place_aggregator.models import Coordinate, Place

EARTH_RADIUS_M = 6_371_000.0
DEFAULT_DUPLICATE_TOLERANCE = 0.0001


def _haversine(lat1, lng1, lat2, lng2):
    """Haversine distance in meters; accepts scalars or numpy arrays."""
    phi1 = np.radians(lat1)
    phi2 = np.radians(lat2)
    d_phi = np.radians(np.subtract(lat2, lat1))
    d_lambda = np.radians(np.subtract(lng2, lng1))

    h = np.sin(d_phi / 2) ** 2 + np.cos(phi1) * np.cos(phi2) * np.sin(d_lambda / 2) ** 2
    # Out-of-range upstream coordinates can push h outside [0, 1]; they become NaN.
    with np.errstate(invalid="ignore"):
        c = 2 * np.arctan2(np.sqrt(h), np.sqrt(1 - h))
    return EARTH_RADIUS_M * c


def distance(a: Coordinate, b: Coordinate) -> float:
    """Return the great-circle distance between two coordinates.

    Uses the spherical law of haversines with a mean Earth radius of 6 371 km.

    Args:
        a: First coordinate.
        b: Second coordinate.

    Returns:
        The distance in meters.
    """
    return float(_haversine(a.lat, a.lng, b.lat, b.lng))


def is_near_duplicate(
    a: Coordinate, b: Coordinate, tolerance: float = DEFAULT_DUPLICATE_TOLERANCE
) -> bool:
    """Return True when both axes differ by strictly less than ``tolerance``.

    The tolerance is in raw degrees, not meters (about 7-11 m around Paris).

    Args:
        a: First coordinate.
        b: Second coordinate.
        tolerance: Maximum per-axis difference in degrees (exclusive).

    Returns:
        True if the two coordinates are near-duplicates.
    """
    return abs(a.lat - b.lat) < tolerance and abs(a.lng - b.lng) < tolerance


def filter_by_distance(
    places: Sequence[Place], origin: Coordinate, max_distance: float | None = None
) -> list[Place]:
    """Keep the places within ``max_distance`` meters of ``origin``.

    Places without a location are dropped. The bound is inclusive and ``None``
    means unbounded. Order is preserved.

    Args:
        places: Candidate places, in merge order.
        origin: The user location.
        max_distance: Maximum distance in meters, or None.

    Returns:
        The places that pass the filter.
    """
    located = [place for place in places if place.location is not None]
    if not located:
        return []

    limit = math.inf if max_distance is None else max_distance
    lats = np.array([place.location.lat for place in located], dtype=float)
    lngs = np.array([place.location.lng for place in located], dtype=float)
    distances = _haversine(origin.lat, origin.lng, lats, lngs)

    # NaN distances compare False and are dropped.
    keep = distances <= limit
    return [place for place, kept in zip(located, keep) if kept]


def deduplicate(
    places: Sequence[Place], tolerance: float = DEFAULT_DUPLICATE_TOLERANCE
) -> list[Place]:
    """Drop places that are near-duplicates of an earlier place.

    First seen wins: the earliest place in the sequence is kept unchanged and
    later duplicates are discarded with all their fields.

    Args:
        places: Places in merge order.
        tolerance: Per-axis degree tolerance.

    Returns:
        The places that survived, in their original order.
    """
    unique: list[Place] = []
    for place in places:
        if place.location is None:
            continue
        if any(is_near_duplicate(kept.location, place.location, tolerance) for kept in unique):
            continue
        unique.append(place)
    return unique
