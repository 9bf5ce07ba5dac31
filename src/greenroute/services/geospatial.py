"""Geospatial helper functions."""

from __future__ import annotations

import math
from typing import Protocol, Sequence

from ..models.domain import validate_coordinate

EARTH_RADIUS_MILES = 3959.0


class HasCoordinates(Protocol):
    latitude: float
    longitude: float


def haversine_miles(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Compute distance between two coordinates using the Haversine formula."""

    # Evaluate on the ordered pair so (a, b) and (b, a) round identically.
    if (lat2, lon2) < (lat1, lon1):
        lat1, lon1, lat2, lon2 = lat2, lon2, lat1, lon1

    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_MILES * c


def distance(point_a: HasCoordinates, point_b: HasCoordinates) -> float:
    """Great-circle distance in statute miles between two points.

    Raises ``InvalidCoordinate`` if either point carries a missing or
    out-of-range coordinate.
    """

    lat1, lon1 = validate_coordinate(getattr(point_a, "latitude", None), getattr(point_a, "longitude", None))
    lat2, lon2 = validate_coordinate(getattr(point_b, "latitude", None), getattr(point_b, "longitude", None))
    return haversine_miles(lat1, lon1, lat2, lon2)


def route_distance(points: Sequence[HasCoordinates]) -> float:
    """Total miles travelled visiting ``points`` in order, without returning to the start."""

    return sum((distance(points[i], points[i + 1]) for i in range(len(points) - 1)), 0.0)


def leg_distances(points: Sequence[HasCoordinates]) -> list[float]:
    return [distance(points[i], points[i + 1]) for i in range(len(points) - 1)]


def travel_minutes(miles: float, speed_mph: float) -> float:
    if speed_mph <= 0:
        raise ValueError(f"Speed must be positive, got {speed_mph}")
    return miles / speed_mph * 60
