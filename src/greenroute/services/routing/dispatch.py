"""Quick dispatch ordering from a crew's current position."""

from __future__ import annotations

from typing import Optional, Sequence

from ...config import settings
from ...models.domain import RoutePoint, RouteSummary
from ..geospatial import HasCoordinates, distance, route_distance

PRIORITY_WEIGHTS: dict[str, float] = {"high": 0.5, "medium": 1.0, "low": 1.5}


def order_by_priority(points: Sequence[RoutePoint], current_location: HasCoordinates) -> list[RoutePoint]:
    """Sort stops by distance from ``current_location``, pulling high-priority jobs forward.

    A high priority job counts as half its real distance, a low priority one as
    one and a half times. Ties keep their input order.
    """

    return sorted(
        points,
        key=lambda point: distance(current_location, point) * PRIORITY_WEIGHTS[point.priority],
    )


def summarize_route(
    points: Sequence[RoutePoint],
    start_location: Optional[HasCoordinates] = None,
    travel_buffer_minutes: Optional[float] = None,
    fuel_gallons_per_mile: Optional[float] = None,
) -> RouteSummary:
    buffer = settings.travel_buffer_minutes if travel_buffer_minutes is None else travel_buffer_minutes
    fuel_rate = settings.fuel_gallons_per_mile if fuel_gallons_per_mile is None else fuel_gallons_per_mile

    path: list[HasCoordinates] = list(points)
    if start_location is not None and points:
        path.insert(0, start_location)

    total_distance = route_distance(path)
    total_time = sum((point.duration_minutes + buffer for point in points), 0.0)
    return RouteSummary(
        total_distance_miles=total_distance,
        total_time_minutes=total_time,
        estimated_fuel_gallons=total_distance * fuel_rate,
    )
