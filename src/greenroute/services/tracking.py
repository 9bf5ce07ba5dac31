"""GPS trail helpers: ETAs, travelled distance and planned-vs-actual comparison."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional, Sequence

from ..config import settings
from ..models.domain import GPSLocation, RouteComparison
from .geospatial import HasCoordinates, distance, route_distance, travel_minutes


def calculate_eta(
    current: HasCoordinates,
    destination: HasCoordinates,
    speed_mph: Optional[float] = None,
    now: Optional[datetime] = None,
) -> datetime:
    """Estimated arrival time driving straight-line distance at ``speed_mph``."""

    speed = settings.average_speed_mph if speed_mph is None else speed_mph
    minutes = travel_minutes(distance(current, destination), speed)
    return (now or datetime.now(timezone.utc)) + timedelta(minutes=minutes)


def trail_distance(locations: Sequence[GPSLocation]) -> float:
    """Miles covered across consecutive GPS fixes."""

    return route_distance(locations)


def compare_routes(
    planned_route: Sequence[HasCoordinates],
    actual_trail: Sequence[GPSLocation],
    planned_duration_minutes: float,
    actual_duration_minutes: Optional[float] = None,
) -> RouteComparison:
    """Compare a planned stop sequence with the GPS trail actually driven.

    When ``actual_duration_minutes`` is omitted it is taken from the first and
    last fix timestamps.
    """

    planned = route_distance(planned_route)
    actual = trail_distance(actual_trail)
    if actual_duration_minutes is None:
        if len(actual_trail) >= 2:
            elapsed = actual_trail[-1].timestamp - actual_trail[0].timestamp
            actual_duration_minutes = elapsed.total_seconds() / 60
        else:
            actual_duration_minutes = 0.0

    deviation = abs(actual - planned) / planned * 100 if planned > 0 else 0.0
    return RouteComparison(
        planned_distance=planned,
        actual_distance=actual,
        planned_duration=planned_duration_minutes,
        actual_duration=actual_duration_minutes,
        deviation_percentage=deviation,
    )
