"""2-opt route improvement for a landscaper's list of stops.

The route is an open path: the crew starts at the first stop (or at an
explicit start location) and does not return. Every accepted move reverses
one contiguous block of stops and strictly shortens the path, so the search
always ends at a local optimum.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from ...config import settings
from ...models.domain import RouteAnalysis, RoutePoint
from ..geospatial import HasCoordinates, distance, route_distance, travel_minutes

logger = logging.getLogger(__name__)


def _distance_matrix(points: Sequence[HasCoordinates]) -> list[list[float]]:
    return [[distance(a, b) for b in points] for a in points]


def _path_length(order: Sequence[int], matrix: Sequence[Sequence[float]]) -> float:
    total = 0.0
    for current, following in zip(order, order[1:]):
        total += matrix[current][following]
    return total


def two_opt_pass(order: list[int], matrix: Sequence[Sequence[float]]) -> bool:
    """Run one full scan of 2-opt moves over ``order`` in place.

    Position 0 never moves. Returns True if at least one reversal was kept.
    """

    improved = False
    best = _path_length(order, matrix)
    size = len(order)
    for i in range(1, size - 1):
        for j in range(i + 1, size):
            candidate = order[:i] + order[i : j + 1][::-1] + order[j + 1 :]
            candidate_length = _path_length(candidate, matrix)
            if candidate_length < best:
                order[:] = candidate
                best = candidate_length
                improved = True
    return improved


def _optimize_order(points: Sequence[HasCoordinates], max_passes: Optional[int]) -> list[int]:
    order = list(range(len(points)))
    if len(order) <= 2:
        return order

    matrix = _distance_matrix(points)
    passes = 0
    while two_opt_pass(order, matrix):
        passes += 1
        if max_passes is not None and passes >= max_passes:
            logger.warning(
                "Stopped 2-opt after %d passes on a %d-stop route before reaching a local optimum",
                passes,
                len(order),
            )
            break
    logger.debug("2-opt finished after %d improving passes on %d stops", passes, len(order))
    return order


def optimize(points: Sequence[RoutePoint], *, max_passes: Optional[int] = None) -> list[RoutePoint]:
    """Return a reordered copy of ``points`` with a shorter (or equal) total distance.

    The first stop stays first. The input sequence is never modified.
    """

    if max_passes is None:
        max_passes = settings.max_optimization_passes
    elif max_passes < 1:
        raise ValueError(f"max_passes must be at least 1, got {max_passes}")
    stops = list(points)
    order = _optimize_order(stops, max_passes)
    return [stops[index] for index in order]


def analyze(
    points: Sequence[RoutePoint],
    start_location: Optional[HasCoordinates] = None,
    average_speed_mph: Optional[float] = None,
) -> RouteAnalysis:
    """Optimize ``points`` and report how much distance and time the new order saves.

    With ``start_location`` the crew's position is an extra fixed leg at the
    front of the route: both distances include the drive to the first stop and
    every stop, including the first, may be reordered.
    """

    speed = average_speed_mph if average_speed_mph is not None else settings.average_speed_mph
    if speed <= 0:
        raise ValueError(f"Average speed must be positive, got {speed}")
    stops = list(points)

    if start_location is None:
        path: list[HasCoordinates] = list(stops)
    else:
        path = [start_location, *stops]

    if not stops or (start_location is None and len(stops) == 1):
        return RouteAnalysis(
            original_distance_miles=0.0,
            optimized_distance_miles=0.0,
            distance_saved_miles=0.0,
            time_saved_minutes=0.0,
            savings_percent=0.0,
            original_route=tuple(stops),
            optimized_route=tuple(stops),
        )

    original_distance = route_distance(path)
    order = _optimize_order(path, settings.max_optimization_passes)
    optimized_path = [path[index] for index in order]
    optimized_distance = route_distance(optimized_path)
    optimized_stops = optimized_path if start_location is None else optimized_path[1:]

    saved = max(original_distance - optimized_distance, 0.0)
    percent = saved / original_distance * 100 if original_distance > 0 else 0.0

    logger.info(
        "Analyzed %d-stop route: %.2f mi -> %.2f mi (%.1f%% saved)",
        len(stops),
        original_distance,
        optimized_distance,
        percent,
    )
    return RouteAnalysis(
        original_distance_miles=original_distance,
        optimized_distance_miles=optimized_distance,
        distance_saved_miles=saved,
        time_saved_minutes=travel_minutes(saved, speed),
        savings_percent=percent,
        original_route=tuple(stops),
        optimized_route=tuple(optimized_stops),  # type: ignore[arg-type]
    )
