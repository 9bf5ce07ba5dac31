import random
from collections import Counter

import pytest

from greenroute.config import settings
from greenroute.models.domain import Coordinate, RoutePoint
from greenroute.services.geospatial import route_distance
from greenroute.services.routing.optimizer import _distance_matrix, analyze, optimize, two_opt_pass


def _stop(sid: str, lat: float, lon: float, duration: float = 45.0) -> RoutePoint:
    return RoutePoint(
        id=sid,
        latitude=lat,
        longitude=lon,
        address=f"{sid} Garden Way",
        name=f"Lawn care {sid}",
        duration_minutes=duration,
    )


def _random_route(seed: int, size: int) -> list[RoutePoint]:
    rng = random.Random(seed)
    return [
        _stop(f"S{i}", 30.0 + rng.uniform(-0.3, 0.3), -97.7 + rng.uniform(-0.3, 0.3))
        for i in range(size)
    ]


@pytest.fixture
def crossed_route() -> list[RoutePoint]:
    a = _stop("A", 0, 0)
    b = _stop("B", 0, 2)
    c = _stop("C", 1, 1)
    d = _stop("D", 1, -1)
    return [a, b, d, c]


def test_optimize_uncrosses_path(crossed_route):
    optimized = optimize(crossed_route)

    assert route_distance(optimized) < route_distance(crossed_route)
    assert optimized[0].id == "A"
    assert [stop.id for stop in optimized] == ["A", "D", "C", "B"]


def test_optimize_does_not_mutate_input(crossed_route):
    snapshot = list(crossed_route)
    optimized = optimize(crossed_route)

    assert crossed_route == snapshot
    assert optimized is not crossed_route


def test_trivial_routes_are_returned_unchanged():
    assert optimize([]) == []
    single = [_stop("A", 10, 10)]
    assert optimize(single) == single
    pair = [_stop("A", 10, 10), _stop("B", 11, 11)]
    assert optimize(pair) == pair


@pytest.mark.parametrize("seed", range(8))
def test_optimize_properties_on_random_routes(seed):
    route = _random_route(seed, size=3 + seed)
    optimized = optimize(route)

    # never worse
    assert route_distance(optimized) <= route_distance(route)
    # same stops, nothing dropped or duplicated
    assert Counter(stop.id for stop in optimized) == Counter(stop.id for stop in route)
    assert set(optimized) == set(route)
    # start stays put
    assert optimized[0].id == route[0].id
    # a second run finds nothing to improve
    assert route_distance(optimize(optimized)) == route_distance(optimized)


def test_optimize_is_deterministic():
    route = _random_route(42, size=9)
    assert optimize(route) == optimize(route)


def test_two_opt_pass_reports_whether_it_improved(crossed_route):
    matrix = _distance_matrix(crossed_route)
    order = [0, 1, 2, 3]

    assert two_opt_pass(order, matrix) is True
    assert order[0] == 0
    while two_opt_pass(order, matrix):
        pass
    assert two_opt_pass(order, matrix) is False


def test_two_opt_pass_does_not_swap_ties():
    # Four stops on the equator: already optimal, every reversal is longer or equal.
    route = [_stop("A", 0, 0), _stop("B", 0, 1), _stop("C", 0, 2), _stop("D", 0, 3)]
    order = [0, 1, 2, 3]
    assert two_opt_pass(order, _distance_matrix(route)) is False
    assert order == [0, 1, 2, 3]


def test_max_passes_limits_work_but_never_worsens():
    route = _random_route(7, size=12)
    limited = optimize(route, max_passes=1)

    assert route_distance(limited) <= route_distance(route)
    assert limited[0] == route[0]
    assert route_distance(optimize(route)) <= route_distance(limited)


@pytest.mark.parametrize("max_passes", [0, -1])
def test_max_passes_below_one_is_rejected(crossed_route, max_passes):
    with pytest.raises(ValueError):
        optimize(crossed_route, max_passes=max_passes)


def test_analyze_reports_savings(crossed_route):
    analysis = analyze(crossed_route)

    assert analysis.original_distance_miles == pytest.approx(route_distance(crossed_route))
    assert analysis.optimized_distance_miles < analysis.original_distance_miles
    assert analysis.distance_saved_miles == pytest.approx(
        analysis.original_distance_miles - analysis.optimized_distance_miles
    )
    assert analysis.time_saved_minutes == pytest.approx(analysis.distance_saved_miles / 30 * 60)
    assert analysis.savings_percent == pytest.approx(
        analysis.distance_saved_miles / analysis.original_distance_miles * 100
    )
    assert analysis.original_route == tuple(crossed_route)
    assert analysis.optimized_route[0].id == "A"
    assert settings.average_speed_mph == 30


def test_analyze_uses_custom_speed(crossed_route):
    analysis = analyze(crossed_route, average_speed_mph=60)
    assert analysis.time_saved_minutes == pytest.approx(analysis.distance_saved_miles)


def test_analyze_rejects_non_positive_speed(crossed_route):
    with pytest.raises(ValueError):
        analyze(crossed_route, average_speed_mph=0)


@pytest.mark.parametrize("size", [0, 1])
def test_analyze_trivial_routes(size):
    route = [_stop("A", 40, -75)][:size]
    analysis = analyze(route)

    assert analysis.original_distance_miles == 0
    assert analysis.optimized_distance_miles == 0
    assert analysis.distance_saved_miles == 0
    assert analysis.time_saved_minutes == 0
    assert analysis.savings_percent == 0
    assert analysis.original_route == tuple(route)
    assert analysis.optimized_route == tuple(route)


def test_analyze_with_identical_stops_has_zero_percent():
    route = [_stop("A", 40, -75), _stop("B", 40, -75), _stop("C", 40, -75)]
    analysis = analyze(route)
    assert analysis.original_distance_miles == 0
    assert analysis.savings_percent == 0


def test_analyze_with_start_location_may_move_first_stop():
    far = _stop("FAR", 0, 3)
    near = _stop("NEAR", 0, 1)
    analysis = analyze([far, near], start_location=Coordinate(latitude=0, longitude=0))

    assert [stop.id for stop in analysis.optimized_route] == ["NEAR", "FAR"]
    assert [stop.id for stop in analysis.original_route] == ["FAR", "NEAR"]
    assert analysis.original_distance_miles > analysis.optimized_distance_miles
    assert analysis.distance_saved_miles > 0


def test_analyze_with_start_location_and_single_stop():
    stop = _stop("ONLY", 0, 1)
    analysis = analyze([stop], start_location=Coordinate(latitude=0, longitude=0))

    assert analysis.original_distance_miles > 0
    assert analysis.distance_saved_miles == 0
    assert analysis.optimized_route == (stop,)


def test_analyze_carries_stop_details_through(crossed_route):
    analysis = analyze(crossed_route)
    by_id = {stop.id: stop for stop in analysis.optimized_route}
    assert by_id["C"].duration_minutes == 45.0
    assert by_id["C"].address == "C Garden Way"
