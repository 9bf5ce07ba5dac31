"""Routing orchestration service."""

from __future__ import annotations

import logging
from datetime import date
from typing import Sequence

from ...models.domain import RouteAnalysis, RoutePoint
from ...persistence import database
from ...schemas.routing import (
    ApplySequenceRequest,
    ApplySequenceResponse,
    DispatchRequest,
    DispatchResponse,
    RouteAnalysisRequest,
    RouteAnalysisResponse,
    RouteDistanceRequest,
    RouteDistanceResponse,
    RoutePointModel,
    RouteSummaryModel,
)
from ..geospatial import leg_distances
from .dispatch import order_by_priority, summarize_route
from .optimizer import analyze

logger = logging.getLogger(__name__)


def _to_route_points(points: Sequence[RoutePointModel]) -> list[RoutePoint]:
    seen: set[str] = set()
    duplicates: list[str] = []
    for point in points:
        if point.id in seen:
            duplicates.append(point.id)
        seen.add(point.id)
    if duplicates:
        raise ValueError(f"Stop ids must be unique within a route. Duplicated: {sorted(set(duplicates))[:5]}")
    return [point.to_domain() for point in points]


def _analysis_to_response(analysis: RouteAnalysis, metadata: dict) -> RouteAnalysisResponse:
    return RouteAnalysisResponse(
        original_distance_miles=analysis.original_distance_miles,
        optimized_distance_miles=analysis.optimized_distance_miles,
        distance_saved_miles=analysis.distance_saved_miles,
        time_saved_minutes=analysis.time_saved_minutes,
        savings_percent=analysis.savings_percent,
        original_route=[RoutePointModel.from_domain(point) for point in analysis.original_route],
        optimized_route=[RoutePointModel.from_domain(point) for point in analysis.optimized_route],
        metadata=metadata,
    )


def compute_distances(payload: RouteDistanceRequest) -> RouteDistanceResponse:
    points = _to_route_points(payload.points)
    legs = leg_distances(points)
    return RouteDistanceResponse(total_distance_miles=sum(legs, 0.0), leg_distances_miles=legs)


def analyze_route(payload: RouteAnalysisRequest) -> RouteAnalysisResponse:
    points = _to_route_points(payload.points)
    start = payload.start_location.to_domain() if payload.start_location else None
    analysis = analyze(points, start_location=start, average_speed_mph=payload.average_speed_mph)
    metadata = {
        "stop_count": len(points),
        "start_location": payload.start_location.model_dump() if payload.start_location else None,
        "source": "request",
    }
    return _analysis_to_response(analysis, metadata)


def plan_dispatch(payload: DispatchRequest) -> DispatchResponse:
    points = _to_route_points(payload.points)
    current = payload.current_location.to_domain()
    ordered = order_by_priority(points, current)
    summary = summarize_route(ordered, start_location=current)
    return DispatchResponse(
        route=[RoutePointModel.from_domain(point) for point in ordered],
        summary=RouteSummaryModel(
            total_distance_miles=summary.total_distance_miles,
            total_time_minutes=summary.total_time_minutes,
            estimated_fuel_gallons=summary.estimated_fuel_gallons,
        ),
    )


def analyze_schedule(landscaper_id: str, day: date) -> RouteAnalysisResponse:
    """Analyze the stored visit order of a landscaper's jobs for one day."""

    points = database.get_scheduled_stops(landscaper_id, day)
    analysis = analyze(points)
    logger.info(
        f"Schedule analysis for landscaper {landscaper_id} on {day.isoformat()}: "
        f"{len(points)} stops, {analysis.distance_saved_miles:.2f} mi saved"
    )
    metadata = {
        "stop_count": len(points),
        "landscaper_id": landscaper_id,
        "date": day.isoformat(),
        "source": "database",
    }
    return _analysis_to_response(analysis, metadata)


def apply_optimized_sequence(payload: ApplySequenceRequest) -> ApplySequenceResponse:
    if len(set(payload.job_ids)) != len(payload.job_ids):
        raise ValueError("job_ids must not contain duplicates")
    updated = database.apply_sequence(payload.job_ids)
    return ApplySequenceResponse(success=updated == len(payload.job_ids), updated_count=updated)
