"""Tracking orchestration: converts API payloads and calls the GPS helpers and store."""

from __future__ import annotations

from datetime import datetime, timezone

from ..config import settings
from ..persistence import database
from ..schemas.tracking import (
    ETARequest,
    ETAResponse,
    GPSLocationModel,
    RouteComparisonModel,
    RouteComparisonRequest,
    TrackLocationRequest,
)
from .geospatial import distance, travel_minutes
from .tracking import calculate_eta, compare_routes


def track_location(payload: TrackLocationRequest) -> None:
    database.record_location(payload.landscaper_id, payload.job_id, payload.location.to_gps())


def current_location(landscaper_id: str) -> GPSLocationModel | None:
    location = database.get_current_location(landscaper_id)
    return GPSLocationModel.from_domain(location) if location else None


def route_history(job_id: str) -> list[GPSLocationModel]:
    return [GPSLocationModel.from_domain(location) for location in database.get_route_history(job_id)]


def estimate_arrival(payload: ETARequest, now: datetime | None = None) -> ETAResponse:
    current = payload.current.to_domain()
    destination = payload.destination.to_domain()
    speed = payload.speed_mph or settings.average_speed_mph
    miles = distance(current, destination)
    now = now or datetime.now(timezone.utc)
    return ETAResponse(
        distance_miles=miles,
        travel_minutes=travel_minutes(miles, speed),
        eta=calculate_eta(current, destination, speed_mph=speed, now=now),
    )


def compare(payload: RouteComparisonRequest) -> RouteComparisonModel:
    comparison = compare_routes(
        planned_route=[location.to_domain() for location in payload.planned_route],
        actual_trail=[location.to_gps() for location in payload.actual_trail],
        planned_duration_minutes=payload.planned_duration_minutes,
        actual_duration_minutes=payload.actual_duration_minutes,
    )
    return RouteComparisonModel(
        planned_distance=comparison.planned_distance,
        actual_distance=comparison.actual_distance,
        planned_duration=comparison.planned_duration,
        actual_duration=comparison.actual_duration,
        deviation_percentage=comparison.deviation_percentage,
    )
