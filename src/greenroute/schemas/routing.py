"""Routing request/response schemas."""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from ..config import settings
from ..models.domain import Coordinate, RoutePoint


class LocationModel(BaseModel):
    latitude: float = Field(..., ge=-90, le=90, allow_inf_nan=False)
    longitude: float = Field(..., ge=-180, le=180, allow_inf_nan=False)

    def to_domain(self) -> Coordinate:
        return Coordinate(latitude=self.latitude, longitude=self.longitude)


class RoutePointModel(BaseModel):
    id: str = Field(..., min_length=1)
    latitude: float = Field(..., ge=-90, le=90, allow_inf_nan=False)
    longitude: float = Field(..., ge=-180, le=180, allow_inf_nan=False)
    address: str = ""
    name: str = ""
    duration_minutes: float = Field(default=60.0, ge=0)
    sequence_order: Optional[int] = None
    priority: Literal["high", "medium", "low"] = "medium"

    def to_domain(self) -> RoutePoint:
        return RoutePoint(
            id=self.id,
            latitude=self.latitude,
            longitude=self.longitude,
            address=self.address,
            name=self.name,
            duration_minutes=self.duration_minutes,
            sequence_order=self.sequence_order,
            priority=self.priority,
        )

    @classmethod
    def from_domain(cls, point: RoutePoint) -> "RoutePointModel":
        return cls(
            id=point.id,
            latitude=point.latitude,
            longitude=point.longitude,
            address=point.address,
            name=point.name,
            duration_minutes=point.duration_minutes,
            sequence_order=point.sequence_order,
            priority=point.priority,
        )


class RouteDistanceRequest(BaseModel):
    points: List[RoutePointModel] = Field(default_factory=list, max_length=settings.max_route_stops)


class RouteDistanceResponse(BaseModel):
    total_distance_miles: float
    leg_distances_miles: List[float]


class RouteAnalysisRequest(BaseModel):
    points: List[RoutePointModel] = Field(default_factory=list, max_length=settings.max_route_stops)
    start_location: Optional[LocationModel] = Field(
        default=None,
        description="Crew position before the first stop. When set, the first stop may be reordered too.",
    )
    average_speed_mph: Optional[float] = Field(default=None, gt=0)


class RouteAnalysisResponse(BaseModel):
    original_distance_miles: float
    optimized_distance_miles: float
    distance_saved_miles: float
    time_saved_minutes: float
    savings_percent: float
    original_route: List[RoutePointModel]
    optimized_route: List[RoutePointModel]
    metadata: dict = Field(default_factory=dict)


class DispatchRequest(BaseModel):
    points: List[RoutePointModel] = Field(default_factory=list, max_length=settings.max_route_stops)
    current_location: LocationModel


class RouteSummaryModel(BaseModel):
    total_distance_miles: float
    total_time_minutes: float
    estimated_fuel_gallons: float


class DispatchResponse(BaseModel):
    route: List[RoutePointModel]
    summary: RouteSummaryModel


class ApplySequenceRequest(BaseModel):
    job_ids: List[str] = Field(..., min_length=1, max_length=settings.max_route_stops)


class ApplySequenceResponse(BaseModel):
    success: bool
    updated_count: int
