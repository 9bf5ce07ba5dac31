"""GPS tracking request/response schemas."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from ..models.domain import GPSLocation
from .routing import LocationModel


class GPSLocationModel(LocationModel):
    timestamp: datetime
    accuracy: Optional[float] = Field(default=None, ge=0)
    speed: Optional[float] = Field(default=None, ge=0)
    heading: Optional[float] = Field(default=None, ge=0, lt=360)

    def to_gps(self) -> GPSLocation:
        return GPSLocation(
            latitude=self.latitude,
            longitude=self.longitude,
            timestamp=self.timestamp,
            accuracy=self.accuracy,
            speed=self.speed,
            heading=self.heading,
        )

    @classmethod
    def from_domain(cls, location: GPSLocation) -> "GPSLocationModel":
        return cls(
            latitude=location.latitude,
            longitude=location.longitude,
            timestamp=location.timestamp,
            accuracy=location.accuracy,
            speed=location.speed,
            heading=location.heading,
        )


class TrackLocationRequest(BaseModel):
    landscaper_id: str = Field(..., min_length=1)
    job_id: Optional[str] = None
    location: GPSLocationModel


class ETARequest(BaseModel):
    current: LocationModel
    destination: LocationModel
    speed_mph: Optional[float] = Field(default=None, gt=0)


class ETAResponse(BaseModel):
    distance_miles: float
    travel_minutes: float
    eta: datetime


class RouteComparisonRequest(BaseModel):
    planned_route: List[LocationModel] = Field(default_factory=list)
    actual_trail: List[GPSLocationModel] = Field(default_factory=list)
    planned_duration_minutes: float = Field(..., ge=0)
    actual_duration_minutes: Optional[float] = Field(default=None, ge=0)


class RouteComparisonModel(BaseModel):
    planned_distance: float
    actual_distance: float
    planned_duration: float
    actual_duration: float
    deviation_percentage: float
