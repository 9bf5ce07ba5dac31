"""Domain models for route stops, analyses and GPS fixes."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Literal, Optional

Priority = Literal["high", "medium", "low"]

PRIORITY_LEVELS: tuple[str, ...] = ("high", "medium", "low")


class InvalidCoordinate(ValueError):
    """Raised when a latitude/longitude pair is missing, non-numeric or out of range."""


def validate_coordinate(latitude: object, longitude: object) -> tuple[float, float]:
    """Return the pair as floats or raise ``InvalidCoordinate``."""

    checked: list[float] = []
    for label, value, limit in (("latitude", latitude, 90.0), ("longitude", longitude, 180.0)):
        if value is None:
            raise InvalidCoordinate(f"{label} is required")
        # bool is an int subclass; a flag is never a coordinate.
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise InvalidCoordinate(f"{label} must be a number, got {type(value).__name__}")
        number = float(value)
        if not math.isfinite(number):
            raise InvalidCoordinate(f"{label} must be finite, got {number}")
        if not -limit <= number <= limit:
            raise InvalidCoordinate(f"{label} {number} is outside [-{limit:g}, {limit:g}]")
        checked.append(number)
    return checked[0], checked[1]


@dataclass(frozen=True, slots=True)
class Coordinate:
    """A bare latitude/longitude pair, e.g. a landscaper's current position."""

    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        lat, lon = validate_coordinate(self.latitude, self.longitude)
        object.__setattr__(self, "latitude", lat)
        object.__setattr__(self, "longitude", lon)


@dataclass(frozen=True, slots=True)
class RoutePoint:
    """One stop on a landscaper's route."""

    id: str
    latitude: float
    longitude: float
    address: str = ""
    name: str = ""
    duration_minutes: float = 60.0
    sequence_order: Optional[int] = None
    priority: Priority = "medium"

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("RoutePoint id is required")
        lat, lon = validate_coordinate(self.latitude, self.longitude)
        object.__setattr__(self, "latitude", lat)
        object.__setattr__(self, "longitude", lon)
        if self.priority not in PRIORITY_LEVELS:
            raise ValueError(f"Unknown priority '{self.priority}'")


@dataclass(frozen=True, slots=True)
class RouteAnalysis:
    """Comparison between a route as given and its 2-opt optimized ordering."""

    original_distance_miles: float
    optimized_distance_miles: float
    distance_saved_miles: float
    time_saved_minutes: float
    savings_percent: float
    original_route: tuple[RoutePoint, ...] = field(default_factory=tuple)
    optimized_route: tuple[RoutePoint, ...] = field(default_factory=tuple)


@dataclass(frozen=True, slots=True)
class RouteSummary:
    total_distance_miles: float
    total_time_minutes: float
    estimated_fuel_gallons: float


@dataclass(frozen=True, slots=True)
class GPSLocation:
    """A single GPS fix reported by a landscaper's device."""

    latitude: float
    longitude: float
    timestamp: datetime
    accuracy: Optional[float] = None
    speed: Optional[float] = None
    heading: Optional[float] = None

    def __post_init__(self) -> None:
        lat, lon = validate_coordinate(self.latitude, self.longitude)
        object.__setattr__(self, "latitude", lat)
        object.__setattr__(self, "longitude", lon)
        if self.timestamp.tzinfo is None:
            # fixes without an offset are taken as UTC
            object.__setattr__(self, "timestamp", self.timestamp.replace(tzinfo=timezone.utc))


@dataclass(frozen=True, slots=True)
class RouteComparison:
    planned_distance: float
    actual_distance: float
    planned_duration: float
    actual_duration: float
    deviation_percentage: float
