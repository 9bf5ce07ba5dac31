"""Database persistence for scheduled jobs and GPS tracking."""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta, timezone
from typing import Any, Sequence

from ..config import settings
from ..db.supabase import get_supabase_client
from ..models.domain import GPSLocation, RoutePoint

logger = logging.getLogger(__name__)

JOB_COLUMNS = "id, service_name, service_address, location_lat, location_lng, estimated_duration, sequence_order"


class DatabaseNotConfigured(RuntimeError):
    """Raised when an operation needs Supabase but no credentials are configured."""


def _require_client():
    supabase = get_supabase_client()
    if not supabase:
        raise DatabaseNotConfigured(
            "Supabase not configured. Set GREENROUTE_SUPABASE_URL and GREENROUTE_SUPABASE_KEY environment variables."
        )
    return supabase


def _parse_timestamp(value: Any) -> datetime:
    parsed = value if isinstance(value, datetime) else datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    # naive database timestamps are stored in UTC
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)


def _row_to_route_point(row: dict[str, Any], index: int) -> RoutePoint:
    duration = row.get("estimated_duration")
    sequence = row.get("sequence_order")
    return RoutePoint(
        id=str(row["id"]),
        latitude=float(row.get("location_lat") or 0.0),
        longitude=float(row.get("location_lng") or 0.0),
        address=row.get("service_address") or "",
        name=row.get("service_name") or "Unnamed Job",
        duration_minutes=float(duration) if duration else settings.default_job_duration_minutes,
        sequence_order=int(sequence) if sequence else index,
    )


def _row_to_gps_location(row: dict[str, Any]) -> GPSLocation:
    return GPSLocation(
        latitude=float(row["latitude"]),
        longitude=float(row["longitude"]),
        timestamp=_parse_timestamp(row["timestamp"]),
        accuracy=row.get("accuracy"),
        speed=row.get("speed"),
        heading=row.get("heading"),
    )


def get_scheduled_stops(landscaper_id: str, day: date) -> list[RoutePoint]:
    """Load a landscaper's jobs scheduled on ``day``, in their stored visit order.

    Rows with unusable coordinates are skipped with a warning.
    """
    if not landscaper_id:
        raise ValueError("landscaper_id is required to load a schedule")

    supabase = _require_client()
    next_day = day + timedelta(days=1)
    response = (
        supabase.table(settings.jobs_table)
        .select(JOB_COLUMNS)
        .eq("landscaper_id", landscaper_id)
        .gte("scheduled_date", day.isoformat())
        .lt("scheduled_date", next_day.isoformat())
        .order("sequence_order")
        .execute()
    )

    stops: list[RoutePoint] = []
    for index, row in enumerate(response.data or []):
        try:
            stops.append(_row_to_route_point(row, index))
        except (KeyError, ValueError, TypeError) as e:
            logger.warning(f"Skipping job row {row.get('id', '?')} for landscaper {landscaper_id}: {e}")
            continue

    logger.info(f"Loaded {len(stops)} scheduled stops for landscaper {landscaper_id} on {day.isoformat()}")
    return stops


def apply_sequence(job_ids: Sequence[str]) -> int:
    """Store ``job_ids`` order as ``sequence_order`` 1..n.

    Returns the number of jobs the database actually updated. Ids with no
    matching row are logged and not counted.
    """
    supabase = _require_client()
    updated = 0
    for index, job_id in enumerate(job_ids):
        response = (
            supabase.table(settings.jobs_table)
            .update({"sequence_order": index + 1})
            .eq("id", job_id)
            .execute()
        )
        matched = len(response.data or [])
        if not matched:
            logger.warning(f"No job row matched id {job_id} while applying visit order")
        updated += matched
    logger.info(f"Applied visit order to {updated} jobs")
    return updated


def record_location(landscaper_id: str, job_id: str | None, location: GPSLocation) -> None:
    """Insert a GPS fix for a landscaper, optionally tied to the job they are driving to."""
    if not landscaper_id:
        raise ValueError("landscaper_id is required for GPS tracking")

    supabase = _require_client()
    supabase.table(settings.gps_table).insert(
        {
            "landscaper_id": landscaper_id,
            "job_id": job_id or None,
            "latitude": location.latitude,
            "longitude": location.longitude,
            "accuracy": location.accuracy,
            "speed": location.speed,
            "heading": location.heading,
            "timestamp": location.timestamp.isoformat(),
            "is_active": True,
        }
    ).execute()
    logger.debug(f"Tracked location for landscaper {landscaper_id} (job {job_id or 'none'})")


def get_current_location(landscaper_id: str) -> GPSLocation | None:
    if not landscaper_id:
        return None

    supabase = _require_client()
    response = (
        supabase.table(settings.gps_table)
        .select("*")
        .eq("landscaper_id", landscaper_id)
        .eq("is_active", True)
        .order("timestamp", desc=True)
        .limit(1)
        .execute()
    )
    rows = response.data or []
    if not rows:
        return None
    try:
        return _row_to_gps_location(rows[0])
    except (KeyError, ValueError, TypeError) as e:
        logger.warning(f"Ignoring unusable latest GPS row for landscaper {landscaper_id}: {e}")
        return None


def get_route_history(job_id: str) -> list[GPSLocation]:
    """GPS fixes recorded for a job, oldest first."""
    if not job_id:
        return []

    supabase = _require_client()
    response = (
        supabase.table(settings.gps_table)
        .select("*")
        .eq("job_id", job_id)
        .order("timestamp")
        .execute()
    )

    history: list[GPSLocation] = []
    for row in response.data or []:
        try:
            history.append(_row_to_gps_location(row))
        except (KeyError, ValueError, TypeError) as e:
            logger.warning(f"Skipping GPS row for job {job_id}: {e}")
            continue
    return history
