"""GPS tracking endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, status

from ...persistence.database import DatabaseNotConfigured
from ...schemas.tracking import (
    ETARequest,
    ETAResponse,
    GPSLocationModel,
    RouteComparisonModel,
    RouteComparisonRequest,
    TrackLocationRequest,
)
from ...services import tracking_service

router = APIRouter(prefix="/tracking", tags=["tracking"])


@router.post("/locations", status_code=status.HTTP_201_CREATED)
def track_location(payload: TrackLocationRequest) -> dict:
    try:
        tracking_service.track_location(payload)
    except DatabaseNotConfigured as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logging.exception(f"Error recording location for landscaper {payload.landscaper_id}: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to record location: {str(exc)}"
        ) from exc
    return {"success": True}


@router.get("/landscapers/{landscaper_id}/current", response_model=GPSLocationModel)
def current_location(landscaper_id: str) -> GPSLocationModel:
    try:
        location = tracking_service.current_location(landscaper_id)
    except DatabaseNotConfigured as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
    except Exception as exc:
        logging.exception(f"Error reading current location for landscaper {landscaper_id}: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to read current location: {str(exc)}"
        ) from exc
    if location is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No active location for landscaper {landscaper_id}"
        )
    return location


@router.get("/jobs/{job_id}/history", response_model=list[GPSLocationModel])
def route_history(job_id: str) -> list[GPSLocationModel]:
    try:
        return tracking_service.route_history(job_id)
    except DatabaseNotConfigured as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
    except Exception as exc:
        logging.exception(f"Error reading route history for job {job_id}: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to read route history: {str(exc)}"
        ) from exc


@router.post("/eta", response_model=ETAResponse)
def eta(payload: ETARequest) -> ETAResponse:
    try:
        return tracking_service.estimate_arrival(payload)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logging.exception(f"Error estimating arrival: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to estimate arrival: {str(exc)}"
        ) from exc


@router.post("/compare", response_model=RouteComparisonModel)
def compare(payload: RouteComparisonRequest) -> RouteComparisonModel:
    """Compare a planned route with the GPS trail actually driven."""
    try:
        return tracking_service.compare(payload)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logging.exception(f"Error comparing planned route with GPS trail: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to compare routes: {str(exc)}"
        ) from exc
