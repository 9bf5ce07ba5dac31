"""Routing endpoints."""

from __future__ import annotations

import logging
from datetime import date

from fastapi import APIRouter, HTTPException, Query, status

from ...persistence.database import DatabaseNotConfigured
from ...schemas.routing import (
    ApplySequenceRequest,
    ApplySequenceResponse,
    DispatchRequest,
    DispatchResponse,
    RouteAnalysisRequest,
    RouteAnalysisResponse,
    RouteDistanceRequest,
    RouteDistanceResponse,
)
from ...services.routing.service import (
    analyze_route,
    analyze_schedule,
    apply_optimized_sequence,
    compute_distances,
    plan_dispatch,
)

router = APIRouter(prefix="/routes", tags=["routes"])


@router.post("/distance", response_model=RouteDistanceResponse, status_code=status.HTTP_200_OK)
def route_distance(payload: RouteDistanceRequest) -> RouteDistanceResponse:
    try:
        return compute_distances(payload)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


@router.post("/analyze", response_model=RouteAnalysisResponse, status_code=status.HTTP_200_OK)
def analyze(payload: RouteAnalysisRequest) -> RouteAnalysisResponse:
    try:
        return analyze_route(payload)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logging.exception(f"Error analyzing route: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to analyze route: {str(exc)}"
        ) from exc


@router.post("/dispatch", response_model=DispatchResponse, status_code=status.HTTP_200_OK)
def dispatch(payload: DispatchRequest) -> DispatchResponse:
    """Order stops by proximity to the crew, weighting high-priority jobs forward."""
    try:
        return plan_dispatch(payload)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


@router.get("/schedule/{landscaper_id}", response_model=RouteAnalysisResponse, status_code=status.HTTP_200_OK)
def schedule(
    landscaper_id: str,
    day: date = Query(..., alias="date", description="Schedule date (YYYY-MM-DD)"),
) -> RouteAnalysisResponse:
    """Analyze the stored visit order of a landscaper's jobs for one day."""
    try:
        return analyze_schedule(landscaper_id, day)
    except DatabaseNotConfigured as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logging.exception(f"Error loading schedule for landscaper {landscaper_id}: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to analyze schedule: {str(exc)}"
        ) from exc


@router.post("/apply", response_model=ApplySequenceResponse, status_code=status.HTTP_200_OK)
def apply(payload: ApplySequenceRequest) -> ApplySequenceResponse:
    """Persist an accepted visit order as sequence_order 1..n."""
    try:
        return apply_optimized_sequence(payload)
    except DatabaseNotConfigured as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logging.exception(f"Error applying route order: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to apply route order: {str(exc)}"
        ) from exc
