"""
Session Routes

Endpoints for starting, stopping and reading the live session.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from nrg.api.v1.deps import get_session_controller
from nrg.features.session import SessionController, AthleteProfile
from nrg.features.session.schemas import (
    StartSessionRequest,
    SessionMetricsSchema,
    SessionDisplaySchema,
    RunSummarySchema,
)

router = APIRouter()


@router.post("/start", response_model=SessionMetricsSchema)
async def start_session(
    request: Optional[StartSessionRequest] = None,
    controller: SessionController = Depends(get_session_controller)
):
    """
    Start a run.

    Missing health metrics fall back to the current profile values.
    Restarts the session if one is already running.
    """
    request = request or StartSessionRequest()
    profile = AthleteProfile.resolve(
        resting_vo2=request.resting_vo2,
        body_mass_kg=request.body_mass_kg,
        gel_calorie_threshold_kcal=request.gel_calorie_threshold_kcal,
        fallback=controller.profile,
    )
    metrics = controller.start_session(
        profile,
        preserve_last_supplement=request.preserve_last_supplement,
    )
    return metrics.to_dict()


@router.post("/stop", response_model=RunSummarySchema)
async def stop_session(
    controller: SessionController = Depends(get_session_controller)
):
    """Finish the run and return its summary."""
    summary = controller.stop_session()
    if summary is None:
        raise HTTPException(status_code=409, detail="No session running")
    return summary.to_dict()


@router.get("", response_model=SessionMetricsSchema)
async def get_session(
    controller: SessionController = Depends(get_session_controller)
):
    """Current session metrics (zeros when idle)."""
    return controller.metrics().to_dict()


@router.get("/display", response_model=SessionDisplaySchema)
async def get_session_display(
    controller: SessionController = Depends(get_session_controller)
):
    """Metrics formatted for the watch face."""
    return controller.metrics().to_display()
