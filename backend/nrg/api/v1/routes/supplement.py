"""
Supplement Routes

Commands and status for the gel intake flow.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException

from nrg.api.v1.deps import get_session_controller
from nrg.features.session import SessionController
from nrg.features.session.schemas import (
    SupplementStatusSchema,
    RuleDecisionSchema,
    CommandResponse,
)

router = APIRouter()


def _command_result(controller: SessionController, success: bool, error: str) -> dict:
    if not success:
        raise HTTPException(status_code=409, detail=error)
    return {"success": True, "state": controller.lifecycle_state.value}


@router.get("", response_model=SupplementStatusSchema)
async def get_supplement_status(
    controller: SessionController = Depends(get_session_controller)
):
    """Lifecycle state, outstanding event and undo countdown."""
    return controller.supplement_status()


@router.get("/policy", response_model=List[RuleDecisionSchema])
async def get_policy_breakdown(
    controller: SessionController = Depends(get_session_controller)
):
    """Evaluate every alert rule against the current state."""
    return [decision.to_dict() for decision in controller.policy_breakdown()]


@router.post("/hold/start", response_model=CommandResponse)
async def start_hold(
    controller: SessionController = Depends(get_session_controller)
):
    """Press the gel button (confirms after the hold duration)."""
    return _command_result(
        controller,
        controller.press_hold(),
        "Hold not available (no session, already holding, or undo window open)",
    )


@router.post("/hold/end", response_model=CommandResponse)
async def end_hold(
    controller: SessionController = Depends(get_session_controller)
):
    """Release the gel button."""
    return _command_result(controller, controller.release_hold(), "No hold in progress")


@router.post("/confirm/manual", response_model=CommandResponse)
async def confirm_manual(
    controller: SessionController = Depends(get_session_controller)
):
    """Record a manual intake (completed hold from the home screen)."""
    return _command_result(
        controller,
        controller.confirm_manual(),
        "Manual intake not available in the current state",
    )


@router.post("/confirm/automatic", response_model=CommandResponse)
async def confirm_automatic(
    controller: SessionController = Depends(get_session_controller)
):
    """Confirm the raised alert (completed hold on the alert screen)."""
    return _command_result(controller, controller.confirm_automatic(), "No alert raised")


@router.post("/undo", response_model=CommandResponse)
async def undo_intake(
    controller: SessionController = Depends(get_session_controller)
):
    """Undo during the confirmation window."""
    return _command_result(controller, controller.undo(), "No intake awaiting confirmation")
