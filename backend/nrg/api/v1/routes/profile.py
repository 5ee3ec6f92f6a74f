"""
Profile Routes

Profile sync channel from the companion phone app.
"""

from fastapi import APIRouter, Depends

from nrg.api.v1.deps import get_session_controller
from nrg.features.session import SessionController
from nrg.features.session.schemas import AthleteProfileSchema, ProfileSyncRequest

router = APIRouter()


@router.get("", response_model=AthleteProfileSchema)
async def get_profile(
    controller: SessionController = Depends(get_session_controller)
):
    """Current athlete profile."""
    return controller.profile.to_dict()


@router.put("", response_model=AthleteProfileSchema)
async def sync_profile(
    request: ProfileSyncRequest,
    controller: SessionController = Depends(get_session_controller)
):
    """
    Apply gel serving / body mass from the phone.

    Late and duplicate updates are fine: last write wins, and the running
    session is not reset.
    """
    profile = controller.update_athlete_profile(
        gel_calorie_threshold_kcal=request.gel_calorie_threshold_kcal,
        body_mass_kg=request.body_mass_kg,
        resting_vo2=request.resting_vo2,
    )
    return profile.to_dict()
