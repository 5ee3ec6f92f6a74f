"""
Sensor Routes

Inbound channel for partial motion/biometric samples.
"""

from fastapi import APIRouter, Depends, HTTPException

from nrg.api.v1.deps import get_session_controller
from nrg.features.session import SessionController
from nrg.features.sensors import SensorUpdateRequest, SensorSnapshotSchema

router = APIRouter()


@router.post("", response_model=SensorSnapshotSchema)
async def post_sensor_update(
    request: SensorUpdateRequest,
    controller: SessionController = Depends(get_session_controller)
):
    """
    Merge a partial sample into the live snapshot.

    Any subset of fields may be sent; absent fields keep their last value.
    """
    snapshot = controller.on_sensor_update(request.to_snapshot())
    if snapshot is None:
        raise HTTPException(status_code=409, detail="No session running")
    return snapshot.to_dict()


@router.get("", response_model=SensorSnapshotSchema)
async def get_sensor_snapshot(
    controller: SessionController = Depends(get_session_controller)
):
    """Latest merged snapshot."""
    return controller.snapshot.to_dict()
