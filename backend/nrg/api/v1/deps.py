"""
API dependencies.
"""

from fastapi import HTTPException, Request

from nrg.features.session import SessionController


def get_session_controller(request: Request) -> SessionController:
    """Controller created in the app lifespan."""
    controller = getattr(request.app.state, "session_controller", None)
    if controller is None:
        raise HTTPException(status_code=503, detail="Session engine not initialized")
    return controller
