"""
API Router v1

Combines all route modules.
"""

from fastapi import APIRouter

from nrg.api.v1.routes import session, sensors, profile, supplement

api_router = APIRouter()

api_router.include_router(session.router, prefix="/session", tags=["Session"])
api_router.include_router(sensors.router, prefix="/sensors", tags=["Sensors"])
api_router.include_router(profile.router, prefix="/profile", tags=["Profile"])
api_router.include_router(supplement.router, prefix="/supplement", tags=["Supplement"])
