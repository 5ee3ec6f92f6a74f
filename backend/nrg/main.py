"""
NRG Pacer API

FastAPI application exposing the live run tracking and gel timing engine.
"""

import asyncio
from contextlib import asynccontextmanager
import logging
import sys

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from nrg import __version__
from nrg.config import settings
from nrg.api.v1.router import api_router
from nrg.features.session import SessionController
from nrg.features.supplement import SupplementEvent
from nrg.shared.scheduling import AsyncioScheduler


# === Logging Setup ===
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(sys.stdout),
    ]
)
logger = logging.getLogger(__name__)


def _log_alert(event: SupplementEvent):
    """Default alert listener; a UI/haptic collaborator registers its own."""
    logger.info(
        f"ALERT: take a gel ({event.reason.value if event.reason else 'manual'}) "
        f"at {event.raised_at_elapsed_seconds:.0f}s"
    )


# === Lifespan ===
@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    # Startup
    logger.info("Starting NRG Pacer API...")
    scheduler = AsyncioScheduler(asyncio.get_running_loop())
    controller = SessionController.from_settings(scheduler, settings)
    controller.add_alert_listener(_log_alert)
    app.state.session_controller = controller
    logger.info(
        f"Session engine ready (test_mode={settings.test_mode}, "
        f"time_threshold={controller.policy.config.time_threshold_seconds:.0f}s)"
    )

    yield

    # Shutdown
    if controller.running:
        controller.stop_session()
        logger.info("Running session stopped")
    logger.info("Shutting down...")


# === App Creation ===
app = FastAPI(
    title="NRG Pacer API",
    description="Live run metrics and energy gel timing",
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
)


# === Middleware ===
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# === Routes ===
app.include_router(api_router, prefix="/api/v1")


# === Health Check ===
@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": __version__}
