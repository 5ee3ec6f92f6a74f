"""
Shared utilities (NOT business logic).

Usage:
    from nrg.shared import floors_to_grade, ManualScheduler
    from nrg.shared.formatters import format_elapsed
"""
from .formulas import (
    acsm_running_vo2,
    vo2_to_kcal_per_minute,
    floors_to_grade,
)
from .formatters import (
    format_elapsed,
    format_gel_time,
    format_speed_kmh,
    format_distance_km,
    format_calories,
    format_gel_serving,
    format_heart_rate,
    format_hrv,
)
from .scheduling import (
    Scheduler,
    ScheduledCall,
    AsyncioScheduler,
    ManualScheduler,
)
from .session_types import SessionState, AthleteProfile

__all__ = [
    # formulas
    "acsm_running_vo2",
    "vo2_to_kcal_per_minute",
    "floors_to_grade",
    # formatters
    "format_elapsed",
    "format_gel_time",
    "format_speed_kmh",
    "format_distance_km",
    "format_calories",
    "format_gel_serving",
    "format_heart_rate",
    "format_hrv",
    # scheduling
    "Scheduler",
    "ScheduledCall",
    "AsyncioScheduler",
    "ManualScheduler",
    # session types
    "SessionState",
    "AthleteProfile",
]
