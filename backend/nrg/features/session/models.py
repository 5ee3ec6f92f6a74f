"""
Session result models.

Plain dataclasses returned by the controller's query surface.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from nrg.shared.session_types import SessionState, AthleteProfile
from nrg.shared.formatters import (
    format_elapsed,
    format_gel_time,
    format_speed_kmh,
    format_distance_km,
    format_calories,
    format_gel_serving,
    format_heart_rate,
    format_hrv,
)
from nrg.features.sensors.models import SensorSnapshot

__all__ = ["SessionState", "AthleteProfile", "SessionMetrics", "RunSummary"]


@dataclass
class SessionMetrics:
    """Read-only view of a running (or idle) session."""
    running: bool
    elapsed_seconds: float
    pace_mps: Optional[float]
    total_distance_meters: float
    current_speed_mps: Optional[float]
    current_grade: float
    total_calories_kcal: float
    last_supplement_elapsed_seconds: float
    supplement_history: List[float]
    lifecycle_state: str
    supplement_source: Optional[str]
    heart_rate_bpm: Optional[float]
    hrv_ms: Optional[float]
    vo2_max: Optional[float]
    gel_calorie_threshold_kcal: int

    @classmethod
    def build(
        cls,
        running: bool,
        state: SessionState,
        snapshot: SensorSnapshot,
        profile: AthleteProfile,
        lifecycle_state: str,
        supplement_source: Optional[str]
    ) -> "SessionMetrics":
        return cls(
            running=running,
            elapsed_seconds=state.elapsed_seconds,
            pace_mps=state.pace_mps,
            total_distance_meters=state.total_distance_meters,
            current_speed_mps=state.current_speed_mps,
            current_grade=state.current_grade,
            total_calories_kcal=state.total_calories_kcal,
            last_supplement_elapsed_seconds=state.last_supplement_elapsed_seconds,
            supplement_history=list(state.supplement_history),
            lifecycle_state=lifecycle_state,
            supplement_source=supplement_source,
            heart_rate_bpm=snapshot.heart_rate_bpm,
            hrv_ms=snapshot.hrv_ms,
            vo2_max=snapshot.vo2_max,
            gel_calorie_threshold_kcal=profile.gel_calorie_threshold_kcal,
        )

    def to_dict(self) -> dict:
        """Convert to dict for API response."""
        return {
            "running": self.running,
            "elapsed_seconds": round(self.elapsed_seconds, 3),
            "pace_mps": round(self.pace_mps, 3) if self.pace_mps is not None else None,
            "total_distance_meters": round(self.total_distance_meters, 2),
            "current_speed_mps": self.current_speed_mps,
            "current_grade": round(self.current_grade, 4),
            "total_calories_kcal": round(self.total_calories_kcal, 3),
            "last_supplement_elapsed_seconds": self.last_supplement_elapsed_seconds,
            "supplement_history": self.supplement_history,
            "lifecycle_state": self.lifecycle_state,
            "supplement_source": self.supplement_source,
            "heart_rate_bpm": self.heart_rate_bpm,
            "hrv_ms": self.hrv_ms,
            "vo2_max": self.vo2_max,
            "gel_calorie_threshold_kcal": self.gel_calorie_threshold_kcal,
        }

    def to_display(self) -> dict:
        """Formatted strings for a watch face."""
        return {
            "time": format_elapsed(self.elapsed_seconds),
            "avg_pace": format_speed_kmh(self.pace_mps),
            "distance": format_distance_km(self.total_distance_meters),
            "running_speed": format_speed_kmh(self.current_speed_mps),
            "grade": f"{self.current_grade:.2f}",
            "heart_rate": format_heart_rate(self.heart_rate_bpm),
            "hrv": format_hrv(self.hrv_ms),
            "last_gel": format_gel_time(self.last_supplement_elapsed_seconds),
            "calories": format_calories(self.total_calories_kcal),
            "gel_serving": format_gel_serving(self.gel_calorie_threshold_kcal),
        }


@dataclass
class RunSummary:
    """Summary of a finished run, returned by stop_session()."""
    elapsed_seconds: float
    total_distance_meters: float
    pace_mps: Optional[float]
    calories_since_last_gel_kcal: float
    gel_times_seconds: List[float] = field(default_factory=list)

    @property
    def gels_taken(self) -> int:
        return len(self.gel_times_seconds)

    @classmethod
    def from_state(cls, state: SessionState) -> "RunSummary":
        return cls(
            elapsed_seconds=state.elapsed_seconds,
            total_distance_meters=state.total_distance_meters,
            pace_mps=state.pace_mps,
            calories_since_last_gel_kcal=state.total_calories_kcal,
            gel_times_seconds=list(state.supplement_history),
        )

    def to_dict(self) -> dict:
        """Convert to dict for API response."""
        return {
            "elapsed_seconds": round(self.elapsed_seconds, 3),
            "total_distance_meters": round(self.total_distance_meters, 2),
            "pace_mps": round(self.pace_mps, 3) if self.pace_mps is not None else None,
            "calories_since_last_gel_kcal": round(self.calories_since_last_gel_kcal, 3),
            "gels_taken": self.gels_taken,
            "gel_splits": [format_gel_time(t) for t in self.gel_times_seconds],
        }
