"""
Session schemas.

Pydantic schemas for API request/response serialization.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class StartSessionRequest(BaseModel):
    """
    Request to start a run.

    Health metrics are optional: anything missing falls back to the
    configured defaults (resting VO2 3.5, chosen body mass).
    """
    resting_vo2: Optional[float] = Field(default=None, gt=0, description="ml/kg/min")
    body_mass_kg: Optional[float] = Field(default=None, gt=0)
    gel_calorie_threshold_kcal: Optional[int] = Field(default=None, gt=0)
    preserve_last_supplement: Optional[bool] = None


class SessionMetricsSchema(BaseModel):
    """Live session metrics."""
    running: bool
    elapsed_seconds: float
    pace_mps: Optional[float] = Field(None, description="distance / elapsed, None at 0s")
    total_distance_meters: float
    current_speed_mps: Optional[float] = None
    current_grade: float
    total_calories_kcal: float = Field(..., description="Calories since the last gel")
    last_supplement_elapsed_seconds: float
    supplement_history: List[float]
    lifecycle_state: str
    supplement_source: Optional[str] = None
    heart_rate_bpm: Optional[float] = None
    hrv_ms: Optional[float] = None
    vo2_max: Optional[float] = None
    gel_calorie_threshold_kcal: int


class SessionDisplaySchema(BaseModel):
    """Pre-formatted strings for a watch face."""
    time: str
    avg_pace: str
    distance: str
    running_speed: str
    grade: str
    heart_rate: str
    hrv: str
    last_gel: str
    calories: str
    gel_serving: str


class RunSummarySchema(BaseModel):
    """Summary of the finished run."""
    elapsed_seconds: float
    total_distance_meters: float
    pace_mps: Optional[float] = None
    calories_since_last_gel_kcal: float
    gels_taken: int
    gel_splits: List[str]


class AthleteProfileSchema(BaseModel):
    """Current athlete profile."""
    resting_vo2: float
    body_mass_kg: float
    gel_calorie_threshold_kcal: int


class ProfileSyncRequest(BaseModel):
    """Values delivered by the companion phone app (last write wins)."""
    gel_calorie_threshold_kcal: Optional[int] = Field(default=None, gt=0)
    body_mass_kg: Optional[float] = Field(default=None, gt=0)
    resting_vo2: Optional[float] = Field(default=None, gt=0)


class SupplementStatusSchema(BaseModel):
    """Intake lifecycle status."""
    state: str
    event: Optional[Dict] = None
    countdown_remaining_seconds: Optional[float] = None
    holding: bool
    hold_progress: float
    alerts_raised: int
    evaluation_suspended: bool


class RuleDecisionSchema(BaseModel):
    rule: str
    fired: bool
    detail: str


class CommandResponse(BaseModel):
    """Response for supplement commands."""
    success: bool
    state: str
