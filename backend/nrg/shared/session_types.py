"""
Base types for the session engine.

This module contains only dataclasses with NO imports from features
to avoid circular dependencies between the policy engine and the
session controller.
"""

from dataclasses import dataclass, field, replace
from typing import List, Optional

from nrg.shared.constants import (
    DEFAULT_RESTING_VO2,
    DEFAULT_BODY_MASS_KG,
    DEFAULT_GEL_CALORIE_THRESHOLD_KCAL,
)


@dataclass
class SessionState:
    """
    Live state of one tracked run.

    Owned exclusively by SessionController; everything else receives
    it read-only.
    """
    elapsed_seconds: float = 0.0
    total_distance_meters: float = 0.0
    current_speed_mps: Optional[float] = None
    current_grade: float = 0.0
    total_calories_kcal: float = 0.0        # since the last gel
    last_supplement_elapsed_seconds: float = 0.0   # 0 = none yet
    supplement_history: List[float] = field(default_factory=list)
    carried_over_seconds: float = 0.0      # gap since a previous run's gel; cleared by the next intake

    @property
    def seconds_since_last_supplement(self) -> float:
        return self.elapsed_seconds - self.last_supplement_elapsed_seconds + self.carried_over_seconds

    @property
    def pace_mps(self) -> Optional[float]:
        """Average pace (distance / elapsed), None before the first second."""
        if self.elapsed_seconds <= 0:
            return None
        return self.total_distance_meters / self.elapsed_seconds

    @property
    def gels_taken(self) -> int:
        return len(self.supplement_history)


@dataclass(frozen=True)
class AthleteProfile:
    """
    Athlete parameters used by the calorie estimator and the policy.

    Set at session configuration time; the gel threshold and body mass
    may be replaced live by the phone sync channel.
    """
    resting_vo2: float = DEFAULT_RESTING_VO2                 # ml/kg/min
    body_mass_kg: float = DEFAULT_BODY_MASS_KG
    gel_calorie_threshold_kcal: int = DEFAULT_GEL_CALORIE_THRESHOLD_KCAL

    @classmethod
    def resolve(
        cls,
        resting_vo2: Optional[float] = None,
        body_mass_kg: Optional[float] = None,
        gel_calorie_threshold_kcal: Optional[int] = None,
        fallback: Optional["AthleteProfile"] = None
    ) -> "AthleteProfile":
        """
        Build a profile from health metrics that may be missing.

        Missing or non-positive values fall back to the defaults
        (resting VO2 3.5, user-chosen body mass), so the estimator
        never divides by an absent mass.

        Args:
            resting_vo2: Value fetched from health data, if any
            body_mass_kg: Value fetched or picked by the user, if any
            gel_calorie_threshold_kcal: Gel serving synced from the phone
            fallback: Profile supplying the defaults (class defaults if None)
        """
        base = fallback or cls()
        return cls(
            resting_vo2=resting_vo2 if resting_vo2 and resting_vo2 > 0 else base.resting_vo2,
            body_mass_kg=body_mass_kg if body_mass_kg and body_mass_kg > 0 else base.body_mass_kg,
            gel_calorie_threshold_kcal=(
                int(gel_calorie_threshold_kcal)
                if gel_calorie_threshold_kcal and gel_calorie_threshold_kcal > 0
                else base.gel_calorie_threshold_kcal
            ),
        )

    def updated(self, **changes) -> "AthleteProfile":
        return replace(self, **changes)

    def to_dict(self) -> dict:
        return {
            "resting_vo2": self.resting_vo2,
            "body_mass_kg": self.body_mass_kg,
            "gel_calorie_threshold_kcal": self.gel_calorie_threshold_kcal,
        }
