"""
Calorie Estimator

Incremental energy expenditure for one tick of running, using the ACSM
running metabolic equation.

    speed_m_per_min = speed * 60
    vo2 = 0.2 * S + 0.9 * S * grade + resting_vo2      (ml/kg/min)
    kcal_per_min = vo2 * mass_kg / 1000 * 4.9
    incremental = kcal_per_min * tick_seconds / 60

References:
- ACSM's Guidelines for Exercise Testing and Prescription
- Weir (1949): ~4.9 kcal per litre of O2 at a mixed-fuel RER
"""

from dataclasses import dataclass
from typing import Optional

from nrg.shared.formulas import acsm_running_vo2, vo2_to_kcal_per_minute


@dataclass
class CalorieEstimate:
    """Breakdown of a single tick's estimate."""
    vo2: float                  # ml/kg/min
    kcal_per_minute: float
    incremental_kcal: float     # clamped >= 0


class CalorieEstimator:
    """
    Pure per-tick calorie estimator.

    Example (3 m/s, flat, 70 kg, VO2rest 3.5):
        S = 180 m/min
        VO2 = 0.2 * 180 + 3.5 = 39.5 ml/kg/min
        kcal/min = 39.5 * 0.07 * 4.9 = 13.55
        per 1s tick = 0.226 kcal

    Unknown speed counts as standing still (resting VO2 only). Steep
    descents can drive the raw VO2 below zero; the increment is clamped
    so cumulative calories never go down.
    """

    def estimate(
        self,
        speed_mps: Optional[float],
        grade: float,
        resting_vo2: float,
        body_mass_kg: float,
        tick_duration_seconds: float
    ) -> CalorieEstimate:
        """
        Estimate energy for one tick with intermediate values.

        Args:
            speed_mps: Current speed (m/s), None if unknown
            grade: Grade as decimal (signed)
            resting_vo2: Resting VO2 (ml/kg/min)
            body_mass_kg: Body mass (kg)
            tick_duration_seconds: Length of the tick

        Returns:
            CalorieEstimate
        """
        speed_m_per_min = (speed_mps or 0.0) * 60
        vo2 = acsm_running_vo2(speed_m_per_min, grade, resting_vo2)
        kcal_per_minute = vo2_to_kcal_per_minute(vo2, body_mass_kg)
        incremental = kcal_per_minute * (max(tick_duration_seconds, 0.0) / 60)

        return CalorieEstimate(
            vo2=vo2,
            kcal_per_minute=kcal_per_minute,
            incremental_kcal=max(0.0, incremental),
        )

    def estimate_incremental_kcal(
        self,
        speed_mps: Optional[float],
        grade: float,
        resting_vo2: float,
        body_mass_kg: float,
        tick_duration_seconds: float
    ) -> float:
        """Incremental kcal for one tick, never negative."""
        return self.estimate(
            speed_mps, grade, resting_vo2, body_mass_kg, tick_duration_seconds
        ).incremental_kcal
