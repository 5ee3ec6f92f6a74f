"""
Mathematical formulas for live energy and terrain estimates.

These formulas are used by the calorie estimator and the session
controller. Centralizing them here keeps the constants in one place.
"""

from typing import Optional

from nrg.shared.constants import (
    METERS_PER_FLOOR,
    MIN_GRADE_DISTANCE_METERS,
    KCAL_PER_LITER_O2,
    ACSM_HORIZONTAL_COEFFICIENT,
    ACSM_VERTICAL_COEFFICIENT,
)


def acsm_running_vo2(
    speed_m_per_min: float,
    grade: float,
    resting_vo2: float
) -> float:
    """
    Oxygen cost of running using the ACSM metabolic equation.

    Formula: VO2 = 0.2 * S + 0.9 * S * G + R

    Args:
        speed_m_per_min: Running speed in metres per minute
        grade: Grade as decimal (0.05 = 5% uphill, negative = downhill)
        resting_vo2: Resting oxygen consumption (ml/kg/min)

    Returns:
        VO2 in ml/kg/min (can be below resting on steep descents)

    References:
        ACSM's Guidelines for Exercise Testing and Prescription,
        metabolic equations chapter.
    """
    horizontal = ACSM_HORIZONTAL_COEFFICIENT * speed_m_per_min
    vertical = ACSM_VERTICAL_COEFFICIENT * speed_m_per_min * grade
    return horizontal + vertical + resting_vo2


def vo2_to_kcal_per_minute(vo2: float, body_mass_kg: float) -> float:
    """
    Convert relative VO2 to energy expenditure.

    Args:
        vo2: Oxygen consumption in ml/kg/min
        body_mass_kg: Athlete body mass

    Returns:
        kcal per minute (4.9 kcal per litre of O2)
    """
    liters_o2_per_min = vo2 * (body_mass_kg / 1000.0)
    return liters_o2_per_min * KCAL_PER_LITER_O2


def floors_to_grade(
    floors: Optional[float],
    distance_meters: float
) -> float:
    """
    Approximate course grade from pedometer floor counts.

    One floor is assumed to be 3 m of climb. The horizontal distance
    is floored at 1 m so the very first samples of a session cannot
    blow up the ratio.

    Args:
        floors: Net floors (ascended - descended), None if unknown
        distance_meters: Horizontal distance covered so far

    Returns:
        Grade as decimal (0.12 = 12%), 0.0 when floors are unknown
    """
    if floors is None:
        return 0.0
    vertical_meters = floors * METERS_PER_FLOOR
    horizontal = max(distance_meters, MIN_GRADE_DISTANCE_METERS)
    return vertical_meters / horizontal
