"""
Unified constants for the tracking engine.

This module is the single source of truth for the physical constants
and the default policy values used across the application.
"""

# === Physical constants ===

METERS_PER_FLOOR = 3.0              # Pedometer floor -> vertical metres
MIN_GRADE_DISTANCE_METERS = 1.0     # Grade denominator floor
KCAL_PER_LITER_O2 = 4.9             # Caloric equivalent of oxygen

# ACSM running equation coefficients (ml/kg/min per m/min)
ACSM_HORIZONTAL_COEFFICIENT = 0.2
ACSM_VERTICAL_COEFFICIENT = 0.9


# === Athlete defaults (first launch without health data) ===

DEFAULT_RESTING_VO2 = 3.5           # ml/kg/min
DEFAULT_BODY_MASS_KG = 70.0
DEFAULT_GEL_CALORIE_THRESHOLD_KCAL = 75


# === Supplement policy ===

GEL_TIME_THRESHOLD_SECONDS = 2700.0         # 45 min since last gel
TEST_MODE_GEL_TIME_THRESHOLD_SECONDS = 30.0
HRV_LOW_THRESHOLD_MS = 65.0
GEL_MIN_INTERVAL_SECONDS = 1800.0           # 30 min floor for calorie rule


# === Timing ===

TICK_INTERVAL_SECONDS = 1.0
HOLD_DURATION_SECONDS = 3.0
UNDO_WINDOW_SECONDS = 5.0
