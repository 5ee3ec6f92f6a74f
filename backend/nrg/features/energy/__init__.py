"""
Energy expenditure module.

Components:
- CalorieEstimator: ACSM running equation, per tick
"""

from .calories import CalorieEstimator, CalorieEstimate

__all__ = [
    "CalorieEstimator",
    "CalorieEstimate",
]
