"""
Formatting utilities for display.

Used by the display endpoint and the simulation script.
"""

from typing import Optional

UNKNOWN = "--"


def format_elapsed(seconds: float) -> str:
    """
    Format elapsed time as 'MM:SS'.

    Minutes are not wrapped at the hour, so 3725s -> '62:05'.

    Args:
        seconds: Elapsed time in seconds

    Returns:
        Formatted string (e.g., '04:05')
    """
    total = int(max(seconds, 0))
    minutes = total // 60
    secs = total % 60
    return f"{minutes:02d}:{secs:02d}"


def format_gel_time(seconds: float) -> str:
    """
    Format the last-gel time as 'HH:MM:SS'.

    Args:
        seconds: Elapsed time of the last intake (0 = none yet)

    Returns:
        Formatted string (e.g., '00:45:00'), '00:00:00' when no gel taken
    """
    if seconds <= 0:
        return "00:00:00"

    total = int(seconds)
    hours = total // 3600
    minutes = (total % 3600) // 60
    secs = total % 60
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"


def format_speed_kmh(speed_mps: Optional[float]) -> str:
    """
    Format a speed in m/s as km/h.

    Args:
        speed_mps: Speed in metres per second

    Returns:
        Formatted string (e.g., '10.80 km/h')
    """
    if speed_mps is None:
        return f"{UNKNOWN} km/h"
    return f"{speed_mps * 3.6:.2f} km/h"


def format_distance_km(meters: float) -> str:
    """Format distance in metres as kilometres with two decimals."""
    return f"{meters / 1000.0:.2f} km"


def format_calories(kcal: float) -> str:
    """Format calories as whole kcal."""
    return f"{kcal:.0f} kcal"


def format_gel_serving(kcal: int) -> str:
    """Format the gel serving size synced from the phone."""
    return f"{kcal} cal"


def format_heart_rate(bpm: Optional[float]) -> str:
    if bpm is None:
        return UNKNOWN
    return f"{int(bpm)} BPM"


def format_hrv(hrv_ms: Optional[float]) -> str:
    if hrv_ms is None:
        return UNKNOWN
    return f"{hrv_ms:.0f} ms"
