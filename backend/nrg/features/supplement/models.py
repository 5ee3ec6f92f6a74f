"""
Supplement intake models.

An intake event exists only between its trigger and its resolution
(finalize or undo). "No event" is represented by the absence of an
event, never by a placeholder source.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class SupplementSource(str, Enum):
    """Who started the intake."""
    MANUAL = "manual"           # Athlete held the gel button
    AUTOMATIC = "automatic"     # A policy rule fired


class TriggerReason(str, Enum):
    """Policy rule that raised an automatic alert."""
    TIME_SINCE_LAST_GEL = "time_since_last_gel"
    LOW_HRV = "low_hrv"
    CALORIES_SINCE_LAST_GEL = "calories_since_last_gel"


class LifecycleState(str, Enum):
    """Steady states of the intake lifecycle."""
    IDLE = "idle"
    RAISED = "raised"                                   # Alert shown, waiting for hold
    AWAITING_CONFIRMATION = "awaiting_confirmation"     # Undo window running


@dataclass(frozen=True)
class SupplementEvent:
    """A single outstanding intake."""
    source: SupplementSource
    raised_at_elapsed_seconds: float
    reason: Optional[TriggerReason] = None    # Set for AUTOMATIC only

    def to_dict(self) -> dict:
        return {
            "source": self.source.value,
            "raised_at_elapsed_seconds": self.raised_at_elapsed_seconds,
            "reason": self.reason.value if self.reason else None,
        }
