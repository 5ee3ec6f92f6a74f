"""
Live session tracking module.

Usage:
    from nrg.features.session import SessionController, AthleteProfile

Components:
- SessionController: Owns state, wires sensors/clock/policy/lifecycle
- SessionClock: Drift-free 1s tick source
- SessionMetrics / RunSummary: Query results
"""

from .models import SessionState, AthleteProfile, SessionMetrics, RunSummary
from .clock import SessionClock
from .controller import SessionController, AlertListener

__all__ = [
    # Models
    "SessionState",
    "AthleteProfile",
    "SessionMetrics",
    "RunSummary",
    # Clock
    "SessionClock",
    # Controller
    "SessionController",
    "AlertListener",
]
