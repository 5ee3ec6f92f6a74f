"""
Supplement (energy gel) decision module.

Usage:
    from nrg.features.supplement import SupplementPolicyEngine, SupplementLifecycle

Components:
- SupplementPolicyEngine: Three alert rules, evaluated per tick
- SupplementLifecycle: Raise / confirm / undo state machine
- HoldGesture: 3s hold-to-confirm press tracker
"""

from .models import (
    SupplementSource,
    TriggerReason,
    LifecycleState,
    SupplementEvent,
)
from .policy import SupplementPolicyEngine, PolicyConfig, RuleDecision
from .lifecycle import SupplementLifecycle
from .hold import HoldGesture

__all__ = [
    # Models
    "SupplementSource",
    "TriggerReason",
    "LifecycleState",
    "SupplementEvent",
    # Policy
    "SupplementPolicyEngine",
    "PolicyConfig",
    "RuleDecision",
    # Lifecycle
    "SupplementLifecycle",
    "HoldGesture",
]
