"""
Supplement Policy Engine

Decides, once per tick, whether the athlete should take a gel.

Three independently sufficient rules, checked in priority order
(first match wins; the order only affects which reason is reported):

1. Time since last gel  >= time threshold (45 min)
2. HRV below threshold  (declining HRV ~ accumulating fatigue)
3. Calories since last gel >= gel serving AND >= 30 min since last gel

References:
- Jeukendrup (2014): 30-60 g carbohydrate per hour for efforts > 1h
- HRV decline during prolonged exercise as a fatigue marker
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from nrg.shared.constants import (
    GEL_TIME_THRESHOLD_SECONDS,
    TEST_MODE_GEL_TIME_THRESHOLD_SECONDS,
    HRV_LOW_THRESHOLD_MS,
    GEL_MIN_INTERVAL_SECONDS,
)
from nrg.shared.session_types import SessionState, AthleteProfile
from nrg.features.sensors.models import SensorSnapshot

from .models import TriggerReason

logger = logging.getLogger(__name__)


@dataclass
class PolicyConfig:
    """Tunable thresholds for the alert rules."""
    time_threshold_seconds: float = GEL_TIME_THRESHOLD_SECONDS
    hrv_low_threshold_ms: float = HRV_LOW_THRESHOLD_MS
    min_interval_seconds: float = GEL_MIN_INTERVAL_SECONDS

    @classmethod
    def create_test_mode(cls) -> "PolicyConfig":
        """30s time rule, for trying the alert flow on a watch."""
        return cls(time_threshold_seconds=TEST_MODE_GEL_TIME_THRESHOLD_SECONDS)

    @classmethod
    def from_settings(cls, settings) -> "PolicyConfig":
        if settings.test_mode:
            time_threshold = TEST_MODE_GEL_TIME_THRESHOLD_SECONDS
        else:
            time_threshold = settings.gel_time_threshold_seconds
        return cls(
            time_threshold_seconds=time_threshold,
            hrv_low_threshold_ms=settings.hrv_low_threshold_ms,
            min_interval_seconds=settings.gel_min_interval_seconds,
        )


@dataclass
class RuleDecision:
    """Outcome of one rule for diagnostics."""
    reason: TriggerReason
    fired: bool
    detail: str

    def to_dict(self) -> dict:
        return {
            "rule": self.reason.value,
            "fired": self.fired,
            "detail": self.detail,
        }


class SupplementPolicyEngine:
    """
    Pure rule evaluation; no side effects.

    The caller (SessionController) is responsible for suspending
    further evaluation while an intake event is outstanding.

    Example:
        engine = SupplementPolicyEngine()
        reason = engine.evaluate(state, snapshot, profile)
        if reason is TriggerReason.TIME_SINCE_LAST_GEL:
            ...
    """

    RULE_ORDER = (
        TriggerReason.TIME_SINCE_LAST_GEL,
        TriggerReason.LOW_HRV,
        TriggerReason.CALORIES_SINCE_LAST_GEL,
    )

    def __init__(self, config: Optional[PolicyConfig] = None):
        self.config = config or PolicyConfig()

    def evaluate(
        self,
        state: SessionState,
        snapshot: SensorSnapshot,
        profile: AthleteProfile
    ) -> Optional[TriggerReason]:
        """
        Return the highest-priority rule that fires, or None.

        Args:
            state: Current session state
            snapshot: Latest sensor readings
            profile: Athlete profile (gel threshold read live)
        """
        for reason in self.RULE_ORDER:
            if self._check(reason, state, snapshot, profile).fired:
                return reason
        return None

    def explain(
        self,
        state: SessionState,
        snapshot: SensorSnapshot,
        profile: AthleteProfile
    ) -> List[RuleDecision]:
        """Evaluate every rule (no short-circuit) for diagnostics."""
        decisions = [
            self._check(reason, state, snapshot, profile)
            for reason in self.RULE_ORDER
        ]
        for decision in decisions:
            logger.debug(f"Rule {decision.reason.value}: fired={decision.fired} ({decision.detail})")
        return decisions

    def _check(
        self,
        reason: TriggerReason,
        state: SessionState,
        snapshot: SensorSnapshot,
        profile: AthleteProfile
    ) -> RuleDecision:
        since_last = state.seconds_since_last_supplement

        if reason is TriggerReason.TIME_SINCE_LAST_GEL:
            threshold = self.config.time_threshold_seconds
            return RuleDecision(
                reason=reason,
                fired=since_last >= threshold,
                detail=f"{since_last:.0f}s since last gel (threshold {threshold:.0f}s)",
            )

        if reason is TriggerReason.LOW_HRV:
            threshold = self.config.hrv_low_threshold_ms
            hrv = snapshot.hrv_ms
            if hrv is None:
                return RuleDecision(reason=reason, fired=False, detail="No HRV sample")
            return RuleDecision(
                reason=reason,
                fired=hrv < threshold,
                detail=f"HRV {hrv:.0f}ms (threshold < {threshold:.0f}ms)",
            )

        # CALORIES_SINCE_LAST_GEL
        kcal = state.total_calories_kcal
        kcal_threshold = profile.gel_calorie_threshold_kcal
        min_interval = self.config.min_interval_seconds
        return RuleDecision(
            reason=reason,
            fired=kcal >= kcal_threshold and since_last >= min_interval,
            detail=(
                f"{kcal:.1f}/{kcal_threshold} kcal, "
                f"{since_last:.0f}s since last gel (min {min_interval:.0f}s)"
            ),
        )

    def get_info(self) -> dict:
        """Get policy configuration for API response."""
        return {
            "time_threshold_seconds": self.config.time_threshold_seconds,
            "hrv_low_threshold_ms": self.config.hrv_low_threshold_ms,
            "min_interval_seconds": self.config.min_interval_seconds,
            "rule_order": [reason.value for reason in self.RULE_ORDER],
        }
