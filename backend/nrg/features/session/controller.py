"""
Session Controller

Orchestrates all tracking components:
- Sensor aggregation (partial, asynchronous samples)
- Session clock (1s ticks)
- Calorie accrual (ACSM running equation)
- Supplement policy evaluation
- Supplement intake lifecycle (raise / confirm / undo)

This is the main entry point for the live engine. It exclusively owns
the SessionState; every mutation happens under one re-entrant lock that
is shared with the clock, the undo countdown and the hold gesture, so
sensor callbacks and timer callbacks are serialized.
"""

import logging
import threading
from typing import Callable, List, Optional

from nrg.shared.formulas import floors_to_grade
from nrg.shared.scheduling import Scheduler
from nrg.shared.constants import (
    TICK_INTERVAL_SECONDS,
    UNDO_WINDOW_SECONDS,
    HOLD_DURATION_SECONDS,
)
from nrg.features.sensors import SensorSampleAggregator, SensorSnapshot
from nrg.features.energy import CalorieEstimator
from nrg.features.supplement import (
    SupplementPolicyEngine,
    PolicyConfig,
    RuleDecision,
    SupplementLifecycle,
    HoldGesture,
    SupplementEvent,
    LifecycleState,
    TriggerReason,
)

from .clock import SessionClock
from .models import SessionState, AthleteProfile, SessionMetrics, RunSummary

logger = logging.getLogger(__name__)


AlertListener = Callable[[SupplementEvent], None]


class SessionController:
    """
    Command/query surface of the tracking engine.

    All operations are synchronous and never block on I/O.

    Usage:
        controller = SessionController(scheduler)
        controller.add_alert_listener(show_gel_prompt)
        controller.start_session(AthleteProfile.resolve(body_mass_kg=68))
        controller.on_sensor_update(SensorSnapshot(distance_meters=15.0, speed_mps=3.0))
        ...
        summary = controller.stop_session()
    """

    def __init__(
        self,
        scheduler: Scheduler,
        policy: Optional[SupplementPolicyEngine] = None,
        estimator: Optional[CalorieEstimator] = None,
        profile: Optional[AthleteProfile] = None,
        tick_interval_seconds: float = TICK_INTERVAL_SECONDS,
        undo_window_seconds: float = UNDO_WINDOW_SECONDS,
        hold_duration_seconds: float = HOLD_DURATION_SECONDS,
        preserve_last_supplement: bool = False
    ):
        self._lock = threading.RLock()
        self._scheduler = scheduler

        self.policy = policy or SupplementPolicyEngine()
        self.estimator = estimator or CalorieEstimator()
        self.preserve_last_supplement = preserve_last_supplement
        self._profile = profile or AthleteProfile()

        self._aggregator = SensorSampleAggregator(lock=self._lock)
        self._clock = SessionClock(scheduler, tick_interval_seconds, lock=self._lock)
        self._lifecycle = SupplementLifecycle(
            scheduler,
            on_finalize=self._finalize_intake,
            undo_window_seconds=undo_window_seconds,
            lock=self._lock,
        )
        self._hold = HoldGesture(scheduler, hold_duration_seconds, lock=self._lock)

        self._state = SessionState()
        self._running = False
        self._last_tick_elapsed = 0.0
        self._carried_gap_seconds = 0.0
        self._stopped_at: Optional[float] = None

        self._alert_listeners: List[AlertListener] = []
        self._alerts_raised = 0

    @classmethod
    def from_settings(cls, scheduler: Scheduler, settings) -> "SessionController":
        """Build a controller from application Settings."""
        profile = AthleteProfile(
            resting_vo2=settings.default_resting_vo2,
            body_mass_kg=settings.default_body_mass_kg,
            gel_calorie_threshold_kcal=settings.default_gel_calorie_threshold_kcal,
        )
        return cls(
            scheduler,
            policy=SupplementPolicyEngine(PolicyConfig.from_settings(settings)),
            profile=profile,
            tick_interval_seconds=settings.tick_interval_seconds,
            undo_window_seconds=settings.undo_window_seconds,
            hold_duration_seconds=settings.hold_duration_seconds,
            preserve_last_supplement=settings.preserve_last_supplement,
        )

    # =========================================================================
    # QUERIES
    # =========================================================================

    @property
    def running(self) -> bool:
        return self._running

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def profile(self) -> AthleteProfile:
        return self._profile

    @property
    def snapshot(self) -> SensorSnapshot:
        return self._aggregator.snapshot

    @property
    def elapsed_seconds(self) -> float:
        return self._state.elapsed_seconds

    @property
    def pace_mps(self) -> Optional[float]:
        return self._state.pace_mps

    @property
    def total_distance_meters(self) -> float:
        return self._state.total_distance_meters

    @property
    def current_grade(self) -> float:
        return self._state.current_grade

    @property
    def total_calories_kcal(self) -> float:
        return self._state.total_calories_kcal

    @property
    def last_supplement_elapsed_seconds(self) -> float:
        return self._state.last_supplement_elapsed_seconds

    @property
    def lifecycle_state(self) -> LifecycleState:
        return self._lifecycle.state

    @property
    def lifecycle(self) -> SupplementLifecycle:
        return self._lifecycle

    @property
    def alerts_raised(self) -> int:
        return self._alerts_raised

    def metrics(self) -> SessionMetrics:
        with self._lock:
            source = self._lifecycle.source
            return SessionMetrics.build(
                running=self._running,
                state=self._state,
                snapshot=self._aggregator.snapshot,
                profile=self._profile,
                lifecycle_state=self._lifecycle.state.value,
                supplement_source=source.value if source else None,
            )

    def policy_breakdown(self) -> List[RuleDecision]:
        """Per-rule evaluation against the current state."""
        with self._lock:
            return self.policy.explain(self._state, self._aggregator.snapshot, self._profile)

    def supplement_status(self) -> dict:
        with self._lock:
            status = self._lifecycle.to_dict()
            status["holding"] = self._hold.is_holding
            status["hold_progress"] = round(self._hold.progress, 3)
            status["alerts_raised"] = self._alerts_raised
            status["evaluation_suspended"] = self._lifecycle.is_active
            return status

    # =========================================================================
    # SESSION COMMANDS
    # =========================================================================

    def start_session(
        self,
        profile: Optional[AthleteProfile] = None,
        preserve_last_supplement: Optional[bool] = None
    ) -> SessionMetrics:
        """
        Start (or restart) a tracked session.

        Args:
            profile: Athlete profile for this run (keeps the current one if None)
            preserve_last_supplement: Keep counting from the previous run's
                last gel (including the time between runs) instead of
                from this start (config default if None)
        """
        with self._lock:
            if self._running:
                self.stop_session()

            if profile is not None:
                self._profile = profile

            if preserve_last_supplement is None:
                preserve_last_supplement = self.preserve_last_supplement
            carried = 0.0
            if preserve_last_supplement and self._stopped_at is not None:
                downtime = max(0.0, self._scheduler.now() - self._stopped_at)
                carried = self._carried_gap_seconds + downtime

            self._state = SessionState(carried_over_seconds=carried)
            self._aggregator.reset()
            self._last_tick_elapsed = 0.0
            self._running = True
            self._clock.start(self.on_tick)

            logger.info(
                f"Session started (mass={self._profile.body_mass_kg}kg, "
                f"vo2rest={self._profile.resting_vo2}, "
                f"gel={self._profile.gel_calorie_threshold_kcal}kcal, "
                f"carried_gap={carried:.0f}s)"
            )
            return self.metrics()

    def stop_session(self) -> Optional[RunSummary]:
        """
        Stop the session.

        Cancels the clock, any undo countdown and any hold, discards the
        sensor snapshot and resets state to zero. The supplement history
        is kept until the next start.

        Returns:
            RunSummary of the finished run, None if no session was running
        """
        with self._lock:
            if not self._running:
                return None

            self._clock.stop()
            self._hold.release()
            self._lifecycle.reset()
            self._running = False

            summary = RunSummary.from_state(self._state)
            self._carried_gap_seconds = max(0.0, self._state.seconds_since_last_supplement)
            self._stopped_at = self._scheduler.now()

            self._aggregator.reset()
            self._state = SessionState(supplement_history=self._state.supplement_history)
            self._last_tick_elapsed = 0.0

            logger.info(
                f"Session stopped after {summary.elapsed_seconds:.0f}s, "
                f"{summary.total_distance_meters:.0f}m, {summary.gels_taken} gels"
            )
            return summary

    # =========================================================================
    # INBOUND CHANNELS
    # =========================================================================

    def on_sensor_update(self, update: SensorSnapshot) -> Optional[SensorSnapshot]:
        """
        Merge a partial sensor sample and refresh the grade.

        Calories are only accrued on ticks. Samples arriving while no
        session runs are dropped.

        Returns:
            The merged snapshot, None if the sample was dropped
        """
        with self._lock:
            if not self._running:
                logger.debug("Sensor update dropped: no session running")
                return None

            snapshot = self._aggregator.apply_update(update)
            distance = snapshot.distance_meters
            if distance is None:
                distance = self._state.total_distance_meters
            self._state.current_grade = floors_to_grade(snapshot.elevation_delta_floors, distance)
            return snapshot

    def update_athlete_profile(
        self,
        gel_calorie_threshold_kcal: Optional[int] = None,
        body_mass_kg: Optional[float] = None,
        resting_vo2: Optional[float] = None
    ) -> AthleteProfile:
        """
        Apply a profile sync (last write wins) without touching the session.

        Non-positive values are ignored.
        """
        updates = {
            "gel_calorie_threshold_kcal": gel_calorie_threshold_kcal,
            "body_mass_kg": body_mass_kg,
            "resting_vo2": resting_vo2,
        }
        with self._lock:
            changes = {}
            for name, value in updates.items():
                if value is None:
                    continue
                if value <= 0:
                    logger.warning(f"Ignoring non-positive {name}={value} from profile sync")
                    continue
                changes[name] = int(value) if name == "gel_calorie_threshold_kcal" else float(value)

            if changes:
                self._profile = self._profile.updated(**changes)
                logger.info(f"Athlete profile updated: {changes}")
            return self._profile

    # =========================================================================
    # TICK
    # =========================================================================

    def on_tick(self, elapsed_seconds: float) -> Optional[TriggerReason]:
        """
        Advance the session by one tick.

        Sequence: elapsed -> distance/speed/grade -> calories -> policy
        (skipped while an intake is outstanding).

        Returns:
            Reason of a newly raised alert, else None
        """
        with self._lock:
            if not self._running:
                return None

            state = self._state
            tick_duration = max(0.0, elapsed_seconds - self._last_tick_elapsed)
            self._last_tick_elapsed = elapsed_seconds
            state.elapsed_seconds = max(state.elapsed_seconds, elapsed_seconds)

            snapshot = self._aggregator.snapshot
            if snapshot.distance_meters is not None:
                state.total_distance_meters = snapshot.distance_meters
            if snapshot.speed_mps is not None:
                state.current_speed_mps = snapshot.speed_mps
            state.current_grade = floors_to_grade(
                snapshot.elevation_delta_floors,
                state.total_distance_meters,
            )

            state.total_calories_kcal += self.estimator.estimate_incremental_kcal(
                state.current_speed_mps,
                state.current_grade,
                self._profile.resting_vo2,
                self._profile.body_mass_kg,
                tick_duration,
            )

            if self._lifecycle.is_active:
                return None

            reason = self.policy.evaluate(state, snapshot, self._profile)
            if reason is None:
                return None

            if self._lifecycle.raise_alert(state.elapsed_seconds, reason):
                self._alerts_raised += 1
                logger.info(f"Gel alert raised at {state.elapsed_seconds:.0f}s: {reason.value}")
                self._notify_alert(self._lifecycle.event)
            return reason

    # =========================================================================
    # SUPPLEMENT COMMANDS
    # =========================================================================

    def confirm_manual(self) -> bool:
        """Completed manual hold: IDLE -> AWAITING_CONFIRMATION(manual)."""
        with self._lock:
            if not self._running:
                return False
            return self._lifecycle.confirm_manual(self._state.elapsed_seconds)

    def confirm_automatic(self) -> bool:
        """Completed hold on the alert: RAISED -> AWAITING_CONFIRMATION(auto)."""
        with self._lock:
            if not self._running:
                return False
            return self._lifecycle.confirm_automatic()

    def undo(self) -> bool:
        """Undo during the confirmation window."""
        with self._lock:
            return self._lifecycle.undo()

    def press_hold(self) -> bool:
        """
        Start the 3s hold gesture.

        On completion the hold confirms whatever the lifecycle is waiting
        for: a manual intake from IDLE, or the raised alert.
        """
        with self._lock:
            if not self._running:
                return False
            if self._lifecycle.state is LifecycleState.AWAITING_CONFIRMATION:
                return False
            return self._hold.press(on_complete=self._complete_hold)

    def release_hold(self) -> bool:
        """Release the gesture; cancels it if the hold had not completed."""
        with self._lock:
            return self._hold.release()

    def _complete_hold(self) -> None:
        if self._lifecycle.state is LifecycleState.RAISED:
            self.confirm_automatic()
        else:
            self.confirm_manual()

    def _finalize_intake(self, event: SupplementEvent) -> None:
        # Runs under the lock, from the lifecycle's countdown expiry
        if not self._running:
            return
        state = self._state
        state.elapsed_seconds = max(state.elapsed_seconds, self._clock.elapsed_seconds())
        state.supplement_history.append(state.elapsed_seconds)
        state.last_supplement_elapsed_seconds = state.elapsed_seconds
        state.carried_over_seconds = 0.0
        state.total_calories_kcal = 0.0
        self._last_tick_elapsed = state.elapsed_seconds
        logger.info(
            f"Gel intake recorded at {state.elapsed_seconds:.0f}s "
            f"({event.source.value}, #{state.gels_taken})"
        )

    # =========================================================================
    # ALERT SIGNAL
    # =========================================================================

    def add_alert_listener(self, listener: AlertListener) -> None:
        with self._lock:
            self._alert_listeners.append(listener)

    def remove_alert_listener(self, listener: AlertListener) -> None:
        with self._lock:
            if listener in self._alert_listeners:
                self._alert_listeners.remove(listener)

    def _notify_alert(self, event: SupplementEvent) -> None:
        for listener in list(self._alert_listeners):
            try:
                listener(event)
            except Exception as e:
                logger.error(f"Alert listener failed: {e}")
