#!/usr/bin/env python3
"""CLI script replaying a synthetic run through the session engine.

Time is virtual, so an hour-long run replays instantly. Gel alerts are
auto-confirmed after a short delay, as an athlete holding the button would.

Usage:
    # 90 minutes at 3 m/s on the flat
    python backend/scripts/simulate_run.py --minutes 90 --speed 3.0

    # Hilly course, heavier runner, HRV dropping after 40 minutes
    python backend/scripts/simulate_run.py \
        --minutes 75 --speed 2.8 --floors-per-km 10 --mass 82 \
        --hrv-drop-minute 40

    # Try the alert flow quickly (30s time rule)
    python backend/scripts/simulate_run.py --minutes 3 --test-mode
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from nrg.features.sensors import SensorSnapshot
from nrg.features.session import SessionController, AthleteProfile
from nrg.features.supplement import (
    SupplementEvent,
    SupplementPolicyEngine,
    PolicyConfig,
    LifecycleState,
)
from nrg.shared.formatters import (
    format_elapsed,
    format_gel_time,
    format_speed_kmh,
    format_distance_km,
    format_calories,
)
from nrg.shared.scheduling import ManualScheduler


CONFIRM_DELAY_SECONDS = 4.0     # Reaction time + 3s hold
REPORT_EVERY_SECONDS = 300


def print_metrics(controller: SessionController) -> None:
    m = controller.metrics()
    print(
        f"  {format_elapsed(m.elapsed_seconds)}  "
        f"{format_distance_km(m.total_distance_meters):>9}  "
        f"avg {format_speed_kmh(m.pace_mps):>11}  "
        f"grade {m.current_grade:+.3f}  "
        f"{format_calories(m.total_calories_kcal):>9} since gel  "
        f"[{m.lifecycle_state}]"
    )


def simulate(args: argparse.Namespace) -> None:
    scheduler = ManualScheduler()
    config = PolicyConfig.create_test_mode() if args.test_mode else PolicyConfig()
    controller = SessionController(scheduler, policy=SupplementPolicyEngine(config))

    pending_confirms: list[float] = []

    def on_alert(event: SupplementEvent) -> None:
        print(f"  >> ALERT at {format_elapsed(event.raised_at_elapsed_seconds)}: {event.reason.value}")
        pending_confirms.append(scheduler.now() + CONFIRM_DELAY_SECONDS)

    controller.add_alert_listener(on_alert)
    controller.start_session(
        AthleteProfile.resolve(
            resting_vo2=args.vo2rest,
            body_mass_kg=args.mass,
            gel_calorie_threshold_kcal=args.gel_kcal,
        )
    )

    total_seconds = int(args.minutes * 60)
    floors_per_meter = args.floors_per_km / 1000.0

    for second in range(1, total_seconds + 1):
        distance = args.speed * second
        hrv = args.hrv
        if args.hrv_drop_minute is not None and second >= args.hrv_drop_minute * 60:
            hrv = args.hrv_low

        controller.on_sensor_update(SensorSnapshot(
            distance_meters=distance,
            speed_mps=args.speed,
            elevation_delta_floors=distance * floors_per_meter,
        ))
        controller.on_sensor_update(SensorSnapshot(hrv_ms=hrv))

        scheduler.advance(1.0)

        while pending_confirms and pending_confirms[0] <= scheduler.now():
            pending_confirms.pop(0)
            if controller.lifecycle_state is LifecycleState.RAISED:
                controller.confirm_automatic()
                if hrv < config.hrv_low_threshold_ms:
                    # Gel taken; HRV recovers
                    args.hrv_drop_minute = None

        if second % REPORT_EVERY_SECONDS == 0:
            print_metrics(controller)

    summary = controller.stop_session()
    print()
    print("Run summary")
    print(f"  Time:      {format_elapsed(summary.elapsed_seconds)}")
    print(f"  Distance:  {format_distance_km(summary.total_distance_meters)}")
    print(f"  Avg pace:  {format_speed_kmh(summary.pace_mps)}")
    print(f"  Gels:      {summary.gels_taken}")
    for i, t in enumerate(summary.gel_times_seconds, 1):
        print(f"    Gel #{i}: {format_gel_time(t)}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Replay a synthetic run")
    parser.add_argument("--minutes", type=float, default=90, help="Run duration")
    parser.add_argument("--speed", type=float, default=3.0, help="Constant speed (m/s)")
    parser.add_argument("--floors-per-km", type=float, default=0.0, help="Net floors climbed per km")
    parser.add_argument("--mass", type=float, default=None, help="Body mass (kg)")
    parser.add_argument("--vo2rest", type=float, default=None, help="Resting VO2 (ml/kg/min)")
    parser.add_argument("--gel-kcal", type=int, default=None, help="Gel serving (kcal)")
    parser.add_argument("--hrv", type=float, default=80.0, help="Baseline HRV (ms)")
    parser.add_argument("--hrv-low", type=float, default=55.0, help="HRV after the drop (ms)")
    parser.add_argument("--hrv-drop-minute", type=float, default=None, help="Minute HRV drops")
    parser.add_argument("--test-mode", action="store_true", help="30s time rule")
    args = parser.parse_args()

    simulate(args)


if __name__ == "__main__":
    main()
