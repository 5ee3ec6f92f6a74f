"""
Tests for display formatting helpers.
"""

from nrg.shared.formatters import (
    UNKNOWN,
    format_elapsed,
    format_gel_time,
    format_speed_kmh,
    format_distance_km,
    format_calories,
    format_gel_serving,
    format_heart_rate,
    format_hrv,
)


class TestElapsed:

    def test_zero(self):
        assert format_elapsed(0) == "00:00"

    def test_minutes_and_seconds(self):
        assert format_elapsed(245) == "04:05"

    def test_minutes_do_not_wrap_at_hour(self):
        assert format_elapsed(3725) == "62:05"

    def test_fraction_truncated(self):
        assert format_elapsed(59.9) == "00:59"


class TestGelTime:

    def test_no_gel_yet(self):
        assert format_gel_time(0) == "00:00:00"

    def test_hours_minutes_seconds(self):
        assert format_gel_time(2700) == "00:45:00"
        assert format_gel_time(3725) == "01:02:05"


class TestUnits:

    def test_speed_kmh(self):
        assert format_speed_kmh(3.0) == "10.80 km/h"

    def test_speed_unknown(self):
        assert format_speed_kmh(None) == f"{UNKNOWN} km/h"

    def test_distance_km(self):
        assert format_distance_km(5432.1) == "5.43 km"

    def test_calories(self):
        assert format_calories(74.6) == "75 kcal"

    def test_gel_serving(self):
        assert format_gel_serving(100) == "100 cal"

    def test_heart_rate(self):
        assert format_heart_rate(152.7) == "152 BPM"
        assert format_heart_rate(None) == UNKNOWN

    def test_hrv(self):
        assert format_hrv(58.4) == "58 ms"
        assert format_hrv(None) == UNKNOWN
