"""
Tests for shared formulas module.

Tests the energy and terrain formulas used by the session engine.
"""

import pytest

from nrg.shared.formulas import acsm_running_vo2, vo2_to_kcal_per_minute, floors_to_grade


# =============================================================================
# Test ACSM Running VO2
# =============================================================================

class TestAcsmRunningVo2:
    """Tests for acsm_running_vo2 function."""

    def test_standing_still_is_resting(self):
        """Zero speed should cost exactly the resting VO2."""
        assert acsm_running_vo2(0.0, 0.0, 3.5) == pytest.approx(3.5)

    def test_flat_running(self):
        """180 m/min on the flat: 0.2 * 180 + 3.5."""
        assert acsm_running_vo2(180.0, 0.0, 3.5) == pytest.approx(39.5)

    def test_uphill_adds_vertical_component(self):
        """5% grade adds 0.9 * S * G."""
        flat = acsm_running_vo2(180.0, 0.0, 3.5)
        uphill = acsm_running_vo2(180.0, 0.05, 3.5)
        assert uphill - flat == pytest.approx(0.9 * 180.0 * 0.05)

    def test_steep_descent_can_go_negative(self):
        """The raw equation is not clamped; the estimator clamps."""
        assert acsm_running_vo2(300.0, -0.5, 3.5) < 0


# =============================================================================
# Test VO2 to kcal
# =============================================================================

class TestVo2ToKcal:
    """Tests for vo2_to_kcal_per_minute function."""

    def test_reference_runner(self):
        """39.5 ml/kg/min at 70 kg -> 39.5 * 0.07 * 4.9 kcal/min."""
        assert vo2_to_kcal_per_minute(39.5, 70.0) == pytest.approx(39.5 * 0.07 * 4.9)

    def test_scales_with_mass(self):
        light = vo2_to_kcal_per_minute(40.0, 50.0)
        heavy = vo2_to_kcal_per_minute(40.0, 100.0)
        assert heavy == pytest.approx(2 * light)


# =============================================================================
# Test Floors to Grade
# =============================================================================

class TestFloorsToGrade:
    """Tests for floors_to_grade function."""

    def test_four_floors_over_100m(self):
        """4 floors (12 m) over 100 m -> 0.12."""
        assert floors_to_grade(4, 100.0) == pytest.approx(0.12)

    def test_unknown_floors_is_flat(self):
        assert floors_to_grade(None, 100.0) == 0.0

    def test_zero_distance_uses_one_meter(self):
        """Distance is floored at 1 m, so no division by zero."""
        assert floors_to_grade(1, 0.0) == pytest.approx(3.0)

    def test_descent_is_negative(self):
        assert floors_to_grade(-2, 200.0) == pytest.approx(-0.03)
