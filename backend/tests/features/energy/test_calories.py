"""
Tests for CalorieEstimator.

Checks the ACSM closed form and the non-negativity of the per-tick
increment.
"""

import pytest

from nrg.features.energy import CalorieEstimator


# Reference runner: 70 kg, resting VO2 3.5, 3 m/s (180 m/min) on the flat
REFERENCE_KCAL_PER_MIN = (0.2 * 180 + 3.5) * 0.07 * 4.9


@pytest.fixture
def estimator():
    return CalorieEstimator()


# =============================================================================
# Test Closed Form
# =============================================================================

class TestClosedForm:
    """Estimates must match the ACSM equation."""

    def test_one_minute_flat(self, estimator):
        kcal = estimator.estimate_incremental_kcal(3.0, 0.0, 3.5, 70.0, 60.0)
        assert kcal == pytest.approx(REFERENCE_KCAL_PER_MIN)

    def test_one_second_tick(self, estimator):
        kcal = estimator.estimate_incremental_kcal(3.0, 0.0, 3.5, 70.0, 1.0)
        assert kcal == pytest.approx(REFERENCE_KCAL_PER_MIN / 60)

    def test_sixty_ticks_sum_to_one_minute(self, estimator):
        total = sum(
            estimator.estimate_incremental_kcal(3.0, 0.0, 3.5, 70.0, 1.0)
            for _ in range(60)
        )
        assert total == pytest.approx(REFERENCE_KCAL_PER_MIN)

    def test_breakdown(self, estimator):
        estimate = estimator.estimate(3.0, 0.0, 3.5, 70.0, 1.0)
        assert estimate.vo2 == pytest.approx(39.5)
        assert estimate.kcal_per_minute == pytest.approx(REFERENCE_KCAL_PER_MIN)

    def test_uphill_costs_more(self, estimator):
        flat = estimator.estimate_incremental_kcal(3.0, 0.0, 3.5, 70.0, 1.0)
        uphill = estimator.estimate_incremental_kcal(3.0, 0.12, 3.5, 70.0, 1.0)
        assert uphill > flat

    def test_unknown_speed_is_resting(self, estimator):
        kcal = estimator.estimate_incremental_kcal(None, 0.0, 3.5, 70.0, 60.0)
        assert kcal == pytest.approx(3.5 * 0.07 * 4.9)


# =============================================================================
# Test Non-negativity
# =============================================================================

class TestNonNegative:
    """The increment is clamped at zero."""

    @pytest.mark.parametrize("speed,grade", [
        (0.0, 0.0),
        (3.0, -0.3),
        (5.0, -1.0),
        (6.0, -2.5),
        (-2.0, 0.0),
    ])
    def test_never_negative(self, estimator, speed, grade):
        assert estimator.estimate_incremental_kcal(speed, grade, 3.5, 70.0, 1.0) >= 0.0

    def test_steep_descent_clamped_to_zero(self, estimator):
        estimate = estimator.estimate(5.0, -1.0, 3.5, 70.0, 1.0)
        assert estimate.vo2 < 0
        assert estimate.incremental_kcal == 0.0

    def test_negative_duration_adds_nothing(self, estimator):
        assert estimator.estimate_incremental_kcal(3.0, 0.0, 3.5, 70.0, -1.0) == 0.0
