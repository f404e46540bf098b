"""
Tests for the recovery score
============================
Covers:
- All inputs missing → None
- HRV and resting HR ratio components, capped at full score
- Sleep component: ideal band, linear undersleep, oversleep decay + floor
- Weight renormalization over present components
- Custom baselines, zero denominators
- should_rest threshold (39 rests, 40 does not)
- Extreme and non-finite inputs never raise and stay in [0, 100]
- Recovery labels at each breakpoint

Run: pytest tests/test_recovery.py -v
"""

from __future__ import annotations

import math

import pytest

from lifeindex.services.recovery import (
    compute_recovery_score,
    recovery_label,
    should_rest,
    sleep_component,
)


class TestNoData:

    def test_all_missing(self):
        assert compute_recovery_score(hrv=None, resting_hr=None, sleep_minutes=None) is None


class TestComponents:

    @pytest.mark.parametrize("hrv,expected", [(50, 100), (25, 50), (100, 100), (0, 0)])
    def test_hrv_only(self, hrv: float, expected: int):
        assert compute_recovery_score(hrv, None, None) == expected

    @pytest.mark.parametrize("rhr,expected", [(62, 100), (124, 50), (50, 100)])
    def test_resting_hr_only(self, rhr: float, expected: int):
        assert compute_recovery_score(None, rhr, None) == expected

    @pytest.mark.parametrize("minutes,expected", [
        (420, 1.0),
        (480, 1.0),
        (540, 1.0),
        (210, 0.5),
        (0, 0.0),
        (585, 0.75),
        (630, 0.5),
        (900, 0.5),
    ])
    def test_sleep_component(self, minutes: float, expected: float):
        assert sleep_component(minutes) == pytest.approx(expected)

    def test_zero_resting_hr_does_not_raise(self):
        assert compute_recovery_score(None, 0, None) == 100


class TestWeighting:

    def test_all_three(self):
        # 0.5 * 0.4 + 1.0 * 0.3 + 0.5 * 0.3 = 0.65
        assert compute_recovery_score(hrv=25, resting_hr=62, sleep_minutes=210) == 65

    def test_renormalized_over_present(self):
        # (0.5 * 0.4 + 1.0 * 0.3) / 0.7
        assert compute_recovery_score(hrv=25, resting_hr=None, sleep_minutes=480) == 71

    def test_custom_baselines(self):
        assert compute_recovery_score(60, None, None, hrv_baseline=80) == 75
        assert compute_recovery_score(None, 70, None, rhr_baseline=56) == 80

    def test_poor_night(self):
        score = compute_recovery_score(hrv=10, resting_hr=124, sleep_minutes=100)
        assert score == 30
        assert should_rest(score)


class TestShouldRest:

    @pytest.mark.parametrize("score,expected", [(0, True), (39, True), (40, False), (100, False)])
    def test_threshold(self, score: int, expected: bool):
        assert should_rest(score) is expected


class TestLabels:

    @pytest.mark.parametrize("score,label", [
        (100, "Fully Recovered"),
        (80, "Fully Recovered"),
        (79, "Mostly Recovered"),
        (60, "Mostly Recovered"),
        (59, "Partially Recovered"),
        (40, "Partially Recovered"),
        (39, "Rest Recommended"),
        (0, "Rest Recommended"),
    ])
    def test_breakpoints(self, score: int, label: str):
        assert recovery_label(score) == label


class TestExtremeInputs:

    def test_tiny_negative_resting_hr_scores_zero(self):
        # baseline / -1e-307 overflows to -inf
        assert compute_recovery_score(None, -1e-307, None) == 0

    def test_huge_negative_hrv_scores_zero(self):
        assert compute_recovery_score(-1e308, None, None) == 0

    @pytest.mark.parametrize("hrv,resting_hr,sleep_minutes", [
        (math.inf, None, None),
        (-math.inf, None, None),
        (math.nan, None, None),
        (None, math.inf, None),
        (None, -math.inf, None),
        (None, math.nan, None),
        (None, None, math.inf),
        (None, None, -math.inf),
        (None, None, math.nan),
        (math.nan, math.nan, math.nan),
        (1e308, -1e308, 1e308),
    ])
    def test_always_in_bounds(self, hrv, resting_hr, sleep_minutes):
        score = compute_recovery_score(hrv, resting_hr, sleep_minutes)
        assert 0 <= score <= 100

    def test_infinite_baselines(self):
        # HRV ratio 0, RHR ratio inf capped at 1: 0.3 / 0.7
        assert compute_recovery_score(50, 62, None, hrv_baseline=math.inf, rhr_baseline=math.inf) == 43
