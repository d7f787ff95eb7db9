"""Tests for rise.analytics.wake_score -- the 0-100 morning score."""

import pytest

from rise.analytics.wake_score import (
    punctuality_points,
    score,
    streak_points,
    wake_proof_points,
)
from rise.state import WakeProof


class TestPunctuality:
    def test_no_snoozes(self):
        assert punctuality_points(0, 2) == 40.0

    def test_linear_decay(self):
        assert punctuality_points(1, 2) == pytest.approx(20.0)
        assert punctuality_points(1, 4) == pytest.approx(30.0)

    def test_at_or_over_limit(self):
        assert punctuality_points(2, 2) == 0.0
        assert punctuality_points(3, 2) == 0.0

    def test_no_snooze_allowed(self):
        assert punctuality_points(0, 0) == 40.0
        assert punctuality_points(1, 0) == 0.0


class TestWakeProofPoints:
    def test_outcomes(self):
        assert wake_proof_points(WakeProof.PASSED) == 20.0
        assert wake_proof_points(WakeProof.FAILED) == 0.0
        assert wake_proof_points(WakeProof.NOT_CONFIGURED) == 10.0

    def test_pending_earns_nothing_yet(self):
        assert wake_proof_points(WakeProof.PENDING) == 0.0

    def test_bool_and_none(self):
        assert wake_proof_points(True) == 20.0
        assert wake_proof_points(False) == 0.0
        assert wake_proof_points(None) == 10.0


class TestStreakPoints:
    def test_per_day(self):
        assert streak_points(3) == pytest.approx(2.1)

    def test_capped(self):
        assert streak_points(100) == 5.0

    def test_negative_streak(self):
        assert streak_points(-2) == 0.0


class TestScore:
    def test_first_clean_wake(self):
        # 40 + 25 + 10 + 10 + 0.7 = 85.7
        assert score(0, 2, True, None, 1.0, 1) == 86

    def test_perfect(self):
        assert score(0, 2, True, True, 1.0, 10) == 100

    def test_worst(self):
        assert score(2, 2, False, False, 0.0, 0) == 0

    def test_partial(self):
        # 30 + 25 + 10 + 5 + 1.4 = 71.4
        assert score(1, 4, True, WakeProof.NOT_CONFIGURED, 0.5, 2) == 71

    def test_routine_ratio_clamped(self):
        assert score(2, 2, False, False, 1.5, 0) == 10
        assert score(2, 2, False, False, -1.0, 0) == 0

    def test_always_in_range(self):
        for snoozes in range(4):
            for streak in (0, 1, 7, 50):
                value = score(snoozes, 3, True, True, 1.0, streak)
                assert 0 <= value <= 100
                assert isinstance(value, int)
