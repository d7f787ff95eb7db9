"""Tests for rise.analytics.difficulty -- adaptive difficulty."""

import pytest

from rise.analytics.difficulty import WINDOW_SIZE, push_outcome, recommend, success_rate
from rise.catalog.challenges import Difficulty


def window_of(passes: int, fails: int) -> tuple[int, ...]:
    return (1,) * passes + (0,) * fails


class TestWindow:
    def test_push(self):
        assert push_outcome((), True) == (1,)
        assert push_outcome((1,), False) == (1, 0)

    def test_keeps_most_recent(self):
        window = window_of(WINDOW_SIZE, 0)
        window = push_outcome(window, False)
        assert len(window) == WINDOW_SIZE
        assert window[-1] == 0
        assert sum(window) == WINDOW_SIZE - 1

    def test_success_rate(self):
        assert success_rate(()) is None
        assert success_rate(window_of(3, 1)) == pytest.approx(0.75)


class TestRecommend:
    def test_too_few_samples_keeps_previous(self):
        assert recommend(window_of(4, 0), Difficulty.EASY) == Difficulty.EASY

    def test_default_is_medium(self):
        assert recommend(()) == Difficulty.MEDIUM

    def test_hard(self):
        assert recommend(window_of(5, 0)) == Difficulty.HARD

    def test_exactly_085_is_medium(self):
        assert recommend(window_of(17, 3)) == Difficulty.MEDIUM

    def test_medium(self):
        assert recommend(window_of(4, 1), Difficulty.EASY) == Difficulty.MEDIUM

    def test_easy(self):
        assert recommend(window_of(1, 4), Difficulty.HARD) == Difficulty.EASY

    def test_middle_band_is_sticky(self):
        assert recommend(window_of(3, 2), Difficulty.HARD) == Difficulty.HARD
        assert recommend(window_of(3, 2), Difficulty.EASY) == Difficulty.EASY

    def test_exactly_040_is_sticky(self):
        assert recommend(window_of(2, 3), Difficulty.MEDIUM) == Difficulty.MEDIUM

    def test_never_recommends_viking(self):
        assert recommend(window_of(20, 0), Difficulty.VIKING) == Difficulty.HARD
