"""Adaptive challenge difficulty from a rolling pass/fail window."""

from __future__ import annotations

from typing import Sequence

import numpy as np

from rise.catalog.challenges import Difficulty

WINDOW_SIZE = 20
MIN_SAMPLES = 5

HARD_ABOVE = 0.85
MEDIUM_ABOVE = 0.70
EASY_BELOW = 0.40


def push_outcome(window: Sequence[int], passed: bool) -> tuple[int, ...]:
    """Append an outcome, keeping the most recent :data:`WINDOW_SIZE`."""
    return (tuple(window) + (1 if passed else 0,))[-WINDOW_SIZE:]


def success_rate(window: Sequence[int]) -> float | None:
    if len(window) == 0:
        return None
    return float(np.mean(np.asarray(window, dtype=np.float64)))


def recommend(window: Sequence[int], previous: Difficulty = Difficulty.MEDIUM) -> Difficulty:
    """Recommend a difficulty tier.

    Between :data:`EASY_BELOW` and :data:`MEDIUM_ABOVE` the previous
    recommendation is kept, so the tier does not flap around the edges.
    """
    if len(window) < MIN_SAMPLES:
        return previous
    rate = success_rate(window[-WINDOW_SIZE:])
    if rate > HARD_ABOVE:
        return Difficulty.HARD
    if rate > MEDIUM_ABOVE:
        return Difficulty.MEDIUM
    if rate < EASY_BELOW:
        return Difficulty.EASY
    return previous
