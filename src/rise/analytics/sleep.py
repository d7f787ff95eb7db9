"""Motion-based sleep stage classification for smart wake.

A phone lying on the mattress reports accelerometer triples at roughly
10 Hz.  Each sample is reduced to its deviation from resting gravity; every
30-second epoch the variance of those deviations is compared against fixed
thresholds:

    variance < 0.015          -> deep   (phone still)
    0.015 <= variance < 0.3   -> light  (restless / transitioning)
    variance >= 0.3           -> awake  (already moving around)

The light range is two bands (restless below 0.08, high-moderate above)
reported as a single state, since smart wake treats them the same way.

:func:`should_trigger_smart_wake` turns the latest state into a yes/no for
the alarm scheduler.
"""

from __future__ import annotations

import logging
import math
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable

import numpy as np

logger = logging.getLogger(__name__)


class SleepState(str, Enum):
    """Sleep state of a single epoch."""

    DEEP = "deep"
    LIGHT = "light"
    AWAKE = "awake"
    UNKNOWN = "unknown"


@dataclass
class EpochResult:
    """Outcome of one evaluated epoch."""

    variance: float
    mean_deviation: float
    state: SleepState
    sample_count: int

    def __repr__(self) -> str:
        return (
            f"EpochResult({self.state.value}, var={self.variance:.4f}, "
            f"mean={self.mean_deviation:.3f}, n={self.sample_count})"
        )


# ---------------------------------------------------------------------------
# Thresholds (variance of |magnitude - g|, in (m/s²)²)
# ---------------------------------------------------------------------------

GRAVITY = 9.81
DEEP_THRESHOLD = 0.015
LIGHT_THRESHOLD = 0.08
AWAKE_THRESHOLD = 0.3

EPOCH_DURATION_SEC = 30.0
SAMPLES_PER_EPOCH = 300  # 10 Hz × 30 s

# Minutes past the target after which a pending smart wake is stale
STALE_AFTER_MIN = 5


def classify_variance(variance: float) -> SleepState:
    """Map an epoch's deviation variance onto a sleep state."""
    if variance < DEEP_THRESHOLD:
        return SleepState.DEEP
    if variance < LIGHT_THRESHOLD:
        return SleepState.LIGHT
    if variance < AWAKE_THRESHOLD:
        return SleepState.LIGHT
    return SleepState.AWAKE


class SleepEpochClassifier:
    """Streams accelerometer samples into epochs and classifies each one.

    Args:
        samples_per_epoch: Sample count that completes an epoch.
        epoch_sec: Wall-clock duration that completes an epoch, whatever
            the sample count (covers sensor dropouts).
        clock: Monotonic time source in seconds.
    """

    def __init__(
        self,
        samples_per_epoch: int = SAMPLES_PER_EPOCH,
        epoch_sec: float = EPOCH_DURATION_SEC,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.samples_per_epoch = samples_per_epoch
        self.epoch_sec = epoch_sec
        self._clock = clock
        self._samples: list[float] = []
        self._epoch_start = clock()
        self._light_epochs = 0
        self._total_epochs = 0

    @property
    def sample_count(self) -> int:
        return len(self._samples)

    @property
    def total_epochs(self) -> int:
        return self._total_epochs

    def add_sample(self, x: float, y: float, z: float) -> None:
        """Buffer one accelerometer reading (m/s²)."""
        magnitude = math.sqrt(x * x + y * y + z * z)
        self._samples.append(abs(magnitude - GRAVITY))

    def is_epoch_complete(self) -> bool:
        return (
            len(self._samples) >= self.samples_per_epoch
            or (self._clock() - self._epoch_start) >= self.epoch_sec
        )

    def evaluate_epoch(self) -> EpochResult:
        """Classify the buffered samples and start a new epoch.

        An empty epoch is ``unknown`` and leaves the epoch counters alone.
        """
        if not self._samples:
            return EpochResult(variance=0.0, mean_deviation=0.0, state=SleepState.UNKNOWN, sample_count=0)

        arr = np.asarray(self._samples, dtype=np.float64)
        mean = float(np.mean(arr))
        variance = float(np.var(arr))  # population variance
        state = classify_variance(variance)

        self._total_epochs += 1
        if state == SleepState.LIGHT:
            self._light_epochs += 1

        result = EpochResult(
            variance=round(variance, 4),
            mean_deviation=round(mean, 3),
            state=state,
            sample_count=len(arr),
        )
        logger.debug("epoch %d: %r", self._total_epochs, result)

        self._samples = []
        self._epoch_start = self._clock()
        return result

    def light_sleep_ratio(self) -> float:
        """Share of evaluated epochs classified as light."""
        if self._total_epochs == 0:
            return 0.0
        return self._light_epochs / self._total_epochs

    def reset(self) -> None:
        """Drop buffered samples and counters; safe to call at any time."""
        self._samples = []
        self._epoch_start = self._clock()
        self._light_epochs = 0
        self._total_epochs = 0


def should_trigger_smart_wake(
    state: SleepState | str,
    minutes_until_target: float,
    window_minutes: float,
) -> bool:
    """Decide whether the alarm should fire now.

    Args:
        state: Latest epoch's sleep state.
        minutes_until_target: Minutes left until the scheduled alarm time
            (negative once it has passed).
        window_minutes: How early before the target a wake is allowed.

    Returns:
        False outside the window or more than :data:`STALE_AFTER_MIN` past
        the target; True at or past the target; otherwise True only for
        light or awake sleep.
    """
    if minutes_until_target > window_minutes or minutes_until_target < -STALE_AFTER_MIN:
        return False
    if minutes_until_target <= 0:
        return True
    return SleepState(state) in (SleepState.LIGHT, SleepState.AWAKE)
