"""Replay recorded accelerometer captures through the sleep classifier.

Capture files are JSONL, one sample per line::

    {"t": 12.3, "x": 0.02, "y": -0.11, "z": 9.79}

``t`` is seconds since the capture started; when it is missing the sample
is assumed to follow the previous one at 10 Hz.
"""

from __future__ import annotations

import json
import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path

from rise.analytics.sleep import (
    EPOCH_DURATION_SEC,
    SAMPLES_PER_EPOCH,
    EpochResult,
    SleepEpochClassifier,
    SleepState,
)

logger = logging.getLogger(__name__)

DEFAULT_SAMPLE_INTERVAL_SEC = 0.1


@dataclass
class MotionReplay:
    """Per-epoch classification of a capture."""

    epochs: list[tuple[float, EpochResult]] = field(default_factory=list)  # (start t, result)
    samples: int = 0
    skipped: int = 0
    light_sleep_ratio: float = 0.0

    @property
    def latest_state(self) -> SleepState:
        if not self.epochs:
            return SleepState.UNKNOWN
        return self.epochs[-1][1].state

    def __repr__(self) -> str:
        return (
            f"MotionReplay({len(self.epochs)} epochs, {self.samples} samples, "
            f"light={self.light_sleep_ratio:.0%}, latest={self.latest_state.value})"
        )


def _parse_line(line: str) -> tuple[float | None, float, float, float] | None:
    try:
        entry = json.loads(line)
        t = entry.get("t")
        return (
            float(t) if t is not None else None,
            float(entry["x"]),
            float(entry["y"]),
            float(entry["z"]),
        )
    except (json.JSONDecodeError, KeyError, TypeError, ValueError, AttributeError):
        return None


def replay_motion(
    capture_path: str | Path,
    samples_per_epoch: int = SAMPLES_PER_EPOCH,
    epoch_sec: float = EPOCH_DURATION_SEC,
) -> MotionReplay:
    """Classify every epoch of a JSONL motion capture.

    Epoch boundaries follow the capture's own timestamps, not the wall
    clock.  A trailing partial epoch is evaluated too.

    Raises:
        FileNotFoundError: if *capture_path* does not exist.
    """
    path = Path(capture_path)
    current_t = 0.0
    classifier = SleepEpochClassifier(samples_per_epoch, epoch_sec, clock=lambda: current_t)
    replay = MotionReplay()
    epoch_start: float | None = None

    def flush() -> None:
        result = classifier.evaluate_epoch()
        if result.sample_count:
            replay.epochs.append((epoch_start or 0.0, result))

    with open(path, encoding="utf-8") as f:
        for line_num, line in enumerate(f, 1):
            line = line.strip()
            if not line:
                continue
            parsed = _parse_line(line)
            if parsed is None:
                logger.debug("line %d: not a motion sample, skipping", line_num)
                replay.skipped += 1
                continue

            t, x, y, z = parsed
            if t is None:
                t = current_t + DEFAULT_SAMPLE_INTERVAL_SEC if replay.samples else 0.0
            current_t = t

            if epoch_start is None:
                classifier.reset()
                epoch_start = t
            elif classifier.sample_count and classifier.is_epoch_complete():
                flush()
                epoch_start = t

            classifier.add_sample(x, y, z)
            replay.samples += 1

    if classifier.sample_count:
        flush()

    replay.light_sleep_ratio = round(classifier.light_sleep_ratio(), 3)
    return replay


def main() -> None:
    if len(sys.argv) < 2:
        print("Usage: python -m rise.replay <capture.jsonl>")
        sys.exit(1)

    replay = replay_motion(sys.argv[1])
    for start, result in replay.epochs:
        print(f"  t={start:8.1f}s  {result}")
    print(replay)


if __name__ == "__main__":
    main()
