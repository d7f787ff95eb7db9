"""Shared fixtures and builders for the rise test suite."""

from __future__ import annotations

import json
import math
from dataclasses import replace
from datetime import date, datetime, timedelta
from pathlib import Path

import pytest

from rise.analytics.sleep import GRAVITY, SleepEpochClassifier
from rise.clock import FixedClock
from rise.state import BossState, GameState, SleepLogEntry

# Wednesday of week 1 (frost giant week: weak to math, 750 hp)
NOW = datetime(2026, 1, 14, 6, 30)
TODAY = NOW.date()
YESTERDAY = TODAY - timedelta(days=1)


# ---------------------------------------------------------------------------
# State builders
# ---------------------------------------------------------------------------


def make_state(today: date = TODAY, **profile_fields) -> GameState:
    """Fresh snapshot for *today* with optional profile overrides."""
    state = GameState.new(today)
    if profile_fields:
        state = replace(state, profile=replace(state.profile, **profile_fields))
    return state


def weak_boss(hp: int = 100, week: int = 1) -> BossState:
    """A low-hp frost giant (weak to math)."""
    return BossState(week_number=week, boss_id="frost_giant", current_hp=hp, max_hp=hp)


def log_entry(
    days_ago: int = 0,
    wake: int = 390,
    snoozes: int = 0,
    score: int = 80,
    routine: int = 0,
    today: date = TODAY,
) -> SleepLogEntry:
    return SleepLogEntry(
        date=today - timedelta(days=days_ago),
        wake_minutes=wake,
        snoozes_used=snoozes,
        wake_score=score,
        routine_completed=routine,
    )


# ---------------------------------------------------------------------------
# Motion sample helpers
# ---------------------------------------------------------------------------


def alternating_samples(n: int, variance: float, offset: float = 1.0) -> list[tuple[float, float, float]]:
    """(x, y, z) samples whose deviation from gravity alternates offset ± sqrt(variance).

    The deviation series then has mean *offset* and population variance
    *variance* (for even *n*).
    """
    d = math.sqrt(variance)
    samples = []
    for i in range(n):
        z = GRAVITY + offset + (d if i % 2 == 0 else -d)
        samples.append((0.0, 0.0, z))
    return samples


def feed(classifier: SleepEpochClassifier, samples: list[tuple[float, float, float]]) -> None:
    for x, y, z in samples:
        classifier.add_sample(x, y, z)


class FakeMonotonic:
    """Manually advanced stand-in for ``time.monotonic``."""

    def __init__(self, start: float = 1000.0) -> None:
        self.t = start

    def __call__(self) -> float:
        return self.t


# ---------------------------------------------------------------------------
# JSONL capture helpers
# ---------------------------------------------------------------------------


def write_jsonl(path: Path, entries: list[dict]) -> Path:
    """Write a list of dicts as JSONL to the given path."""
    with open(path, "w") as f:
        for entry in entries:
            f.write(json.dumps(entry) + "\n")
    return path


def motion_entries(samples: list[tuple[float, float, float]], start: float = 0.0, step: float = 0.1) -> list[dict]:
    return [
        {"t": round(start + i * step, 3), "x": x, "y": y, "z": z}
        for i, (x, y, z) in enumerate(samples)
    ]


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(NOW)


@pytest.fixture
def fake_monotonic() -> FakeMonotonic:
    return FakeMonotonic()
