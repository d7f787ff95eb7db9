"""Character attributes derived from the last two weeks of wake history.

discipline  -- snooze-free mornings, wake-proof pass rate, routine follow-through
energy      -- streak, physical challenges, early wake-ups
consistency -- low spread of wake times, plus a streak bonus
"""

from __future__ import annotations

from dataclasses import replace
from datetime import date, timedelta
from typing import Sequence

import numpy as np

from rise.catalog.challenges import PHYSICAL_CHALLENGES
from rise.state import CharacterStats, PlayerStats, SleepLogEntry

WINDOW_DAYS = 14
EARLY_WAKE_MINUTES = 7 * 60  # before 07:00
MIN_CONSISTENCY_SAMPLES = 3
STD_PENALTY_PER_MINUTE = 1.67


def recent_entries(log: Sequence[SleepLogEntry], today: date, days: int = WINDOW_DAYS) -> list[SleepLogEntry]:
    """One record per day within the trailing *days* days, today included.

    Several dismissals on the same date count as a single morning: the first
    one supplies the wake time and snoozes, and routine work logged by any of
    them counts for the day.
    """
    cutoff = today - timedelta(days=days - 1)
    by_day: dict[date, SleepLogEntry] = {}
    for e in log:
        if not cutoff <= e.date <= today:
            continue
        first = by_day.get(e.date)
        if first is None:
            by_day[e.date] = e
        elif e.routine_completed > first.routine_completed:
            by_day[e.date] = replace(first, routine_completed=e.routine_completed)
    return [by_day[d] for d in sorted(by_day)]


def _clamp(value: float) -> int:
    return int(max(0, min(100, round(value))))


def discipline(recent: Sequence[SleepLogEntry], stats: PlayerStats) -> int:
    if recent:
        no_snooze = sum(1 for e in recent if e.snoozes_used == 0) / len(recent)
        routine = sum(1 for e in recent if e.routine_completed > 0) / len(recent)
    else:
        no_snooze = routine = 0.0
    return _clamp(40 * no_snooze + 30 * stats.wake_proof_pass_rate + 30 * routine)


def energy(recent: Sequence[SleepLogEntry], stats: PlayerStats, streak: int) -> int:
    physical = sum(stats.completions(c) for c in PHYSICAL_CHALLENGES)
    early = sum(1 for e in recent if e.wake_minutes < EARLY_WAKE_MINUTES)
    value = (
        min(30.0, streak * 3.0)
        + min(30.0, 0.5 * physical)
        + 40.0 * min(1.0, early / WINDOW_DAYS)
    )
    return _clamp(value)


def consistency(recent: Sequence[SleepLogEntry], streak: int) -> int:
    wake_times = [e.wake_minutes for e in recent]
    spread_term = 0.0
    if len(wake_times) >= MIN_CONSISTENCY_SAMPLES:
        std = float(np.std(np.asarray(wake_times, dtype=np.float64)))
        spread_term = 0.7 * (100.0 - min(100.0, STD_PENALTY_PER_MINUTE * std))
    return _clamp(spread_term + min(30.0, 2.0 * streak))


def derive(
    log: Sequence[SleepLogEntry],
    stats: PlayerStats,
    streak: int,
    today: date,
) -> CharacterStats:
    """Recompute all three attributes.

    Args:
        log: Sleep log (any length; only the trailing 14 days are used).
        stats: Lifetime counters (wake-proof rate, physical completions).
        streak: Current streak.
        today: Last day of the window.
    """
    recent = recent_entries(log, today)
    return CharacterStats(
        discipline=discipline(recent, stats),
        energy=energy(recent, stats, streak),
        consistency=consistency(recent, streak),
    )
