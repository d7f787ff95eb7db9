"""Threshold-based achievement unlocking."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from rise.catalog.achievements import (
    ACHIEVEMENTS,
    Achievement,
    BossCondition,
    ChallengeCondition,
    CoinCondition,
    DismissCondition,
    LevelCondition,
    Reward,
    StreakCondition,
    UnlockCondition,
)


@dataclass(frozen=True)
class Progress:
    """The cumulative counters achievements are checked against."""

    streak: int = 0
    dismissals: int = 0
    bosses_defeated: int = 0
    level: int = 0
    coins_earned: int = 0
    challenges_completed: int = 0


def progress_value(condition: UnlockCondition, progress: Progress) -> int:
    """The counter *condition* compares against.

    Raises:
        TypeError: for an object that is not one of the known condition kinds.
    """
    if isinstance(condition, StreakCondition):
        return progress.streak
    if isinstance(condition, DismissCondition):
        return progress.dismissals
    if isinstance(condition, BossCondition):
        return progress.bosses_defeated
    if isinstance(condition, LevelCondition):
        return progress.level
    if isinstance(condition, CoinCondition):
        return progress.coins_earned
    if isinstance(condition, ChallengeCondition):
        return progress.challenges_completed
    raise TypeError(f"unsupported unlock condition: {condition!r}")


def is_met(condition: UnlockCondition, progress: Progress) -> bool:
    return progress_value(condition, progress) >= condition.threshold


def evaluate(
    progress: Progress,
    unlocked: Sequence[str],
    catalog: Sequence[Achievement] = ACHIEVEMENTS,
) -> tuple[list[Achievement], tuple[str, ...]]:
    """Find achievements newly met by *progress*.

    Args:
        progress: Current cumulative counters.
        unlocked: Ids already unlocked; these are never returned again.
        catalog: Achievement table, evaluated in order.

    Returns:
        ``(newly_unlocked, all_unlocked_ids)`` with the new ids appended in
        catalog order.
    """
    seen = set(unlocked)
    ids = list(unlocked)
    newly: list[Achievement] = []
    for ach in catalog:
        if ach.id in seen:
            continue
        if is_met(ach.condition, progress):
            newly.append(ach)
            ids.append(ach.id)
            seen.add(ach.id)
    return newly, tuple(ids)


def total_reward(achievements: Sequence[Achievement]) -> Reward:
    return Reward(
        coins=sum(a.reward.coins for a in achievements),
        xp=sum(a.reward.xp for a in achievements),
    )
