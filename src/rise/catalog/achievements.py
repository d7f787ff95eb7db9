"""Achievement catalog.

Each achievement carries exactly one unlock condition.  The condition kinds
form a closed set (:data:`UnlockCondition`); the evaluator in
:mod:`rise.analytics.achievements` dispatches over it and rejects anything
else.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class StreakCondition:
    threshold: int
    kind = "streak"


@dataclass(frozen=True)
class DismissCondition:
    threshold: int
    kind = "dismiss"


@dataclass(frozen=True)
class BossCondition:
    threshold: int
    kind = "boss"


@dataclass(frozen=True)
class LevelCondition:
    threshold: int
    kind = "level"


@dataclass(frozen=True)
class CoinCondition:
    threshold: int
    kind = "coins"


@dataclass(frozen=True)
class ChallengeCondition:
    """Total challenges completed, summed across every challenge type."""

    threshold: int
    kind = "challenge"


UnlockCondition = Union[
    StreakCondition,
    DismissCondition,
    BossCondition,
    LevelCondition,
    CoinCondition,
    ChallengeCondition,
]


@dataclass(frozen=True)
class Reward:
    coins: int = 0
    xp: int = 0


@dataclass(frozen=True)
class Achievement:
    id: str
    name: str
    description: str
    emoji: str
    condition: UnlockCondition
    reward: Reward


ACHIEVEMENTS: tuple[Achievement, ...] = (
    # Streaks
    Achievement("streak_3", "First Light", "3-day wake-up streak", "🌅",
                StreakCondition(3), Reward(coins=50, xp=100)),
    Achievement("streak_7", "Week Warrior", "7-day wake-up streak", "⚔️",
                StreakCondition(7), Reward(coins=150, xp=300)),
    Achievement("streak_14", "Fortnight's Fury", "14-day wake-up streak", "🔥",
                StreakCondition(14), Reward(coins=300, xp=500)),
    Achievement("streak_30", "Moon Cycle Master", "30-day wake-up streak", "🌙",
                StreakCondition(30), Reward(coins=500, xp=1000)),
    Achievement("streak_100", "Eternal Vigil", "100-day wake-up streak", "👁️",
                StreakCondition(100), Reward(coins=2000, xp=5000)),
    # Dismissals
    Achievement("dismiss_10", "Rising Tide", "Dismiss 10 alarms", "🌊",
                DismissCondition(10), Reward(coins=30, xp=50)),
    Achievement("dismiss_50", "Dawn Breaker", "Dismiss 50 alarms", "🌄",
                DismissCondition(50), Reward(coins=100, xp=200)),
    Achievement("dismiss_100", "Sentinel", "Dismiss 100 alarms", "🛡️",
                DismissCondition(100), Reward(coins=250, xp=500)),
    Achievement("dismiss_500", "Immortal Rise", "Dismiss 500 alarms", "⚡",
                DismissCondition(500), Reward(coins=1000, xp=2000)),
    # Bosses
    Achievement("boss_1", "Giant Slayer", "Defeat your first boss", "💀",
                BossCondition(1), Reward(coins=100, xp=200)),
    Achievement("boss_5", "Monster Hunter", "Defeat 5 bosses", "🗡️",
                BossCondition(5), Reward(coins=300, xp=600)),
    Achievement("boss_10", "Ragnarök Survivor", "Defeat 10 bosses", "🐉",
                BossCondition(10), Reward(coins=500, xp=1000)),
    # Levels
    Achievement("level_5", "Huskarl", "Reach level 5", "🪖",
                LevelCondition(5), Reward(coins=100)),
    Achievement("level_10", "Rune Master", "Reach level 10", "🔮",
                LevelCondition(10), Reward(coins=300)),
    Achievement("level_15", "Asgardian", "Reach level 15", "✨",
                LevelCondition(15), Reward(coins=500)),
    # Coins
    Achievement("coins_500", "Hoarder", "Earn 500 total coins", "💰",
                CoinCondition(500), Reward(coins=50, xp=100)),
    Achievement("coins_5000", "Dragon's Treasure", "Earn 5,000 total coins", "💎",
                CoinCondition(5000), Reward(coins=200, xp=500)),
    # Challenges
    Achievement("math_50", "Rune Calculator", "Solve 50 math problems", "🧮",
                ChallengeCondition(50), Reward(coins=100, xp=200)),
    Achievement("trivia_50", "Sage of Midgard", "Answer 50 trivia correctly", "📚",
                ChallengeCondition(50), Reward(coins=100, xp=200)),
)

_BY_ID = {a.id: a for a in ACHIEVEMENTS}


def get_achievement(achievement_id: str) -> Achievement:
    return _BY_ID[achievement_id]
