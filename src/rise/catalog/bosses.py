"""Weekly boss roster.

One boss per calendar week, rotating through :data:`WEEKLY_BOSSES` by week
number.  Each boss takes double damage from the challenge type it is weak to.
"""

from __future__ import annotations

from dataclasses import dataclass

from rise.catalog.challenges import ChallengeType


@dataclass(frozen=True)
class Loot:
    coins: int
    xp: int


@dataclass(frozen=True)
class Boss:
    """Static description of a weekly adversary."""

    id: str
    name: str
    title: str
    emoji: str
    max_hp: int
    attack_power: int  # snooze scoreboard damage per snooze
    weak_to: ChallengeType
    loot: Loot
    description: str = ""


WEEKLY_BOSSES: tuple[Boss, ...] = (
    Boss(
        "draugr", "Draugr", "The Restless Sleeper", "💀",
        max_hp=500, attack_power=15, weak_to=ChallengeType.SHAKE,
        loot=Loot(coins=100, xp=200),
        description="An undead warrior who feeds on your desire to sleep in.",
    ),
    Boss(
        "frost_giant", "Hrímþurs", "Frost Giant of Niflheim", "🧊",
        max_hp=750, attack_power=20, weak_to=ChallengeType.MATH,
        loot=Loot(coins=150, xp=300),
        description="A towering frost giant who freezes your willpower.",
    ),
    Boss(
        "fenrir", "Fenrir", "The Devouring Wolf", "🐺",
        max_hp=1000, attack_power=25, weak_to=ChallengeType.TRIVIA,
        loot=Loot(coins=200, xp=400),
        description="The great wolf who swallows mornings whole.",
    ),
    Boss(
        "jormungandr", "Jörmungandr", "World Serpent", "🐍",
        max_hp=1200, attack_power=30, weak_to=ChallengeType.MEMORY,
        loot=Loot(coins=250, xp=500),
        description="The serpent that squeezes out your motivation to rise.",
    ),
    Boss(
        "nidhogg", "Níðhöggr", "Dragon of Yggdrasil", "🐉",
        max_hp=1500, attack_power=35, weak_to=ChallengeType.TYPING,
        loot=Loot(coins=300, xp=600),
        description="The dragon that gnaws at the roots of the World Tree.",
    ),
    Boss(
        "surtr", "Surtr", "Lord of Muspelheim", "🔥",
        max_hp=2000, attack_power=40, weak_to=ChallengeType.STEPS,
        loot=Loot(coins=500, xp=1000),
        description="The fire giant who brings Ragnarök.",
    ),
)

_BY_ID = {b.id: b for b in WEEKLY_BOSSES}


def boss_for_week(week: int) -> Boss:
    return WEEKLY_BOSSES[week % len(WEEKLY_BOSSES)]


def get_boss(boss_id: str) -> Boss:
    """Look up a boss by id.

    Raises:
        KeyError: if *boss_id* is not in the roster.
    """
    return _BY_ID[boss_id]
