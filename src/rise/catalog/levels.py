"""Level thresholds and titles."""

from __future__ import annotations

# Minimum XP for each level index
LEVEL_XP = [
    0, 100, 250, 500, 800, 1200, 1700, 2400, 3200, 4200,
    5500, 7000, 9000, 11500, 14500, 18000, 22000, 27000, 33000, 40000,
]

LEVEL_TITLES = [
    "Thrall",
    "Wanderer",
    "Scout",
    "Raider",
    "Shield-Bearer",
    "Huskarl",
    "Berserker",
    "Jarl",
    "War Chief",
    "Skald",
    "Rune Master",
    "Valkyrie",
    "Einherjar",
    "Dragonslayer",
    "Fenrir-Bane",
    "Asgardian",
    "Allfather's Chosen",
    "Herald of Dawn",
    "Realm Walker",
    "All-Seer",
]

MAX_LEVEL = len(LEVEL_XP) - 1


def level_for_xp(xp: int) -> int:
    """Largest level index whose threshold *xp* has reached."""
    for level in range(MAX_LEVEL, -1, -1):
        if xp >= LEVEL_XP[level]:
            return level
    return 0


def title_for_level(level: int) -> str:
    return LEVEL_TITLES[max(0, min(level, len(LEVEL_TITLES) - 1))]


def xp_for_next_level(level: int) -> int:
    """XP threshold of the level after *level* (the cap at max level)."""
    if level >= MAX_LEVEL:
        return LEVEL_XP[MAX_LEVEL]
    return LEVEL_XP[level + 1]


def xp_progress(xp: int, level: int) -> float:
    """Fraction (0-1) of the way from *level* to the next one."""
    current = LEVEL_XP[max(0, min(level, MAX_LEVEL))]
    nxt = LEVEL_XP[min(level + 1, MAX_LEVEL)]
    if nxt == current:
        return 1.0
    return max(0.0, min(1.0, (xp - current) / (nxt - current)))
