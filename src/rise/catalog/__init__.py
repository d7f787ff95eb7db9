"""Static game catalogs: levels, bosses, achievements, challenges, routine tasks."""

from rise.catalog.challenges import (
    ChallengeType,
    Difficulty,
    PHYSICAL_CHALLENGES,
    ROUTINE_TASKS,
    ROUTINE_TASK_IDS,
    RoutineTask,
    parse_challenge,
)
from rise.catalog.levels import (
    LEVEL_XP,
    LEVEL_TITLES,
    level_for_xp,
    title_for_level,
    xp_for_next_level,
    xp_progress,
)
from rise.catalog.bosses import Boss, Loot, WEEKLY_BOSSES, boss_for_week, get_boss
from rise.catalog.achievements import (
    ACHIEVEMENTS,
    Achievement,
    Reward,
    UnlockCondition,
    get_achievement,
)

__all__ = [
    # challenges
    "ChallengeType",
    "Difficulty",
    "PHYSICAL_CHALLENGES",
    "ROUTINE_TASKS",
    "ROUTINE_TASK_IDS",
    "RoutineTask",
    "parse_challenge",
    # levels
    "LEVEL_XP",
    "LEVEL_TITLES",
    "level_for_xp",
    "title_for_level",
    "xp_for_next_level",
    "xp_progress",
    # bosses
    "Boss",
    "Loot",
    "WEEKLY_BOSSES",
    "boss_for_week",
    "get_boss",
    # achievements
    "ACHIEVEMENTS",
    "Achievement",
    "Reward",
    "UnlockCondition",
    "get_achievement",
]
