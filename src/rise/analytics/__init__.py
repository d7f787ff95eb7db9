"""Scoring and classification components used by the progression engine.

Modules:
    sleep        -- Motion-variance sleep stage classifier and smart wake
    boss         -- Weekly boss damage, snooze scoreboard, weekly rollover
    achievements -- Threshold-based achievement unlocking
    wake_score   -- Composite 0-100 wake score
    character    -- Discipline / energy / consistency attributes
    difficulty   -- Adaptive difficulty recommendation
"""

from rise.analytics.sleep import (
    SleepEpochClassifier,
    SleepState,
    EpochResult,
    classify_variance,
    should_trigger_smart_wake,
)
from rise.analytics.boss import (
    apply_challenge_damage,
    apply_snooze_penalty,
    rollover_if_new_week,
)
from rise.analytics.achievements import Progress, evaluate, total_reward
from rise.analytics.wake_score import WakeProof, score as score_wake
from rise.analytics.character import derive as derive_character
from rise.analytics.difficulty import recommend as recommend_difficulty

__all__ = [
    # sleep
    "SleepEpochClassifier",
    "SleepState",
    "EpochResult",
    "classify_variance",
    "should_trigger_smart_wake",
    # boss
    "apply_challenge_damage",
    "apply_snooze_penalty",
    "rollover_if_new_week",
    # achievements
    "Progress",
    "evaluate",
    "total_reward",
    # wake score
    "WakeProof",
    "score_wake",
    # character
    "derive_character",
    # difficulty
    "recommend_difficulty",
]
