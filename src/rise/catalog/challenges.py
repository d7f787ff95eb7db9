"""Challenge types, difficulty tiers and the morning routine task table."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ChallengeType(str, Enum):
    """Mini-challenges that can dismiss an alarm."""

    MATH = "math"
    TRIVIA = "trivia"
    SHAKE = "shake"
    MEMORY = "memory"
    TYPING = "typing"
    STEPS = "steps"


# Challenges that get the player physically moving (feed the energy stat)
PHYSICAL_CHALLENGES = frozenset({ChallengeType.SHAKE, ChallengeType.STEPS})


class Difficulty(str, Enum):
    """Challenge difficulty tiers.

    ``VIKING`` can be picked by hand but is never recommended automatically.
    """

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
    VIKING = "viking"


def parse_challenge(value: str | ChallengeType) -> ChallengeType:
    """Coerce a string into a :class:`ChallengeType`.

    Raises:
        ValueError: if *value* names no known challenge.
    """
    if isinstance(value, ChallengeType):
        return value
    try:
        return ChallengeType(value)
    except ValueError:
        known = ", ".join(c.value for c in ChallengeType)
        raise ValueError(f"unknown challenge type {value!r} (expected one of: {known})") from None


@dataclass(frozen=True)
class RoutineTask:
    """A small post-wake habit the player can tick off."""

    id: str
    label: str
    emoji: str
    duration_min: int


ROUTINE_TASKS: tuple[RoutineTask, ...] = (
    RoutineTask("water", "Drink water", "💧", 1),
    RoutineTask("stretch", "5-min stretch", "🧘", 5),
    RoutineTask("journal", "Journal 1 line", "📝", 2),
    RoutineTask("meditate", "Meditate 3 min", "🧠", 3),
    RoutineTask("cold_water", "Splash cold water", "🥶", 1),
    RoutineTask("no_phone", "No phone 10 min", "📵", 10),
    RoutineTask("sunlight", "Get sunlight", "☀️", 5),
    RoutineTask("make_bed", "Make your bed", "🛏️", 2),
)

ROUTINE_TASK_IDS = frozenset(t.id for t in ROUTINE_TASKS)
