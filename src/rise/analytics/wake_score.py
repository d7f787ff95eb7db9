"""Composite 0-100 wake score.

    punctuality   40  (scaled down by snoozes used / snooze limit)
    challenge     25  (challenges completed)
    wake proof    20  (post-wake re-check passed; 10 if not configured)
    routine       10  (share of routine tasks completed)
    streak         5  (0.7 per streak day, capped)
"""

from __future__ import annotations

from rise.state import WakeProof

PUNCTUALITY_POINTS = 40.0
CHALLENGE_POINTS = 25.0
WAKE_PROOF_POINTS = 20.0
WAKE_PROOF_UNCONFIGURED_POINTS = 10.0
ROUTINE_POINTS = 10.0
STREAK_POINTS_PER_DAY = 0.7
STREAK_POINTS_MAX = 5.0


def punctuality_points(snoozes_used: int, snooze_limit: int) -> float:
    if snoozes_used <= 0:
        return PUNCTUALITY_POINTS
    if snooze_limit <= 0 or snoozes_used >= snooze_limit:
        return 0.0
    return PUNCTUALITY_POINTS * (1.0 - snoozes_used / snooze_limit)


def wake_proof_points(wake_proof: WakeProof | bool | None) -> float:
    """Points for the wake-proof check.

    ``True``/``False`` are accepted as passed/failed and ``None`` as not
    configured.  A check that has not run yet earns nothing.
    """
    if wake_proof is None:
        wake_proof = WakeProof.NOT_CONFIGURED
    elif isinstance(wake_proof, bool):
        wake_proof = WakeProof.PASSED if wake_proof else WakeProof.FAILED

    if wake_proof == WakeProof.PASSED:
        return WAKE_PROOF_POINTS
    if wake_proof == WakeProof.NOT_CONFIGURED:
        return WAKE_PROOF_UNCONFIGURED_POINTS
    return 0.0


def streak_points(streak_days: int) -> float:
    return min(STREAK_POINTS_MAX, max(0, streak_days) * STREAK_POINTS_PER_DAY)


def score(
    snoozes_used: int,
    snooze_limit: int,
    challenges_passed: bool,
    wake_proof: WakeProof | bool | None,
    routine_ratio: float,
    streak_days: int,
) -> int:
    """Compute the wake score for one morning.

    Args:
        snoozes_used: Snoozes taken before dismissal.
        snooze_limit: Snoozes the alarm allows.
        challenges_passed: Whether the dismissal challenges were completed.
        wake_proof: Post-wake confirmation outcome.
        routine_ratio: Completed / configured routine tasks (0-1).
        streak_days: Current streak including today.

    Returns:
        Integer score in [0, 100].
    """
    ratio = max(0.0, min(1.0, routine_ratio))
    total = (
        punctuality_points(snoozes_used, snooze_limit)
        + (CHALLENGE_POINTS if challenges_passed else 0.0)
        + wake_proof_points(wake_proof)
        + ROUTINE_POINTS * ratio
        + streak_points(streak_days)
    )
    return int(max(0, min(100, round(total))))
