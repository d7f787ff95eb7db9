"""Weekly boss combat.

Dismissing an alarm hits the week's boss; snoozing only feeds a scoreboard
of damage "taken" (there is no player health).  A defeated boss stays
defeated until the week changes.
"""

from __future__ import annotations

from dataclasses import replace

from rise.catalog.bosses import get_boss
from rise.catalog.challenges import ChallengeType, parse_challenge
from rise.state import BossState

BASE_DAMAGE = 50
WEAKNESS_MULTIPLIER = 2


def challenge_damage(challenge_type: ChallengeType | str, boss: BossState) -> int:
    """Damage a completed challenge deals to *boss*."""
    weak_to = get_boss(boss.boss_id).weak_to
    if parse_challenge(challenge_type) == weak_to:
        return BASE_DAMAGE * WEAKNESS_MULTIPLIER
    return BASE_DAMAGE


def apply_challenge_damage(
    challenge_type: ChallengeType | str,
    boss: BossState,
) -> tuple[BossState, bool]:
    """Hit *boss* with a completed challenge.

    Returns:
        ``(new_state, defeated_now)``; ``defeated_now`` is True only on the
        hit that takes the boss to zero.
    """
    if boss.defeated:
        return boss, False

    damage = challenge_damage(challenge_type, boss)
    hp = max(0, boss.current_hp - damage)
    defeated_now = hp == 0
    return replace(
        boss,
        current_hp=hp,
        damage_dealt=boss.damage_dealt + damage,
        defeated=defeated_now,
    ), defeated_now


def apply_snooze_penalty(boss: BossState) -> BossState:
    """Record the boss's attack against a snooze."""
    if boss.defeated:
        return boss
    attack = get_boss(boss.boss_id).attack_power
    return replace(boss, snooze_damage_taken=boss.snooze_damage_taken + attack)


def rollover_if_new_week(boss: BossState, current_week: int) -> BossState:
    """Swap in the next boss at full health when the week has changed."""
    if boss.week_number == current_week:
        return boss
    return BossState.fresh(current_week)
