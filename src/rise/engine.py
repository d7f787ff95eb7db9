"""Progression engine: one atomic transaction per wake event.

The module-level transaction functions are pure: each takes a
:class:`~rise.state.GameState` plus the event inputs and the current time,
and returns the next snapshot (and, where there is one, a result).
:class:`ProgressionEngine` wraps them with a clock and a store so callers
get the load → compute → save cycle as a single call.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field, replace
from datetime import date, datetime, timedelta
from typing import Any

from rise.analytics.achievements import Progress, evaluate, total_reward
from rise.analytics.boss import apply_challenge_damage, apply_snooze_penalty, rollover_if_new_week
from rise.analytics.character import derive as derive_character
from rise.analytics.difficulty import push_outcome, recommend as recommend_difficulty
from rise.analytics.wake_score import score as score_wake, wake_proof_points
from rise.catalog.achievements import Achievement
from rise.catalog.bosses import get_boss
from rise.catalog.challenges import ChallengeType, Difficulty, ROUTINE_TASK_IDS, parse_challenge
from rise.catalog.levels import level_for_xp, title_for_level
from rise.clock import ClockSource, SystemClock, minutes_since_midnight, month_key, week_number
from rise.store import MemoryStore, SnapshotStore
from rise.state import (
    SLEEP_LOG_LIMIT,
    WAKE_TIMES_LIMIT,
    AlarmConfig,
    CharacterStats,
    GameState,
    PlayerProfile,
    SleepLogEntry,
    WakeProof,
)

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Reward constants
# ---------------------------------------------------------------------------

BASE_XP = 25
BASE_COINS = 10

PRACTICE_XP = 5
PRACTICE_COINS = 2

ROUTINE_XP = 5
ROUTINE_COINS = 2

SNOOZE_PENALTY_PER_SNOOZE = 0.2
SNOOZE_PENALTY_FLOOR = 0.5


@dataclass
class DismissResult:
    """What a dismissal earned, for the presentation layer."""

    xp_earned: int
    coins_earned: int
    streak_count: int
    new_achievements: list[Achievement] = field(default_factory=list)
    boss_defeated: bool = False
    leveled_up: bool = False
    wake_score: int = 0
    damage_dealt: int = 0
    level: int = 0
    character: CharacterStats = field(default_factory=CharacterStats)
    difficulty: Difficulty = Difficulty.MEDIUM

    def to_dict(self) -> dict[str, Any]:
        return {
            "xp_earned": self.xp_earned,
            "coins_earned": self.coins_earned,
            "streak_count": self.streak_count,
            "new_achievements": [a.id for a in self.new_achievements],
            "boss_defeated": self.boss_defeated,
            "leveled_up": self.leveled_up,
            "wake_score": self.wake_score,
            "damage_dealt": self.damage_dealt,
            "level": self.level,
            "character": self.character.to_dict(),
            "difficulty": self.difficulty.value,
        }

    def __repr__(self) -> str:
        return (
            f"DismissResult(+{self.xp_earned}xp, +{self.coins_earned}c, "
            f"streak={self.streak_count}, score={self.wake_score}"
            f"{', boss down' if self.boss_defeated else ''}"
            f"{', level up' if self.leveled_up else ''})"
        )


@dataclass
class WakeScoreSummary:
    today: int
    week_average: int
    all_time: int


# ---------------------------------------------------------------------------
# Building blocks
# ---------------------------------------------------------------------------


def next_streak(last_wake: date | None, today: date, current: int) -> int:
    """Streak after waking on *today*.

    Unchanged if already counted today, +1 after yesterday (or the first
    ever wake), otherwise a fresh streak of 1.
    """
    if last_wake == today:
        return current
    if last_wake is None or last_wake == today - timedelta(days=1):
        return current + 1
    return 1


def streak_multiplier(streak: int) -> float:
    if streak >= 7:
        return 2.0
    if streak >= 3:
        return 1.5
    return 1.0


def snooze_factor(snoozes_used: int) -> float:
    return max(SNOOZE_PENALTY_FLOOR, 1.0 - SNOOZE_PENALTY_PER_SNOOZE * snoozes_used)


def base_reward(streak: int, snoozes_used: int, reward_multiplier: float = 1.0) -> tuple[int, int]:
    """``(xp, coins)`` for a dismissal; only coins take *reward_multiplier*."""
    factor = streak_multiplier(streak) * snooze_factor(snoozes_used)
    xp = int(round(BASE_XP * factor))
    coins = int(round(BASE_COINS * factor * max(0.0, reward_multiplier)))
    return max(0, xp), max(0, coins)


def routine_ratio(completed: int, alarm: AlarmConfig) -> float:
    """Share of the alarm's routine done; an alarm without a routine gets full credit."""
    if not alarm.routine_tasks:
        return 1.0
    return min(1.0, completed / len(alarm.routine_tasks))


def refresh_grace_token(profile: PlayerProfile, today: date) -> PlayerProfile:
    """Give back the grace token once the month it was used in is over."""
    if profile.grace_token_available or profile.grace_token_last_used is None:
        return profile
    if profile.grace_token_last_used == month_key(today):
        return profile
    return replace(profile, grace_token_available=True)


def _award(profile: PlayerProfile, xp: int, coins: int) -> PlayerProfile:
    new_xp = max(0, profile.xp + xp)
    level = level_for_xp(new_xp)
    return replace(
        profile,
        xp=new_xp,
        coins=max(0, profile.coins + coins),
        level=level,
        title=title_for_level(level),
    )


# ---------------------------------------------------------------------------
# Transactions
# ---------------------------------------------------------------------------


def dismiss_alarm(
    state: GameState,
    challenge_type: ChallengeType | str,
    snoozes_used: int,
    now: datetime,
    alarm: AlarmConfig | None = None,
    reward_multiplier: float = 1.0,
    challenge_passed: bool = True,
) -> tuple[GameState, DismissResult]:
    """Apply an alarm dismissal.

    Args:
        state: Snapshot before the dismissal.
        challenge_type: Challenge used to dismiss.
        snoozes_used: Snoozes taken before dismissing.
        now: Time of dismissal.
        alarm: Alarm settings (snooze limit, wake proof, routine);
            defaults to an alarm with no optional features.
        reward_multiplier: Coin multiplier supplied by the caller
            (e.g. a premium tier).
        challenge_passed: Whether the challenge was actually solved.

    Returns:
        ``(new_state, result)``.

    Raises:
        ValueError: on an unknown challenge type or negative snoozes.
    """
    challenge = parse_challenge(challenge_type)
    if snoozes_used < 0:
        raise ValueError(f"snoozes_used must be >= 0, got {snoozes_used}")
    alarm = alarm or AlarmConfig()
    today = now.date()
    profile = state.profile
    stats = state.stats

    # 1) Streak
    streak = next_streak(profile.last_wake_date, today, profile.current_streak)
    longest = max(profile.longest_streak, streak)

    # 2) Base reward
    xp_earned, coins_earned = base_reward(streak, snoozes_used, reward_multiplier)

    # 3) Boss
    boss = rollover_if_new_week(state.boss, week_number(today))
    boss_defeated = False
    damage = 0
    if challenge_passed:
        before = boss.damage_dealt
        boss, boss_defeated = apply_challenge_damage(challenge, boss)
        damage = boss.damage_dealt - before

    # 4) Cumulative stats
    wake_minutes = minutes_since_midnight(now)
    earliest = wake_minutes if stats.earliest_wake is None else min(stats.earliest_wake, wake_minutes)
    stats = replace(
        stats,
        total_dismissals=stats.total_dismissals + 1,
        challenge_counts=stats.with_challenge(challenge) if challenge_passed else stats.challenge_counts,
        bosses_defeated=stats.bosses_defeated + (1 if boss_defeated else 0),
        total_coins_earned=stats.total_coins_earned + coins_earned,
        earliest_wake=earliest,
        wake_times=(stats.wake_times + (wake_minutes,))[-WAKE_TIMES_LIMIT:],
        success_window=push_outcome(stats.success_window, challenge_passed),
    )

    # 5) Wake score and sleep log
    routine_done = profile.routine_pending
    proof = WakeProof.PENDING if alarm.wake_proof_enabled else WakeProof.NOT_CONFIGURED
    wake_score = score_wake(
        snoozes_used,
        alarm.snooze_limit,
        challenge_passed,
        proof,
        routine_ratio(routine_done, alarm),
        streak,
    )
    wake_scores = state.wake_scores.record(today, wake_score)
    entry = SleepLogEntry(
        date=today,
        wake_minutes=wake_minutes,
        snoozes_used=snoozes_used,
        wake_score=wake_score,
        routine_completed=routine_done,
        wake_proof=proof,
    )
    sleep_log = (state.sleep_log + (entry,))[-SLEEP_LOG_LIMIT:]

    # 6) Character and difficulty
    character = derive_character(sleep_log, stats, streak, today)
    difficulty = recommend_difficulty(stats.success_window, profile.difficulty)

    # 7) Grace token
    profile = refresh_grace_token(profile, today)

    # 8) Achievements, judged on the level reached by the base reward
    progress = Progress(
        streak=streak,
        dismissals=stats.total_dismissals,
        bosses_defeated=stats.bosses_defeated,
        level=level_for_xp(profile.xp + xp_earned),
        coins_earned=stats.total_coins_earned,
        challenges_completed=stats.total_challenges,
    )
    newly, unlocked = evaluate(progress, state.unlocked)
    bonus = total_reward(newly)
    bonus_xp, bonus_coins = bonus.xp, bonus.coins
    if boss_defeated:
        loot = get_boss(boss.boss_id).loot
        bonus_xp += loot.xp
        bonus_coins += loot.coins

    xp_total = xp_earned + bonus_xp
    coins_total = coins_earned + bonus_coins
    stats = replace(stats, total_coins_earned=stats.total_coins_earned + bonus_coins)

    profile = replace(
        _award(profile, xp_total, coins_total),
        current_streak=streak,
        longest_streak=longest,
        last_wake_date=today,
        difficulty=difficulty,
        routine_pending=0,
    )

    # 9) Snapshot and result
    new_state = replace(
        state,
        profile=profile,
        stats=stats,
        boss=boss,
        unlocked=unlocked,
        unseen=state.unseen + tuple(a.id for a in newly),
        sleep_log=sleep_log,
        wake_scores=wake_scores,
        character=character,
    )
    result = DismissResult(
        xp_earned=xp_total,
        coins_earned=coins_total,
        streak_count=streak,
        new_achievements=newly,
        boss_defeated=boss_defeated,
        leveled_up=profile.level > state.profile.level,
        wake_score=wake_score,
        damage_dealt=damage,
        level=profile.level,
        character=character,
        difficulty=difficulty,
    )
    return new_state, result


def snooze_alarm(state: GameState, now: datetime) -> GameState:
    """Record a snooze: a failed outcome and a boss scoreboard hit, nothing more."""
    stats = replace(
        state.stats,
        total_snoozes=state.stats.total_snoozes + 1,
        success_window=push_outcome(state.stats.success_window, False),
    )
    boss = rollover_if_new_week(state.boss, week_number(now.date()))
    boss = apply_snooze_penalty(boss)
    profile = replace(
        state.profile,
        difficulty=recommend_difficulty(stats.success_window, state.profile.difficulty),
    )
    return replace(state, profile=profile, stats=stats, boss=boss)


def practice_challenge(
    state: GameState,
    challenge_type: ChallengeType | str,
    success: bool,
) -> GameState:
    """Record a practice attempt outside of an alarm."""
    challenge = parse_challenge(challenge_type)
    stats = replace(state.stats, success_window=push_outcome(state.stats.success_window, success))
    profile = state.profile
    if success:
        stats = replace(
            stats,
            challenge_counts=stats.with_challenge(challenge),
            total_coins_earned=stats.total_coins_earned + PRACTICE_COINS,
        )
        profile = _award(profile, PRACTICE_XP, PRACTICE_COINS)
    profile = replace(profile, difficulty=recommend_difficulty(stats.success_window, profile.difficulty))
    return replace(state, profile=profile, stats=stats)


def use_grace_token(state: GameState, now: datetime) -> tuple[GameState, bool]:
    """Spend this month's grace token to protect the streak.

    Returns:
        ``(new_state, True)`` when spent, ``(state, False)`` unchanged when
        no token is available this month.
    """
    today = now.date()
    profile = refresh_grace_token(state.profile, today)
    if not profile.grace_token_available:
        return state, False

    yesterday = today - timedelta(days=1)
    last_wake = profile.last_wake_date
    if last_wake is not None and last_wake < yesterday:
        # Cover the gap so the next dismissal continues the streak
        last_wake = yesterday

    # With no wake on record there is no streak to protect yet; the first
    # dismissal starts it at 1
    streak = profile.current_streak if last_wake is None else max(1, profile.current_streak)
    profile = replace(
        profile,
        grace_token_available=False,
        grace_token_last_used=month_key(today),
        grace_token_used_count=profile.grace_token_used_count + 1,
        current_streak=streak,
        longest_streak=max(profile.longest_streak, streak),
        last_wake_date=last_wake,
    )
    return replace(state, profile=profile), True


def complete_routine_task(state: GameState, task_id: str, now: datetime) -> tuple[GameState, bool]:
    """Tick off a routine task; only the first completion per day counts.

    Raises:
        ValueError: if *task_id* is not a known routine task.
    """
    if task_id not in ROUTINE_TASK_IDS:
        raise ValueError(f"unknown routine task {task_id!r}")
    today = now.date()
    profile = state.profile
    done_today = profile.routine_completed if profile.routine_date == today else ()
    if task_id in done_today:
        return state, False

    profile = replace(
        _award(profile, ROUTINE_XP, ROUTINE_COINS),
        routine_date=today,
        routine_completed=done_today + (task_id,),
        routine_pending=profile.routine_pending + 1,
    )
    stats = replace(state.stats, total_coins_earned=state.stats.total_coins_earned + ROUTINE_COINS)
    return replace(state, profile=profile, stats=stats), True


def record_wake_proof_result(state: GameState, passed: bool, now: datetime) -> GameState:
    """Record the post-dismissal re-check and rescore today's wake.

    Only a score still waiting on its wake proof is rescored.
    """
    today = now.date()
    stats = replace(
        state.stats,
        wake_proof_attempts=state.stats.wake_proof_attempts + 1,
        wake_proof_passes=state.stats.wake_proof_passes + (1 if passed else 0),
    )
    sleep_log = state.sleep_log
    wake_scores = state.wake_scores

    if sleep_log and sleep_log[-1].date == today and sleep_log[-1].wake_proof == WakeProof.PENDING:
        last = sleep_log[-1]
        outcome = WakeProof.PASSED if passed else WakeProof.FAILED
        delta = wake_proof_points(outcome) - wake_proof_points(WakeProof.PENDING)
        rescored = int(max(0, min(100, round(last.wake_score + delta))))
        sleep_log = sleep_log[:-1] + (replace(last, wake_score=rescored, wake_proof=outcome),)
        wake_scores = wake_scores.record(today, rescored)

    character = derive_character(sleep_log, stats, state.profile.current_streak, today)
    return replace(state, stats=stats, sleep_log=sleep_log, wake_scores=wake_scores, character=character)


def reset_boss_if_new_week(state: GameState, now: datetime) -> GameState:
    boss = rollover_if_new_week(state.boss, week_number(now.date()))
    if boss is state.boss:
        return state
    return replace(state, boss=boss)


def clear_new_achievements(state: GameState) -> GameState:
    return replace(state, unseen=())


def wake_score_summary(state: GameState, today: date) -> WakeScoreSummary:
    history = state.wake_scores
    return WakeScoreSummary(
        today=history.today(today),
        week_average=history.week_average(),
        all_time=history.all_time_average(),
    )


# ---------------------------------------------------------------------------
# Stateful façade
# ---------------------------------------------------------------------------


class ProgressionEngine:
    """Serializes transactions against a store.

    Args:
        store: Persistence collaborator with ``load(today)`` and
            ``save(state)``; defaults to an in-memory store.
        clock: Time source; defaults to the system clock.
        reward_multiplier: Coin multiplier applied to dismissals.
    """

    def __init__(
        self,
        store: SnapshotStore | None = None,
        clock: ClockSource | None = None,
        reward_multiplier: float = 1.0,
    ) -> None:
        self.store: SnapshotStore = store if store is not None else MemoryStore()
        self.clock = clock or SystemClock()
        self.reward_multiplier = reward_multiplier
        self._lock = threading.Lock()
        self._state: GameState | None = None

    @property
    def state(self) -> GameState:
        if self._state is None:
            self._state = self.store.load(self.clock.today())
        return self._state

    def _commit(self, new_state: GameState) -> None:
        self.store.save(new_state)
        self._state = new_state

    def dismiss_alarm(
        self,
        challenge_type: ChallengeType | str,
        snoozes_used: int = 0,
        alarm: AlarmConfig | None = None,
        challenge_passed: bool = True,
    ) -> DismissResult:
        with self._lock:
            new_state, result = dismiss_alarm(
                self.state,
                challenge_type,
                snoozes_used,
                self.clock.now(),
                alarm=alarm,
                reward_multiplier=self.reward_multiplier,
                challenge_passed=challenge_passed,
            )
            self._commit(new_state)
        logger.info("dismissal: %r", result)
        for ach in result.new_achievements:
            logger.info("achievement unlocked: %s (%s)", ach.id, ach.name)
        return result

    def snooze_alarm(self) -> None:
        with self._lock:
            self._commit(snooze_alarm(self.state, self.clock.now()))
        logger.info("snooze recorded (total %d)", self.state.stats.total_snoozes)

    def practice_challenge(self, challenge_type: ChallengeType | str, success: bool) -> None:
        with self._lock:
            self._commit(practice_challenge(self.state, challenge_type, success))
        logger.info("practice %s: %s", challenge_type, "passed" if success else "failed")

    def use_grace_token(self) -> bool:
        with self._lock:
            new_state, used = use_grace_token(self.state, self.clock.now())
            if used:
                self._commit(new_state)
        if used:
            logger.info("grace token used (streak %d)", new_state.profile.current_streak)
        else:
            logger.info("no grace token available this month")
        return used

    def complete_routine_task(self, task_id: str) -> bool:
        with self._lock:
            new_state, awarded = complete_routine_task(self.state, task_id, self.clock.now())
            if awarded:
                self._commit(new_state)
        if awarded:
            logger.info("routine task done: %s", task_id)
        return awarded

    def record_wake_proof_result(self, passed: bool) -> None:
        with self._lock:
            self._commit(record_wake_proof_result(self.state, passed, self.clock.now()))
        logger.info("wake proof %s", "passed" if passed else "failed")

    def reset_boss_if_new_week(self) -> None:
        with self._lock:
            new_state = reset_boss_if_new_week(self.state, self.clock.now())
            if new_state is not self.state:
                logger.info("new boss for week %d: %s", new_state.boss.week_number, new_state.boss.boss_id)
                self._commit(new_state)

    def clear_new_achievements(self) -> None:
        with self._lock:
            self._commit(clear_new_achievements(self.state))

    def get_wake_score(self) -> WakeScoreSummary:
        return wake_score_summary(self.state, self.clock.today())

    def get_adaptive_difficulty(self) -> Difficulty:
        return self.state.profile.difficulty

    def get_character_stats(self) -> CharacterStats:
        return self.state.character
