"""Immutable progression snapshots and their JSON-friendly dict forms.

A :class:`GameState` is never modified in place: transactions in
:mod:`rise.engine` build a new one with :func:`dataclasses.replace` and hand
it to the store in one piece.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import date
from enum import Enum
from typing import Any

import numpy as np

from rise.catalog.bosses import boss_for_week
from rise.catalog.challenges import ChallengeType, Difficulty
from rise.catalog.levels import level_for_xp, title_for_level
from rise.clock import format_minutes, week_number

SLEEP_LOG_LIMIT = 60
WAKE_TIMES_LIMIT = 30
WAKE_SCORE_LIMIT = 30


class WakeProof(str, Enum):
    """State of the post-dismissal "are you still up?" re-check."""

    PASSED = "passed"
    FAILED = "failed"
    PENDING = "pending"
    NOT_CONFIGURED = "not_configured"


def _iso(day: date | None) -> str | None:
    return day.isoformat() if day is not None else None


def _parse_day(value: str | None) -> date | None:
    # Older blobs stored "" for "never"
    if not value:
        return None
    return date.fromisoformat(value)


# ---------------------------------------------------------------------------
# Alarm configuration (input from the alarm editor)
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AlarmConfig:
    """Per-alarm settings that influence scoring.

    The bare defaults describe an alarm with nothing optional switched on:
    no wake-proof re-check and no morning routine.
    """

    hour: int = 7
    minute: int = 0
    label: str = ""
    challenges: tuple[ChallengeType, ...] = (ChallengeType.MATH,)
    challenge_count: int = 1
    difficulty: Difficulty = Difficulty.MEDIUM
    snooze_limit: int = 2
    wake_proof_enabled: bool = False
    wake_proof_delay_min: int = 5
    routine_tasks: tuple[str, ...] = ()
    smart_wake_enabled: bool = False
    smart_wake_window_min: int = 30


def default_alarm(hour: int = 7, minute: int = 0) -> AlarmConfig:
    """The alarm a new user starts with."""
    return AlarmConfig(
        hour=hour,
        minute=minute,
        challenges=(ChallengeType.MATH, ChallengeType.TRIVIA),
        challenge_count=2,
        difficulty=Difficulty.MEDIUM,
        snooze_limit=2,
        wake_proof_enabled=True,
        wake_proof_delay_min=5,
        routine_tasks=("water", "stretch"),
    )


# ---------------------------------------------------------------------------
# Player profile and cumulative stats
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PlayerProfile:
    xp: int = 0
    coins: int = 0
    level: int = 0
    title: str = title_for_level(0)
    current_streak: int = 0
    longest_streak: int = 0
    last_wake_date: date | None = None
    grace_token_available: bool = True
    grace_token_last_used: str | None = None  # "YYYY-MM"
    grace_token_used_count: int = 0
    difficulty: Difficulty = Difficulty.MEDIUM
    # Task ids ticked off on routine_date (one award per task per day)
    routine_date: date | None = None
    routine_completed: tuple[str, ...] = ()
    # Completions not yet credited to a dismissal
    routine_pending: int = 0

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        d["last_wake_date"] = _iso(self.last_wake_date)
        d["routine_date"] = _iso(self.routine_date)
        d["difficulty"] = self.difficulty.value
        d["routine_completed"] = list(self.routine_completed)
        return d

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> PlayerProfile:
        # level and title are derived from xp, whatever the blob says
        xp = max(0, int(d.get("xp", 0)))
        level = level_for_xp(xp)
        return cls(
            xp=xp,
            coins=int(d.get("coins", 0)),
            level=level,
            title=title_for_level(level),
            current_streak=int(d.get("current_streak", 0)),
            longest_streak=int(d.get("longest_streak", 0)),
            last_wake_date=_parse_day(d.get("last_wake_date")),
            grace_token_available=bool(d.get("grace_token_available", True)),
            grace_token_last_used=d.get("grace_token_last_used"),
            grace_token_used_count=int(d.get("grace_token_used_count", 0)),
            difficulty=Difficulty(d.get("difficulty", Difficulty.MEDIUM.value)),
            routine_date=_parse_day(d.get("routine_date")),
            routine_completed=tuple(d.get("routine_completed", ())),
            routine_pending=int(d.get("routine_pending", 0)),
        )


def _empty_challenge_counts() -> dict[str, int]:
    return {c.value: 0 for c in ChallengeType}


@dataclass(frozen=True)
class PlayerStats:
    """Lifetime counters.  ``challenge_counts`` is copied, never mutated."""

    total_dismissals: int = 0
    total_snoozes: int = 0
    challenge_counts: dict[str, int] = field(default_factory=_empty_challenge_counts)
    bosses_defeated: int = 0
    total_coins_earned: int = 0
    earliest_wake: int | None = None  # minutes since midnight
    wake_times: tuple[int, ...] = ()  # last WAKE_TIMES_LIMIT wake times
    wake_proof_attempts: int = 0
    wake_proof_passes: int = 0
    success_window: tuple[int, ...] = ()  # 1 = pass, 0 = fail/snooze

    @property
    def total_challenges(self) -> int:
        return sum(self.challenge_counts.values())

    def completions(self, challenge: ChallengeType) -> int:
        return self.challenge_counts.get(challenge.value, 0)

    @property
    def average_wake(self) -> int | None:
        if not self.wake_times:
            return None
        return int(round(float(np.mean(self.wake_times))))

    @property
    def earliest_wake_str(self) -> str:
        return format_minutes(self.earliest_wake)

    @property
    def average_wake_str(self) -> str:
        return format_minutes(self.average_wake)

    @property
    def wake_proof_pass_rate(self) -> float:
        if self.wake_proof_attempts <= 0:
            return 0.0
        return self.wake_proof_passes / self.wake_proof_attempts

    def with_challenge(self, challenge: ChallengeType) -> dict[str, int]:
        """A copy of ``challenge_counts`` with *challenge* incremented."""
        counts = dict(self.challenge_counts)
        counts[challenge.value] = counts.get(challenge.value, 0) + 1
        return counts

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        d["wake_times"] = list(self.wake_times)
        d["success_window"] = list(self.success_window)
        return d

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> PlayerStats:
        counts = _empty_challenge_counts()
        counts.update({k: int(v) for k, v in d.get("challenge_counts", {}).items()})
        earliest = d.get("earliest_wake")
        return cls(
            total_dismissals=int(d.get("total_dismissals", 0)),
            total_snoozes=int(d.get("total_snoozes", 0)),
            challenge_counts=counts,
            bosses_defeated=int(d.get("bosses_defeated", 0)),
            total_coins_earned=int(d.get("total_coins_earned", 0)),
            earliest_wake=int(earliest) if earliest is not None else None,
            wake_times=tuple(int(t) for t in d.get("wake_times", ())),
            wake_proof_attempts=int(d.get("wake_proof_attempts", 0)),
            wake_proof_passes=int(d.get("wake_proof_passes", 0)),
            success_window=tuple(int(s) for s in d.get("success_window", ())),
        )


@dataclass(frozen=True)
class CharacterStats:
    """Derived attributes, each 0-100."""

    discipline: int = 0
    energy: int = 0
    consistency: int = 0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> CharacterStats:
        return cls(
            discipline=int(d.get("discipline", 0)),
            energy=int(d.get("energy", 0)),
            consistency=int(d.get("consistency", 0)),
        )


# ---------------------------------------------------------------------------
# Boss
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class BossState:
    week_number: int
    boss_id: str
    current_hp: int
    max_hp: int
    damage_dealt: int = 0
    snooze_damage_taken: int = 0
    defeated: bool = False

    @classmethod
    def fresh(cls, week: int) -> BossState:
        """Full-health boss for *week*."""
        boss = boss_for_week(week)
        return cls(week_number=week, boss_id=boss.id, current_hp=boss.max_hp, max_hp=boss.max_hp)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> BossState:
        max_hp = max(0, int(d["max_hp"]))
        return cls(
            week_number=int(d["week_number"]),
            boss_id=d["boss_id"],
            current_hp=max(0, min(int(d["current_hp"]), max_hp)),
            max_hp=max_hp,
            damage_dealt=int(d.get("damage_dealt", 0)),
            snooze_damage_taken=int(d.get("snooze_damage_taken", 0)),
            defeated=bool(d.get("defeated", False)),
        )


# ---------------------------------------------------------------------------
# Sleep log and wake score history
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SleepLogEntry:
    date: date
    wake_minutes: int
    snoozes_used: int
    wake_score: int
    routine_completed: int = 0
    wake_proof: WakeProof = WakeProof.NOT_CONFIGURED

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        d["date"] = self.date.isoformat()
        d["wake_proof"] = self.wake_proof.value
        return d

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> SleepLogEntry:
        return cls(
            date=date.fromisoformat(d["date"]),
            wake_minutes=int(d["wake_minutes"]),
            snoozes_used=int(d.get("snoozes_used", 0)),
            wake_score=int(d.get("wake_score", 0)),
            routine_completed=int(d.get("routine_completed", 0)),
            wake_proof=WakeProof(d.get("wake_proof", WakeProof.NOT_CONFIGURED.value)),
        )


@dataclass(frozen=True)
class WakeScoreHistory:
    """The last :data:`WAKE_SCORE_LIMIT` daily wake scores.

    ``lifetime_total``/``lifetime_days`` keep the all-time average honest
    after old days fall off the window.
    """

    entries: tuple[tuple[date, int], ...] = ()
    lifetime_total: int = 0
    lifetime_days: int = 0

    def record(self, day: date, score: int) -> WakeScoreHistory:
        """Return a history with *score* as the value for *day*.

        A second score on the same day replaces the first.
        """
        if self.entries and self.entries[-1][0] == day:
            previous = self.entries[-1][1]
            return WakeScoreHistory(
                entries=self.entries[:-1] + ((day, score),),
                lifetime_total=self.lifetime_total - previous + score,
                lifetime_days=self.lifetime_days,
            )
        return WakeScoreHistory(
            entries=(self.entries + ((day, score),))[-WAKE_SCORE_LIMIT:],
            lifetime_total=self.lifetime_total + score,
            lifetime_days=self.lifetime_days + 1,
        )

    def today(self, day: date) -> int:
        if self.entries and self.entries[-1][0] == day:
            return self.entries[-1][1]
        return 0

    def week_average(self) -> int:
        recent = [score for _, score in self.entries[-7:]]
        if not recent:
            return 0
        return int(round(float(np.mean(recent))))

    def all_time_average(self) -> int:
        if self.lifetime_days <= 0:
            return 0
        return int(round(self.lifetime_total / self.lifetime_days))

    def to_dict(self) -> dict[str, Any]:
        return {
            "entries": [{"date": d.isoformat(), "score": s} for d, s in self.entries],
            "lifetime_total": self.lifetime_total,
            "lifetime_days": self.lifetime_days,
        }

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> WakeScoreHistory:
        entries = tuple(
            (date.fromisoformat(e["date"]), int(e["score"])) for e in d.get("entries", ())
        )
        return cls(
            entries=entries[-WAKE_SCORE_LIMIT:],
            lifetime_total=int(d.get("lifetime_total", sum(s for _, s in entries))),
            lifetime_days=int(d.get("lifetime_days", len(entries))),
        )


# ---------------------------------------------------------------------------
# Full snapshot
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class GameState:
    """Everything the progression engine owns, as one value."""

    profile: PlayerProfile
    stats: PlayerStats
    boss: BossState
    unlocked: tuple[str, ...] = ()
    unseen: tuple[str, ...] = ()  # unlocked but not yet shown to the player
    sleep_log: tuple[SleepLogEntry, ...] = ()
    wake_scores: WakeScoreHistory = field(default_factory=WakeScoreHistory)
    character: CharacterStats = field(default_factory=CharacterStats)

    @classmethod
    def new(cls, today: date) -> GameState:
        return cls(
            profile=PlayerProfile(),
            stats=PlayerStats(),
            boss=BossState.fresh(week_number(today)),
        )

    def to_blobs(self) -> dict[str, dict[str, Any]]:
        """Split into the per-store blobs persisted by :mod:`rise.store`."""
        return {
            "profile": {
                "profile": self.profile.to_dict(),
                "stats": self.stats.to_dict(),
                "character": self.character.to_dict(),
            },
            "boss": self.boss.to_dict(),
            "achievements": {"unlocked": list(self.unlocked), "unseen": list(self.unseen)},
            "sleep_log": {"entries": [e.to_dict() for e in self.sleep_log]},
            "wake_scores": self.wake_scores.to_dict(),
        }

    @classmethod
    def from_blobs(cls, blobs: dict[str, dict[str, Any]], today: date) -> GameState:
        """Rebuild a snapshot; any missing blob falls back to its default."""
        profile_blob = blobs.get("profile") or {}
        boss_blob = blobs.get("boss")
        ach_blob = blobs.get("achievements") or {}
        log_blob = blobs.get("sleep_log") or {}
        scores_blob = blobs.get("wake_scores") or {}

        unlocked: list[str] = []
        for ach_id in ach_blob.get("unlocked", ()):
            if ach_id not in unlocked:
                unlocked.append(ach_id)

        return cls(
            profile=PlayerProfile.from_dict(profile_blob.get("profile", {})),
            stats=PlayerStats.from_dict(profile_blob.get("stats", {})),
            boss=BossState.from_dict(boss_blob) if boss_blob else BossState.fresh(week_number(today)),
            unlocked=tuple(unlocked),
            unseen=tuple(ach_blob.get("unseen", ())),
            sleep_log=tuple(
                SleepLogEntry.from_dict(e) for e in log_blob.get("entries", ())
            )[-SLEEP_LOG_LIMIT:],
            wake_scores=WakeScoreHistory.from_dict(scores_blob),
            character=CharacterStats.from_dict(profile_blob.get("character", {})),
        )
