"""Tests for rise.analytics.character -- discipline, energy, consistency."""

from dataclasses import replace

from rise.analytics.character import consistency, derive, discipline, energy, recent_entries
from rise.catalog.challenges import ChallengeType
from rise.state import CharacterStats, PlayerStats

from tests.conftest import TODAY, log_entry


def stats_with(**counts) -> PlayerStats:
    stats = PlayerStats()
    merged = dict(stats.challenge_counts)
    merged.update(counts)
    return replace(stats, challenge_counts=merged)


class TestRecentEntries:
    def test_fourteen_day_window(self):
        log = [log_entry(days_ago=14), log_entry(days_ago=13), log_entry(days_ago=0)]
        recent = recent_entries(log, TODAY)
        assert [e.date for e in recent] == [log[1].date, log[2].date]

    def test_future_entries_ignored(self):
        assert recent_entries([log_entry(days_ago=-1)], TODAY) == []

    def test_one_record_per_day(self):
        log = [
            log_entry(days_ago=1, wake=400),
            log_entry(days_ago=0, wake=380, snoozes=0),
            log_entry(days_ago=0, wake=410, snoozes=2, routine=1),
        ]
        recent = recent_entries(log, TODAY)
        assert len(recent) == 2
        today_entry = recent[-1]
        assert today_entry.wake_minutes == 380
        assert today_entry.snoozes_used == 0
        assert today_entry.routine_completed == 1


class TestDiscipline:
    def test_empty(self):
        assert discipline([], PlayerStats()) == 0

    def test_mixed(self):
        recent = [
            log_entry(days_ago=3, snoozes=0, routine=2),
            log_entry(days_ago=2, snoozes=0, routine=1),
            log_entry(days_ago=1, snoozes=1),
            log_entry(days_ago=0, snoozes=2),
        ]
        stats = replace(PlayerStats(), wake_proof_attempts=3, wake_proof_passes=3)
        # 40 * 0.5 + 30 * 1.0 + 30 * 0.5
        assert discipline(recent, stats) == 65


class TestEnergy:
    def test_streak_only(self):
        assert energy([], PlayerStats(), 5) == 15

    def test_all_terms(self):
        recent = [log_entry(days_ago=d, wake=400) for d in range(7)]
        stats = stats_with(shake=10, steps=6)
        # 12 + 8 + 40 * 7/14
        assert energy(recent, stats, 4) == 40

    def test_late_wakes_do_not_count(self):
        recent = [log_entry(days_ago=d, wake=420) for d in range(7)]
        assert energy(recent, PlayerStats(), 0) == 0

    def test_capped(self):
        recent = [log_entry(days_ago=d, wake=300) for d in range(14)]
        stats = stats_with(shake=200)
        assert energy(recent, stats, 40) == 100


class TestConsistency:
    def test_needs_three_samples(self):
        recent = [log_entry(days_ago=1, wake=400), log_entry(days_ago=0, wake=400)]
        assert consistency(recent, 20) == 30

    def test_spread_penalty(self):
        recent = [
            log_entry(days_ago=2, wake=400),
            log_entry(days_ago=1, wake=410),
            log_entry(days_ago=0, wake=420),
        ]
        # std 8.165 -> 0.7 * (100 - 13.64) + 6
        assert consistency(recent, 3) == 66

    def test_perfect(self):
        recent = [log_entry(days_ago=d, wake=390) for d in range(5)]
        assert consistency(recent, 30) == 100

    def test_wild_spread_floors_at_streak_bonus(self):
        recent = [
            log_entry(days_ago=2, wake=300),
            log_entry(days_ago=1, wake=500),
            log_entry(days_ago=0, wake=700),
        ]
        assert consistency(recent, 1) == 2


class TestDerive:
    def test_empty_history(self):
        assert derive([], PlayerStats(), 0, TODAY) == CharacterStats(0, 0, 0)

    def test_repeat_alarms_count_as_one_morning(self):
        log = [log_entry(days_ago=0, wake=360 + i, snoozes=0) for i in range(5)]
        result = derive(log, PlayerStats(), 0, TODAY)
        assert result.energy == 3  # 40 * 1/14, not 5/14
        assert result.discipline == 40

    def test_old_entries_ignored(self):
        log = [log_entry(days_ago=20, snoozes=0, routine=1)]
        assert derive(log, PlayerStats(), 0, TODAY).discipline == 0

    def test_single_morning(self):
        log = [log_entry(days_ago=0, wake=390, snoozes=0)]
        stats = stats_with(**{ChallengeType.MATH.value: 1})
        result = derive(log, stats, 1, TODAY)
        assert result.discipline == 40
        assert result.energy == 6  # 3 + 40/14
        assert result.consistency == 2
