"""Tests for rise.catalog -- levels, bosses and challenge lookups."""

import pytest

from rise.catalog.bosses import WEEKLY_BOSSES, boss_for_week, get_boss
from rise.catalog.challenges import ChallengeType, parse_challenge
from rise.catalog.levels import (
    LEVEL_TITLES,
    LEVEL_XP,
    MAX_LEVEL,
    level_for_xp,
    title_for_level,
    xp_for_next_level,
    xp_progress,
)
from rise.clock import FixedClock, format_minutes, month_key, week_number

from tests.conftest import NOW, TODAY


class TestLevels:
    def test_thresholds(self):
        assert level_for_xp(0) == 0
        assert level_for_xp(99) == 0
        assert level_for_xp(100) == 1
        assert level_for_xp(525) == 3
        assert level_for_xp(40000) == MAX_LEVEL
        assert level_for_xp(10**6) == MAX_LEVEL

    def test_table_shape(self):
        assert len(LEVEL_XP) == len(LEVEL_TITLES) == 20
        assert LEVEL_XP == sorted(LEVEL_XP)

    def test_titles(self):
        assert title_for_level(0) == "Thrall"
        assert title_for_level(99) == "All-Seer"

    def test_next_level(self):
        assert xp_for_next_level(0) == 100
        assert xp_for_next_level(MAX_LEVEL) == 40000

    def test_progress(self):
        assert xp_progress(175, 1) == pytest.approx(0.5)
        assert xp_progress(50000, MAX_LEVEL) == 1.0


class TestBosses:
    def test_rotation(self):
        assert [boss_for_week(w).id for w in range(7)] == [
            "draugr", "frost_giant", "fenrir", "jormungandr", "nidhogg", "surtr", "draugr",
        ]

    def test_each_weakness_used_once(self):
        assert {b.weak_to for b in WEEKLY_BOSSES} == set(ChallengeType)

    def test_unknown_boss(self):
        with pytest.raises(KeyError):
            get_boss("loki")


class TestChallenges:
    def test_parse(self):
        assert parse_challenge("shake") == ChallengeType.SHAKE
        assert parse_challenge(ChallengeType.MATH) == ChallengeType.MATH

    def test_unknown(self):
        with pytest.raises(ValueError, match="unknown challenge"):
            parse_challenge("dance")


class TestClock:
    def test_week_number(self):
        assert week_number(TODAY) == 1
        assert week_number(TODAY.replace(day=1)) == 0
        assert week_number(TODAY.replace(day=7)) == 0
        assert week_number(TODAY.replace(day=8)) == 1

    def test_month_key(self):
        assert month_key(TODAY) == "2026-01"

    def test_format_minutes(self):
        assert format_minutes(390) == "06:30"
        assert format_minutes(None) == "--:--"

    def test_fixed_clock(self):
        clock = FixedClock(NOW)
        assert clock.today() == TODAY
        clock.advance(days=1, hours=2)
        assert clock.now().hour == 8
        assert clock.today().day == 15
