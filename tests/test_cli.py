"""Tests for the rise CLI."""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from rise.cli import main

from tests.conftest import alternating_samples, motion_entries, write_jsonl

AT = ["--at", "2026-01-14 06:30:00"]


@pytest.fixture
def invoke(tmp_path):
    runner = CliRunner()

    def _invoke(*args: str, at: list[str] = AT):
        return runner.invoke(main, ["--store-dir", str(tmp_path / "store"), *at, *args])

    return _invoke


class TestCli:
    def test_status_fresh(self, invoke):
        result = invoke("status")
        assert result.exit_code == 0, result.output
        assert "Thrall" in result.output
        assert "level 0" in result.output
        assert "Hrímþurs" in result.output

    def test_dismiss_json(self, invoke):
        result = invoke("dismiss", "math", "--json")
        assert result.exit_code == 0, result.output
        payload = json.loads(result.output)
        assert payload["xp_earned"] == 25
        assert payload["coins_earned"] == 10
        assert payload["streak_count"] == 1
        assert payload["wake_score"] == 86
        assert payload["damage_dealt"] == 100

    def test_dismiss_persists(self, invoke, tmp_path):
        invoke("dismiss", "trivia")
        result = invoke("status")
        assert "Dismissals:  1" in result.output
        assert (tmp_path / "store" / "profile.json").exists()

    def test_unknown_challenge(self, invoke):
        result = invoke("dismiss", "dance")
        assert result.exit_code != 0

    def test_grace_once_per_month(self, invoke):
        first = invoke("grace")
        assert first.exit_code == 0
        assert "Grace token used" in first.output
        second = invoke("grace")
        assert second.exit_code == 1
        assert "No grace token" in second.output

    def test_routine_and_wake_proof(self, invoke):
        assert "Done: water" in invoke("routine", "water").output
        assert "already done" in invoke("routine", "water").output
        invoke("dismiss", "trivia", "--wake-proof", "-r", "water", "-r", "stretch")
        result = invoke("wake-proof", "passed")
        assert result.exit_code == 0, result.output
        # 40 + 25 + 20 + 5 + 0.7
        assert "wake score: 91" in result.output

    def test_achievements(self, invoke):
        assert "No achievements yet" in invoke("achievements").output
        for day in ("12", "13", "14"):
            invoke("dismiss", "trivia", at=["--at", f"2026-01-{day} 06:30:00"])
        result = invoke("achievements", "--clear")
        assert "(new)" in result.output
        assert "(new)" not in invoke("achievements").output

    def test_score_and_boss(self, invoke):
        invoke("snooze")
        invoke("dismiss", "math", "-n", "1")
        score = invoke("score")
        assert "Today:" in score.output
        boss = invoke("boss")
        assert "Snooze hits:  20" in boss.output
        assert "HP:           650/750" in boss.output

    def test_smart_wake(self, invoke, tmp_path):
        path = write_jsonl(tmp_path / "night.jsonl", motion_entries(alternating_samples(300, 0.05)))
        result = invoke("smart-wake", str(path), "-m", "10")
        assert result.exit_code == 0, result.output
        assert "WAKE NOW" in result.output

    def test_smart_wake_outside_window(self, invoke, tmp_path):
        path = write_jsonl(tmp_path / "night.jsonl", motion_entries(alternating_samples(300, 0.05)))
        result = invoke("smart-wake", str(path), "-m", "45")
        assert "keep sleeping" in result.output
