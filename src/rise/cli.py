"""CLI for the rise progression engine."""

from __future__ import annotations

import json
import logging
from datetime import datetime

import click

from rise.catalog.challenges import ChallengeType, ROUTINE_TASKS

CHALLENGES = [c.value for c in ChallengeType]


def _engine(ctx: click.Context):
    from rise.clock import FixedClock, SystemClock
    from rise.engine import ProgressionEngine
    from rise.store import JsonStore

    opts = ctx.obj
    clock = FixedClock(opts["at"]) if opts["at"] is not None else SystemClock()
    return ProgressionEngine(
        store=JsonStore(opts["store_dir"]),
        clock=clock,
        reward_multiplier=opts["reward_multiplier"],
    )


@click.group()
@click.option("--store-dir", "-s", envvar="RISE_STORE_DIR", default=None,
              type=click.Path(file_okay=False), help="Directory holding the JSON snapshot.")
@click.option("--reward-multiplier", envvar="RISE_REWARD_MULTIPLIER", default=1.0,
              show_default=True, help="Coin multiplier for dismissals.")
@click.option("--at", type=click.DateTime(), default=None,
              help="Pretend the current time is this (for replaying past mornings).")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.pass_context
def main(ctx: click.Context, store_dir: str | None, reward_multiplier: float,
         at: datetime | None, verbose: bool) -> None:
    """rise: turn your mornings into a game."""
    from rise.store import DEFAULT_STORE_DIR

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = {
        "store_dir": store_dir or str(DEFAULT_STORE_DIR),
        "reward_multiplier": reward_multiplier,
        "at": at,
    }


@main.command()
@click.pass_context
def status(ctx: click.Context) -> None:
    """Show level, streak, boss and character stats."""
    from rise.catalog.bosses import get_boss
    from rise.catalog.levels import xp_for_next_level

    engine = _engine(ctx)
    engine.reset_boss_if_new_week()
    state = engine.state
    p, st, b, ch = state.profile, state.stats, state.boss, state.character
    boss = get_boss(b.boss_id)

    click.echo(f"\n{'=' * 60}")
    click.echo(f"  {p.title}, level {p.level}")
    click.echo(f"{'=' * 60}")
    click.echo(f"  XP:          {p.xp} / {xp_for_next_level(p.level)}")
    click.echo(f"  Coins:       {p.coins}")
    click.echo(f"  Streak:      {p.current_streak}d (best {p.longest_streak}d)")
    click.echo(f"  Grace token: {'available' if p.grace_token_available else 'used'}")
    click.echo(f"  Dismissals:  {st.total_dismissals}   Snoozes: {st.total_snoozes}")
    click.echo(f"  Wake times:  earliest {st.earliest_wake_str}, average {st.average_wake_str}")
    click.echo(f"  Boss:        {boss.emoji} {boss.name} {b.current_hp}/{b.max_hp} hp"
               f"{' (defeated)' if b.defeated else ''}")
    click.echo(f"  Character:   discipline {ch.discipline}, energy {ch.energy}, "
               f"consistency {ch.consistency}")
    click.echo(f"  Difficulty:  {p.difficulty.value}")
    click.echo(f"{'=' * 60}")


@main.command()
@click.argument("challenge", type=click.Choice(CHALLENGES))
@click.option("--snoozes", "-n", default=0, type=click.IntRange(min=0), help="Snoozes used.")
@click.option("--snooze-limit", default=2, show_default=True, help="Snoozes the alarm allows.")
@click.option("--wake-proof/--no-wake-proof", default=False, help="Alarm has a wake-proof re-check.")
@click.option("--routine", "-r", multiple=True, type=click.Choice([t.id for t in ROUTINE_TASKS]),
              help="Routine task configured on the alarm (repeatable).")
@click.option("--failed", is_flag=True, help="The challenge was not solved.")
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON.")
@click.pass_context
def dismiss(ctx: click.Context, challenge: str, snoozes: int, snooze_limit: int,
            wake_proof: bool, routine: tuple[str, ...], failed: bool, as_json: bool) -> None:
    """Dismiss an alarm with CHALLENGE."""
    from rise.state import AlarmConfig

    alarm = AlarmConfig(
        challenges=(ChallengeType(challenge),),
        snooze_limit=snooze_limit,
        wake_proof_enabled=wake_proof,
        routine_tasks=routine,
    )
    result = _engine(ctx).dismiss_alarm(challenge, snoozes, alarm=alarm, challenge_passed=not failed)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    click.echo("MORNING CONQUERED!")
    click.echo(f"  Wake score:  {result.wake_score}/100")
    click.echo(f"  XP earned:   +{result.xp_earned}")
    click.echo(f"  Coins:       +{result.coins_earned}")
    click.echo(f"  Streak:      {result.streak_count}d")
    click.echo(f"  Boss damage: {result.damage_dealt}{' (boss defeated!)' if result.boss_defeated else ''}")
    if result.leveled_up:
        click.echo(f"  Level up! Now level {result.level}")
    for ach in result.new_achievements:
        click.echo(f"  {ach.emoji} Achievement: {ach.name}: {ach.description}")


@main.command()
@click.pass_context
def snooze(ctx: click.Context) -> None:
    """Snooze the alarm (the boss attacks)."""
    engine = _engine(ctx)
    engine.snooze_alarm()
    b = engine.state.boss
    click.echo(f"Snoozed. Boss snooze damage: {b.snooze_damage_taken}")


@main.command()
@click.argument("challenge", type=click.Choice(CHALLENGES))
@click.option("--failed", is_flag=True, help="The attempt failed.")
@click.pass_context
def practice(ctx: click.Context, challenge: str, failed: bool) -> None:
    """Record a practice attempt at CHALLENGE."""
    engine = _engine(ctx)
    engine.practice_challenge(challenge, not failed)
    click.echo(f"Practice recorded. Recommended difficulty: {engine.get_adaptive_difficulty().value}")


@main.command()
@click.pass_context
def grace(ctx: click.Context) -> None:
    """Spend this month's grace token."""
    engine = _engine(ctx)
    if engine.use_grace_token():
        click.echo(f"Grace token used. Streak: {engine.state.profile.current_streak}d")
    else:
        click.echo("No grace token left this month.")
        ctx.exit(1)


@main.command()
@click.argument("task_id", type=click.Choice([t.id for t in ROUTINE_TASKS]))
@click.pass_context
def routine(ctx: click.Context, task_id: str) -> None:
    """Tick off a morning routine task."""
    if _engine(ctx).complete_routine_task(task_id):
        click.echo(f"Done: {task_id}")
    else:
        click.echo(f"{task_id} already done today.")


@main.command("wake-proof")
@click.argument("outcome", type=click.Choice(["passed", "failed"]))
@click.pass_context
def wake_proof_cmd(ctx: click.Context, outcome: str) -> None:
    """Record the post-wake re-check OUTCOME."""
    engine = _engine(ctx)
    engine.record_wake_proof_result(outcome == "passed")
    click.echo(f"Wake proof {outcome}. Today's wake score: {engine.get_wake_score().today}")


@main.command()
@click.pass_context
def boss(ctx: click.Context) -> None:
    """Show this week's boss."""
    from rise.catalog.bosses import get_boss

    engine = _engine(ctx)
    engine.reset_boss_if_new_week()
    b = engine.state.boss
    info = get_boss(b.boss_id)
    click.echo(f"{info.emoji} {info.name}, {info.title}")
    click.echo(f"  HP:           {b.current_hp}/{b.max_hp}")
    click.echo(f"  Weak to:      {info.weak_to.value}")
    click.echo(f"  Damage dealt: {b.damage_dealt}")
    click.echo(f"  Snooze hits:  {b.snooze_damage_taken}")
    if b.defeated:
        click.echo("  Defeated!")


@main.command()
@click.pass_context
def score(ctx: click.Context) -> None:
    """Show wake scores (today, 7-day, all-time)."""
    summary = _engine(ctx).get_wake_score()
    click.echo(f"Today:    {summary.today}")
    click.echo(f"7-day:    {summary.week_average}")
    click.echo(f"All-time: {summary.all_time}")


@main.command()
@click.option("--clear", is_flag=True, help="Mark unseen achievements as seen.")
@click.pass_context
def achievements(ctx: click.Context, clear: bool) -> None:
    """List unlocked achievements."""
    from rise.catalog.achievements import get_achievement

    engine = _engine(ctx)
    state = engine.state
    if not state.unlocked:
        click.echo("No achievements yet.")
    for ach_id in state.unlocked:
        ach = get_achievement(ach_id)
        marker = " (new)" if ach_id in state.unseen else ""
        click.echo(f"  {ach.emoji} {ach.name}{marker}")
    if clear:
        engine.clear_new_achievements()


@main.command("smart-wake")
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.option("--minutes-until", "-m", required=True, type=float,
              help="Minutes until the scheduled alarm (negative if past).")
@click.option("--window", "-w", default=30.0, show_default=True, help="Smart-wake window in minutes.")
def smart_wake(file: str, minutes_until: float, window: float) -> None:
    """Classify a motion capture FILE and decide whether to wake now."""
    from rise.analytics.sleep import should_trigger_smart_wake
    from rise.replay import replay_motion

    replay = replay_motion(file)
    for start, result in replay.epochs:
        click.echo(f"  t={start:8.1f}s  {result.state.value:<7} var={result.variance:.4f} "
                   f"n={result.sample_count}")
    click.echo(f"Light sleep ratio: {replay.light_sleep_ratio:.0%}")

    trigger = should_trigger_smart_wake(replay.latest_state, minutes_until, window)
    click.echo(f"Latest state: {replay.latest_state.value} → {'WAKE NOW' if trigger else 'keep sleeping'}")


if __name__ == "__main__":
    main()
