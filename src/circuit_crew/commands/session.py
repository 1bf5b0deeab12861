"""Compose and run circuit sessions."""

import asyncio
import random
import sys

import click
import questionary
from questionary import Style

from ..models.people import Person
from ..models.session import TARGET_EXERCISE_COUNT, Session
from ..services.composer import SessionDraft
from ..services.cues import ConsoleAnnouncer, ConsoleBeeper, CueDispatcher, CueRecorder, NullDucking
from ..services.live import LiveExecutionEngine, Phase
from ..services.physics import calculate_physics
from ..services.scheduler import AsyncioScheduler, VirtualScheduler
from ..services.workspace import Workspace
from .base import (
    async_command,
    echo_error,
    echo_info,
    echo_success,
    echo_warning,
    ensure_initialized,
    format_duration,
    format_table,
    open_workspace,
)

custom_style = Style(
    [
        ("qmark", "fg:#e65100 bold"),
        ("question", "bold"),
        ("answer", "fg:#2e7d32 bold"),
        ("pointer", "fg:#e65100 bold"),
        ("highlighted", "fg:#e65100 bold"),
        ("selected", "fg:#2e7d32"),
        ("instruction", ""),
        ("text", ""),
    ]
)


def composition_options(f):
    """Options shared by every command that builds a session."""
    options = [
        click.option("--target", type=click.IntRange(1, 100), default=TARGET_EXERCISE_COUNT, show_default=True, help="Number of exercise slots"),
        click.option("--seed", type=int, default=None, help="Random seed for a repeatable session"),
        click.option("--exercise", "exercise_duration_sec", type=int, help="Override exercise duration (s)"),
        click.option("--rest", "rest_duration_sec", type=int, help="Override rest duration (s)"),
        click.option("--extreme", "extreme_duration_sec", type=int, help="Override extreme duration (s)"),
        click.option("--extreme-count", "extreme_count", type=int, help="Override number of extreme rounds"),
        click.option("--drop", multiple=True, help="Leave an exercise out of the generated list (repeatable)"),
    ]
    for option in reversed(options):
        f = option(f)
    return f


@click.group()
@click.pass_context
def session(ctx):
    """Compose and run circuit sessions."""
    ensure_initialized(ctx)


def _resolve_people(workspace: Workspace, names: tuple[str, ...]) -> list[Person]:
    people = []
    for name in names:
        person = workspace.roster.find(name)
        if person is None:
            raise click.BadParameter(f"Unknown person '{name}'", param_hint="--person")
        people.append(person)
    return people


async def _choose_people(workspace: Workspace, names: tuple[str, ...], interactive: bool) -> list[Person]:
    if names:
        return _resolve_people(workspace, names)

    roster = list(workspace.roster.list())
    if not interactive:
        return roster

    if not roster:
        return []
    chosen = await questionary.checkbox(
        "Who is training today?",
        choices=[questionary.Choice(p.label, p, checked=True) for p in roster],
        style=custom_style,
    ).ask_async()
    return chosen or []


def _build_session(
    workspace: Workspace,
    people: list[Person],
    target: int,
    seed: int | None,
    overrides: dict,
) -> Session:
    overrides = dict(overrides)
    dropped = overrides.pop("drop", ())
    rng = random.Random(seed)
    settings = workspace.builder.settings.with_updates(
        **{k: v for k, v in overrides.items() if v is not None}
    )

    draft = SessionDraft(rng)
    draft.smart_fill(workspace.library.list(), target)
    for name in dropped:
        exercise = workspace.library.find(name)
        if exercise is None:
            raise click.BadParameter(f"Unknown exercise '{name}'", param_hint="--drop")
        draft.remove_exercise(exercise.id)
    if not draft:
        raise ValueError("No exercises left after dropping")

    return workspace.builder.create_session(
        [p.id for p in people],
        [p.display_name for p in people],
        draft.exercises,
        settings,
        rng=rng,
    )


def _print_plan(session: Session) -> None:
    rows = [
        [
            str(ex.order + 1),
            ex.name,
            f"{ex.duration_sec}s",
            click.style("EXTREME", fg="red", bold=True) if ex.is_extreme else "",
        ]
        for ex in session.exercises
    ]
    click.echo()
    click.echo(format_table(["#", "Exercise", "Time", ""], rows))
    click.echo()
    click.echo(
        f"{len(session.exercises)} exercises, about {format_duration(session.planned_duration_sec)} "
        f"with {session.settings.rest_duration_sec}s rests"
    )
    if session.participant_names:
        click.echo(f"Participants: {', '.join(session.participant_names)}")


def _print_summary(session: Session) -> None:
    physics = calculate_physics(session.exercises)
    extreme_rounds = sum(1 for p in physics.per_exercise if p.is_extreme)

    click.echo()
    click.echo(click.style("Session complete", bold=True))
    click.echo("=" * 40)
    click.echo(f"Duration:  {format_duration(session.total_duration_sec)}")
    click.echo(f"Exercises: {len(session.exercises)}")
    click.echo(f"Extreme:   {extreme_rounds}")
    click.echo(f"Distance:  {session.total_meters:.2f} m")
    click.echo(f"Work:      {session.total_work_kj:.3f} kJ")

    rows = [
        [
            str(ex.order + 1),
            p.name,
            f"{ex.duration_sec}s",
            f"{p.meters:.2f} m",
            "EXTREME" if p.is_extreme else "",
        ]
        for ex, p in zip(session.exercises, physics.per_exercise)
    ]
    click.echo()
    click.echo(format_table(["#", "Exercise", "Time", "Distance", ""], rows))


async def _prepare(ctx, person, target, seed, overrides, interactive) -> tuple[Workspace, Session]:
    workspace = await open_workspace(ctx)

    if not workspace.library.list():
        echo_error("The exercise library is empty. Add exercises first.")
        ctx.exit(1)

    people = await _choose_people(workspace, person, interactive)
    if not people:
        echo_error("No participants. Add people with 'circuit-crew people add NAME'.")
        ctx.exit(1)

    try:
        built = _build_session(workspace, people, target, seed, overrides)
    except ValueError as e:
        echo_error(str(e))
        ctx.exit(1)

    return workspace, built


@session.command()
@composition_options
@click.pass_context
@async_command
async def compose(ctx, target: int, seed: int | None, **overrides):
    """Preview a smart session without running it."""
    workspace = await open_workspace(ctx)
    library = workspace.library.list()

    if not library:
        echo_error("The exercise library is empty.")
        ctx.exit(1)

    try:
        built = _build_session(workspace, [], target, seed, overrides)
    except ValueError as e:
        echo_error(str(e))
        ctx.exit(1)

    _print_plan(built)
    click.echo(f"Estimated: {built.total_meters:.2f} m, {built.total_work_kj:.3f} kJ")


@session.command()
@click.option("--person", "-p", multiple=True, help="Participant name or id (repeatable)")
@click.option("--no-bell", is_flag=True, help="Do not ring the terminal bell")
@composition_options
@click.pass_context
@async_command
async def start(ctx, person: tuple[str, ...], no_bell: bool, target: int, seed: int | None, **overrides):
    """Run a live session in the terminal.

    Type p + Enter to pause or resume, s + Enter to skip the current
    exercise and q + Enter to end the session early.
    """
    workspace, built = await _prepare(ctx, person, target, seed, overrides, interactive=True)
    _print_plan(built)
    click.echo()

    loop = asyncio.get_running_loop()
    done = asyncio.Event()

    def on_finish(elapsed: int) -> None:
        workspace.builder.complete_session(elapsed)
        done.set()

    cues = CueDispatcher(ConsoleAnnouncer(), ConsoleBeeper(bell=not no_bell), NullDucking())
    engine = LiveExecutionEngine(built, AsyncioScheduler(loop), cues, on_finish=on_finish)

    def handle_input() -> None:
        line = sys.stdin.readline()
        if not line:
            # stdin closed
            loop.remove_reader(sys.stdin.fileno())
            return

        command = line.strip().lower()
        if command == "p":
            paused = engine.toggle_pause()
            echo_info("Paused" if paused else "Resumed")
        elif command == "s":
            if not engine.skip():
                echo_warning("Skip only works during an exercise")
        elif command == "q":
            engine.finish()

    controls = True
    try:
        loop.add_reader(sys.stdin.fileno(), handle_input)
    except (NotImplementedError, OSError, ValueError):
        controls = False
        echo_warning("Keyboard controls unavailable; the session will run to the end.")

    if controls:
        echo_info("Controls: p = pause/resume, s = skip, q = end (then Enter)")

    async def show_progress() -> None:
        last = None
        while not done.is_set():
            snap = engine.snapshot()
            key = (snap.phase, snap.index, snap.time_left, snap.paused)
            if key != last and snap.phase is not Phase.FINISHED and not snap.paused:
                last = key
                if snap.phase is Phase.COUNTDOWN:
                    label = "Get ready"
                elif snap.phase is Phase.REST:
                    label = f"Rest - next: {snap.upcoming.name}"
                else:
                    label = f"[{snap.index + 1}/{snap.total}] {snap.current.name}"
                click.echo(f"{label:<50} {snap.time_left:>3}")
            await asyncio.sleep(0.1)

    engine.start()
    progress = asyncio.create_task(show_progress())
    try:
        await done.wait()
    finally:
        engine.close()
        if controls:
            loop.remove_reader(sys.stdin.fileno())
        progress.cancel()

    await workspace.flush()
    completed = workspace.builder.current_session
    if completed is not None and completed.completed:
        _print_summary(completed)


@session.command()
@click.option("--person", "-p", multiple=True, help="Participant name or id (default: everyone)")
@click.option("--skip", "skip_at", type=int, multiple=True, help="Skip the exercise with this number (repeatable)")
@click.option("--quiet", "-q", is_flag=True, help="Only print the summary")
@composition_options
@click.pass_context
@async_command
async def simulate(ctx, person: tuple[str, ...], skip_at: tuple[int, ...], quiet: bool, target: int, seed: int | None, **overrides):
    """Run a session on a virtual clock and record it.

    Useful to check a plan and its cues without waiting in real time.
    """
    workspace, built = await _prepare(ctx, person, target, seed, overrides, interactive=False)
    if not quiet:
        _print_plan(built)
        click.echo()

    scheduler = VirtualScheduler(frame_ms=100)
    echo = None if quiet else (lambda line: click.echo(f"{format_duration(int(scheduler.now())):>6}  {line}"))
    recorder = CueRecorder(echo=echo)
    cues = CueDispatcher(recorder, recorder, recorder)
    engine = LiveExecutionEngine(
        built,
        scheduler,
        cues,
        on_finish=workspace.builder.complete_session,
    )

    skipped = {n - 1 for n in skip_at}

    def maybe_skip() -> None:
        if engine.phase is Phase.EXERCISE and engine.index in skipped:
            skipped.discard(engine.index)
            engine.skip()
        if not engine.is_finished:
            scheduler.call_later(1, maybe_skip)

    engine.start()
    if skipped:
        scheduler.call_later(1, maybe_skip)
    scheduler.run_until_idle()

    await workspace.flush()
    completed = workspace.builder.current_session
    if completed is None or not completed.completed:
        echo_error("Session did not complete.")
        ctx.exit(1)

    _print_summary(completed)
    echo_success(f"Recorded session {completed.id[:8]}")
