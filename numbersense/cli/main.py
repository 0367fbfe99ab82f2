"""
Typer CLI for the numbersense practice engine.

Commands:
    numbersense next      - Pick the next skill to practise
    numbersense plan      - Build a practice session plan
    numbersense record    - Record an answer and update mastery/schedule
    numbersense progress  - Show mastery for every skill
    numbersense methods   - Rank solving methods for a problem
    numbersense unlock    - Manually unlock a skill for a player

Usage:
    numbersense next --player sam
    numbersense plan --player sam --skill doubles
    numbersense record doubles --player sam --wrong --time-ms 9000 --question "6 + 6" --answer 12
    numbersense methods "58 + 39" --solve compensation --comfort column=expert
"""

from __future__ import annotations

import sys
from typing import NoReturn

import typer
from loguru import logger
from rich import print as rprint
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from config import Settings, get_settings
from numbersense.core.skills import SkillCatalog, UnknownSkillError
from numbersense.methods import (
    ArithmeticProblem,
    ComfortLevel,
    MethodComfort,
    MethodSuitabilityScorer,
    UnknownMethodError,
    build_default_registry,
)
from numbersense.storage import JsonProgressStore
from numbersense.study import NoEligibleSkillError, PracticeService, Question

console = Console()

app = typer.Typer(
    name="numbersense",
    help="Adaptive mental arithmetic practice: mastery, scheduling and solving methods",
    no_args_is_help=True,
)

PLAYER_OPTION = typer.Option("default", "--player", "-p", help="Player id")


def _load_catalog(settings: Settings) -> SkillCatalog:
    if settings.skills_file:
        return SkillCatalog.from_file(settings.skills_file)
    return SkillCatalog.default()


def _get_service() -> PracticeService:
    settings = get_settings()
    store = JsonProgressStore(settings.progress_dir)
    return PracticeService(store, settings, catalog=_load_catalog(settings))


def _fail(error: Exception) -> NoReturn:
    message = error.args[0] if isinstance(error, KeyError) and error.args else error
    rprint(f"[red]Error:[/red] {message}")
    raise typer.Exit(1)


def _format_progress_bar(score: float, width: int = 10) -> str:
    """Format a progress bar."""
    filled = int(score / 100 * width)
    empty = width - filled
    return "#" * filled + "-" * empty


def _parse_comfort(entries: list[str]) -> dict[str, MethodComfort]:
    """Parse `method=level` pairs, e.g. `column=expert`."""
    comfort = {}
    for entry in entries:
        method_id, sep, level = entry.partition("=")
        if not sep:
            raise ValueError(f"Expected method=level, got {entry!r}")
        comfort[method_id.strip()] = MethodComfort(comfort_level=ComfortLevel(level.strip().lower()))
    return comfort


@app.command("next")
def next_skill(player: str = PLAYER_OPTION) -> None:
    """
    Pick the next skill to practise.

    Shows the choice and the ranked candidates it was drawn from.
    """
    service = _get_service()
    try:
        choice = service.select_next(player)
        ranked = service.selector.rank(player, service.catalog.skills)
    except NoEligibleSkillError as e:
        _fail(e)

    label = "Urgency" if service.settings.is_spaced_repetition_enabled() else "Weight"
    table = Table(title=f"Candidates for {player}")
    table.add_column("Skill", style="cyan")
    table.add_column(label, justify="right")
    table.add_column("Mastery", justify="right")
    for skill, score in ranked:
        record = service.mastery_record(player, skill.id)
        style = "bold green" if skill.id == choice.id else ""
        table.add_row(skill.display_name, f"{score:.1f}", str(record.mastery), style=style)

    console.print(table)
    teaching = " [yellow](show teaching first)[/yellow]" if service.should_show_teaching(player, choice.id) else ""
    rprint(f"\n[bold]Next:[/bold] {choice.display_name} [dim]({choice.id})[/dim]{teaching}")


@app.command("plan")
def plan_session(
    player: str = PLAYER_OPTION,
    skill: str | None = typer.Option(None, "--skill", "-s", help="Practise this skill (skips warm-up)"),
) -> None:
    """Build a practice session plan."""
    service = _get_service()
    try:
        plan = service.start_session(player, skill)
    except (NoEligibleSkillError, UnknownSkillError) as e:
        _fail(e)

    table = Table(title=f"Session plan: {service.catalog.get(plan.primary_skill_id).display_name}")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Skill", style="cyan")
    table.add_column("Slot")
    for i, slot in enumerate(plan.slots, start=1):
        if slot.is_flagged_retry:
            kind = "[red]retry[/red]"
        elif slot.skill_id == plan.primary_skill_id:
            kind = "focus"
        else:
            kind = "[yellow]warm-up[/yellow]"
        table.add_row(str(i), service.catalog.get(slot.skill_id).display_name, kind)

    console.print(table)
    summary = plan.get_summary()
    rprint(
        f"\n[bold]{summary['focus_slots']}/{summary['total_slots']}[/bold] focus slots, "
        f"[bold]{summary['flagged_retries']}[/bold] flagged retries"
    )


@app.command("record")
def record_answer(
    skill: str = typer.Argument(..., help="Skill id the question belonged to"),
    player: str = PLAYER_OPTION,
    correct: bool = typer.Option(True, "--correct/--wrong", help="Whether the answer was right"),
    time_ms: int = typer.Option(5000, "--time-ms", "-t", help="Response time in milliseconds"),
    question: str | None = typer.Option(None, "--question", "-q", help="Question text (enables flagging)"),
    answer: str | None = typer.Option(None, "--answer", "-a", help="Expected answer"),
    user_answer: str | None = typer.Option(None, "--user-answer", help="What the player answered"),
) -> None:
    """Record an answer and update mastery and review schedule."""
    service = _get_service()
    try:
        service.catalog.get(skill)
    except UnknownSkillError as e:
        _fail(e)

    asked = Question(question_text=question, answer=answer) if question else None
    feedback = service.record_answer(
        player, skill, correct, time_ms, question=asked, user_answer=user_answer
    )
    outcome = feedback.outcome

    content = Text()
    content.append("Correct!\n" if correct else "Not quite.\n", style="bold green" if correct else "bold red")
    content.append(f"Mastery: {_format_progress_bar(outcome.new_mastery)} {outcome.new_mastery}%\n")
    content.append(f"Level:   {outcome.new_level}")
    if outcome.leveled_up:
        content.append("  (level up!)", style="green")
    elif outcome.leveled_down:
        content.append("  (level down)", style="yellow")
    content.append("\n")
    content.append(f"Note:    {outcome.assessment_note.value}\n", style=outcome.assessment_note.color)
    if feedback.repetition is not None and feedback.repetition.next_due_at is not None:
        content.append(f"Review:  in {feedback.repetition.interval_days} day(s)\n", style="cyan")
    if outcome.should_show_hint:
        content.append("Hint suggested next time\n", style="dim")
    if feedback.flagged:
        content.append("Question flagged for a retry\n", style="red")
    if feedback.intervene:
        content.append("Two misses in a row: revisit the teaching step\n", style="bold yellow")

    console.print(Panel(content, title=service.catalog.get(skill).display_name, border_style="cyan"))


@app.command("progress")
def show_progress(player: str = PLAYER_OPTION) -> None:
    """Show mastery for every skill."""
    service = _get_service()
    overrides = service.store.get_unlock_overrides(player)

    table = Table(title=f"Progress: {player}")
    table.add_column("Skill", style="cyan")
    table.add_column("Lvl", justify="right")
    table.add_column("Mastery")
    table.add_column("Accuracy", justify="right")
    table.add_column("Best streak", justify="right")
    table.add_column("Note")

    for skill in service.catalog:
        record = service.mastery_record(player, skill.id)
        if not service.selector.is_unlocked(player, skill, overrides):
            table.add_row(f"[dim]{skill.display_name}[/dim]", "-", "[dim]locked[/dim]", "", "", "")
            continue
        note = record.assessment_note
        table.add_row(
            skill.display_name,
            str(record.level),
            f"{_format_progress_bar(record.mastery)} {record.mastery}%",
            f"{record.accuracy:.0%}" if record.total_attempts else "-",
            str(record.best_streak),
            f"[{note.color}]{note.value}[/{note.color}]" if note else "",
        )

    console.print(table)


@app.command("methods")
def rank_methods(
    problem: str = typer.Argument(..., help='Problem such as "58 + 39"'),
    solve: str | None = typer.Option(None, "--solve", help="Show worked steps for this method"),
    steps: bool = typer.Option(False, "--steps", help="Show worked steps for the best method"),
    comfort: list[str] = typer.Option(
        [], "--comfort", "-c", help="Learner comfort as method=level (novice|practising|confident|expert)"
    ),
) -> None:
    """Rank solving methods for an addition or subtraction problem."""
    scorer = MethodSuitabilityScorer(build_default_registry())
    try:
        parsed = ArithmeticProblem.parse(problem)
        comfort_map = _parse_comfort(comfort)
    except ValueError as e:
        _fail(e)

    candidates = scorer.applicable_methods(parsed)
    if comfort_map:
        candidates = scorer.personalize(candidates, comfort_map)

    if not candidates:
        rprint(f"[yellow]No method applies to {parsed}[/yellow]")
    else:
        table = Table(title=f"Methods for {parsed}")
        table.add_column("Method", style="cyan")
        table.add_column("Suitability", justify="right")
        if comfort_map:
            table.add_column("For you", justify="right")
        for candidate in candidates:
            method = scorer.registry.get(candidate.method_id)
            row = [method.name, str(candidate.suitability_score)]
            if comfort_map:
                row.append(f"{candidate.user_score:.0f}")
            table.add_row(*row)
        console.print(table)

    method_id = solve or (candidates[0].method_id if steps and candidates else None)
    if method_id is None:
        return

    try:
        solution = scorer.solve(parsed, method_id)
    except UnknownMethodError as e:
        _fail(e)

    content = Text()
    for i, step in enumerate(solution.steps, start=1):
        content.append(f"{i}. {step.description}: ", style="bold")
        content.append(f"{step.detail}\n")
        if step.note:
            content.append(f"   {step.note}\n", style="dim")
    if solution.ok:
        content.append(f"\nAnswer: {solution.answer}", style="bold green")
    else:
        content.append(f"\n{solution.error}", style="bold red")
    console.print(Panel(content, title=scorer.registry.get(method_id).name, border_style="cyan"))


@app.command("unlock")
def unlock_skill(
    skill: str = typer.Argument(..., help="Skill id to unlock"),
    player: str = PLAYER_OPTION,
) -> None:
    """Manually unlock a skill for a player, ignoring its prerequisite."""
    service = _get_service()
    try:
        descriptor = service.catalog.get(skill)
    except UnknownSkillError as e:
        _fail(e)

    service.store.unlock_skill(player, descriptor.id)
    rprint(f"[green]Unlocked[/green] {descriptor.display_name} for {player}")


def configure_logging(settings: Settings) -> None:
    """Route loguru output to stderr (and optionally a file) at the configured level."""
    logger.remove()
    logger.add(sys.stderr, level=settings.log_level)
    if settings.log_file:
        logger.add(settings.log_file, level="DEBUG", rotation="10 MB")


def main() -> None:
    """Entry point for the CLI."""
    configure_logging(get_settings())
    app()


if __name__ == "__main__":
    main()
