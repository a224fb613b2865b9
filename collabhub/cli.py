"""CLI for inspecting engine output on profile/startup JSON files."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, TypeVar

import click
from pydantic import BaseModel, ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from collabhub.config import Config
from collabhub.insights.confidence import confidence_label
from collabhub.insights.founder import founder_quick_summary, generate_founder_insights
from collabhub.insights.talent import generate_talent_insights
from collabhub.models import AIInsight, Profile, Startup
from collabhub.scoring.compatibility import score_compatibility, talent_quick_fit
from collabhub.scoring.skill_gap import analyze_skill_gap, completion_message
from collabhub.scoring.trust import calculate_trust_score, earned_badges
from collabhub.security.rate_limit import RATE_LIMITS

console = Console()

ModelT = TypeVar("ModelT", bound=BaseModel)

_json_file = click.Path(exists=True, dir_okay=False, path_type=Path)


def _load(model: type[ModelT], path: Path) -> ModelT:
    try:
        return model.model_validate_json(path.read_text())
    except ValidationError as e:
        console.print(f"[red]❌ {path} is not a valid {model.__name__}:[/]\n{escape(str(e))}")
        raise SystemExit(1)


def _print_insight(insight: AIInsight) -> None:
    console.print(f"\n  [bold]{insight.title}[/] [dim]({confidence_label(insight.confidence)})[/]")
    console.print(f"    {insight.summary}")
    for reason in insight.reasoning:
        console.print(f"      • {reason}")


@click.group()
@click.option(
    "--log-level",
    default=Config.LOG_LEVEL,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    help="Logging verbosity (default: LOG_LEVEL or INFO).",
)
def cli(log_level: str):
    """🤝 CollabHub — decision-support & trust engine"""
    logging.basicConfig(
        level=log_level.upper(),
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


@cli.command(name="skill-gap")
@click.argument("startup_file", type=_json_file)
@click.option(
    "--candidate-skill", "-c",
    multiple=True,
    help="Skill brought by an interested candidate (repeatable).",
)
def skill_gap(startup_file: Path, candidate_skill: tuple[str, ...]):
    """Show which stage-implied skills the team has and lacks."""
    startup = _load(Startup, startup_file)
    report = analyze_skill_gap(startup, candidate_skill)

    console.print(f"\n{'═' * 60}")
    console.print(f"[bold cyan]  {startup.name or startup.id}[/] — {startup.stage_label}")
    console.print(f"{'═' * 60}")
    console.print(f"  [bold]Team completeness: {report.completion_percentage}%[/]")
    console.print(f"  {completion_message(report.completion_percentage, report.suggested_roles)}")
    console.print(f"\n  Required: {', '.join(report.required_skills) or '—'}")
    console.print(f"  Team:     {', '.join(report.team_skills) or '—'}")
    if report.missing_skills:
        console.print(f"\n  [red]Missing:[/] {', '.join(report.missing_skills)}")
    if report.suggested_roles:
        console.print(f"  [green]Suggested hires:[/] {', '.join(report.suggested_roles)}")
    console.print(f"{'═' * 60}\n")


@cli.command()
@click.argument("profile_file", type=_json_file)
def trust(profile_file: Path):
    """Compute a profile's trust score with its breakdown."""
    profile = _load(Profile, profile_file)
    score = calculate_trust_score(profile)

    table = Table(
        title=f"🛡️ Trust Score — {profile.full_name or profile.id}",
        show_header=True,
        header_style="bold magenta",
    )
    table.add_column("Signal", style="cyan")
    table.add_column("Points", justify="right", style="bold")
    for item in score.breakdown:
        style = "green" if item.points > 0 else "dim"
        table.add_row(item.label, f"[{style}]+{item.points}/{item.max}[/]")
    console.print(table)

    console.print(f"\n  [bold]{score.total}/100 — {score.label}[/]")
    badges = earned_badges(profile)
    if badges:
        console.print(f"  Badges: {', '.join(b.label for b in badges)}")
    console.print()


@cli.command()
@click.argument("candidate_file", type=_json_file)
@click.argument("startup_file", type=_json_file)
@click.option("--team-skill", "-t", multiple=True, help="Skill already on the team (repeatable).")
@click.option("--base-score", "-b", type=float, default=None, help="Prior match score to start from.")
def match(
    candidate_file: Path,
    startup_file: Path,
    team_skill: tuple[str, ...],
    base_score: Optional[float],
):
    """Score a candidate's compatibility with a startup."""
    candidate = _load(Profile, candidate_file)
    startup = _load(Startup, startup_file)
    result = score_compatibility(candidate, startup, team_skill, base_score)

    console.print(f"\n{'═' * 60}")
    console.print(f"[bold cyan]  {candidate.full_name or candidate.id} → {startup.name or startup.id}[/]")
    console.print(f"{'═' * 60}")
    console.print(
        f"  [bold]Score: {result.compatibility_score}/100[/]  "
        f"{result.quality.emoji} {result.quality.label}"
    )
    console.print(f"\n  📝 {result.fit_summary}")
    console.print(f"\n  Recommended role: [bold]{result.recommended_role.title}[/]")
    console.print(f"    {result.recommended_role.responsibility}")

    if result.strengths:
        console.print(f"\n  [green]✅ Strengths:[/]")
        for s in result.strengths:
            console.print(f"    • {s}")

    if result.risks:
        console.print(f"\n  [red]⚠️ Risks:[/]")
        for r in result.risks[:3]:
            console.print(f"    • {r}")

    console.print(f"\n  📈 {result.team_impact_prediction}")
    console.print(f"  💡 {result.optional_insight}")
    console.print(f"{'═' * 60}\n")


@cli.command(name="founder-insights")
@click.argument("startup_file", type=_json_file)
@click.option("--interested-skill", "-i", multiple=True, help="Skill of an interested talent (repeatable).")
@click.option("--interest-count", "-n", default=0, help="Number of interested talents (default: 0).")
def founder_insights(startup_file: Path, interested_skill: tuple[str, ...], interest_count: int):
    """Generate founder-facing insights for a startup."""
    startup = _load(Startup, startup_file)
    insights = generate_founder_insights(startup, interested_skill, interest_count)

    console.print(f"\n[bold blue]🧠 {founder_quick_summary(startup)}[/]")
    _print_insight(insights.health_summary)
    for action in insights.next_actions:
        _print_insight(action)
    if insights.hiring_priority:
        _print_insight(insights.hiring_priority)
    console.print()


@cli.command(name="talent-insights")
@click.argument("candidate_file", type=_json_file)
@click.argument("startup_file", type=_json_file)
@click.option("--match-score", "-m", type=float, default=None, help="Prior match score, if known.")
def talent_insights(candidate_file: Path, startup_file: Path, match_score: Optional[float]):
    """Generate talent-facing insights for a startup."""
    candidate = _load(Profile, candidate_file)
    startup = _load(Startup, startup_file)
    insights = generate_talent_insights(candidate, startup, match_score)

    console.print(f"\n[bold blue]✨ {talent_quick_fit(candidate, startup, match_score).label}[/]")
    _print_insight(insights.fit_summary)
    console.print("\n  [bold]Why you're a good fit[/]")
    for reason in insights.why_good_fit:
        console.print(f"    • {reason}")
    _print_insight(insights.impact_prediction)
    console.print()


@cli.command()
def limits():
    """List per-action hourly quotas and check configuration."""
    table = Table(title="⏱️ Rate Limits", show_header=True, header_style="bold magenta")
    table.add_column("Action", style="cyan", no_wrap=True)
    table.add_column("Per window", justify="right", style="bold")
    for action, limit in RATE_LIMITS.items():
        table.add_row(action, str(limit))
    console.print(table)
    console.print(f"  Window: {Config.RATE_LIMIT_WINDOW_SECONDS}s")

    problems = Config.validate()
    if problems:
        console.print(f"[red]❌ Config problems: {'; '.join(problems)}[/]")
        raise SystemExit(1)


if __name__ == "__main__":
    cli()
