"""Command-line interface for the job board engine."""

import json
from pathlib import Path
from typing import Any, List, Type, TypeVar

import typer
from pydantic import BaseModel, ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from jobboard_engine.config import settings
from jobboard_engine.core.errors import UnknownRoleError
from jobboard_engine.core.models import CandidateDescriptor, JobPostDescriptor
from jobboard_engine.lifecycle.status import allowed_actions, can_perform_action, is_valid_transition
from jobboard_engine.matching.engine import default_engine
from jobboard_engine.ranking.service import RankingService
from jobboard_engine.utils.logging import configure_logging

app = typer.Typer(
    name="jobboard",
    help="Job Board Engine - job post lifecycle rules and candidate matching",
    add_completion=False,
)
console = Console()


def _load_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        console.print(f"[red]File not found:[/red] {path}")
        raise typer.Exit(code=1)
    except json.JSONDecodeError as e:
        console.print(f"[red]Invalid JSON in {path}:[/red] {e}")
        raise typer.Exit(code=1)


M = TypeVar("M", bound=BaseModel)


def _validate(model: Type[M], data: Any, path: Path) -> M:
    try:
        return model.model_validate(data)
    except ValidationError as e:
        console.print(f"[red]Invalid {model.__name__} in {path}:[/red] {escape(str(e))}")
        raise typer.Exit(code=1)


def _load_model(model: Type[M], path: Path) -> M:
    return _validate(model, _load_json(path), path)


def _load_candidates(path: Path) -> List[CandidateDescriptor]:
    data = _load_json(path)
    if not isinstance(data, list):
        console.print(f"[red]Expected a JSON list of candidates in {path}[/red]")
        raise typer.Exit(code=1)
    return [_validate(CandidateDescriptor, item, path) for item in data]


@app.command()
def score(
    job_file: Path = typer.Argument(..., help="JSON file with one job post"),
    candidate_file: Path = typer.Argument(..., help="JSON file with one candidate"),
) -> None:
    """Score one candidate against one job post."""
    job = _load_model(JobPostDescriptor, job_file)
    candidate = _load_model(CandidateDescriptor, candidate_file)
    result = default_engine.score(job, candidate)

    table = Table(title=f"Match: job {job.id} / candidate {candidate.id}")
    table.add_column("Factor", style="cyan")
    table.add_column("Score", style="green", justify="right")
    for name, value in result.factors.model_dump().items():
        table.add_row(name, str(value))
    table.add_row("total", str(result.score), style="bold")

    console.print(table)


@app.command()
def rank(
    job_file: Path = typer.Argument(..., help="JSON file with one job post"),
    candidates_file: Path = typer.Argument(..., help="JSON file with a list of candidates"),
    limit: int = typer.Option(settings.ranking_default_limit, help="Number of candidates to keep"),
) -> None:
    """Rank verified candidates for a job post."""
    job = _load_model(JobPostDescriptor, job_file)
    candidates = _load_candidates(candidates_file)
    ranked = RankingService().top_candidates_for_job(job, candidates, limit)

    if not ranked:
        console.print("No eligible candidates")
        return

    table = Table(title=f"Top candidates for job {job.id}")
    table.add_column("#", justify="right")
    table.add_column("Candidate", style="cyan")
    table.add_column("Score", style="green", justify="right")
    for position, item in enumerate(ranked, start=1):
        table.add_row(str(position), str(item.candidate.name or item.candidate.id), str(item.score))

    console.print(table)


@app.command("can-perform")
def can_perform(
    role: str = typer.Argument(..., help="admin or employer"),
    status: str = typer.Argument(..., help="Current job status, e.g. PENDING"),
    action: str = typer.Argument(..., help="Requested action, e.g. activate"),
    deleted: bool = typer.Option(False, "--deleted", help="The post is soft deleted"),
    not_owner: bool = typer.Option(False, "--not-owner", help="The employer does not own the post"),
) -> None:
    """Check whether a role may perform an action on a job post."""
    try:
        allowed = can_perform_action(role, status, action, deleted, is_owner=not not_owner)
        options = allowed_actions(role, status, deleted, is_owner=not not_owner)
    except UnknownRoleError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(code=2)

    verdict = "[green]allowed[/green]" if allowed else "[red]refused[/red]"
    console.print(f"{role} {action} on {status}: {verdict}")
    console.print(f"Allowed actions: {', '.join(a.value for a in options) or 'none'}")


@app.command("transition-check")
def transition_check(
    current: str = typer.Argument(..., help="Current job status"),
    target: str = typer.Argument(..., help="Target status, or SOFT_DELETED"),
    deleted: bool = typer.Option(False, "--deleted", help="The post is soft deleted"),
) -> None:
    """Check whether a status transition is legal."""
    legal = is_valid_transition(current, target, deleted)
    verdict = "[green]legal[/green]" if legal else "[red]illegal[/red]"
    console.print(f"{current} -> {target}: {verdict}")


@app.command()
def config() -> None:
    """Show current configuration."""
    table = Table(title="Job Board Engine Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Debug Mode", str(settings.debug))
    table.add_row("Log Level", settings.log_level)
    table.add_row("Ranking Limit", str(settings.ranking_default_limit))
    table.add_row("Stale Post Days", str(settings.stale_post_days))
    table.add_row("Cache Enabled", str(settings.cache_enabled))
    table.add_row("Cache TTL", str(settings.cache_ttl))
    table.add_row("Cache Min Records", str(settings.cache_min_records))

    console.print(table)


@app.command()
def version() -> None:
    """Show version information."""
    from jobboard_engine import __version__
    console.print(f"Job Board Engine v{__version__}")


def main() -> None:
    """Main entry point."""
    configure_logging()
    app()


if __name__ == "__main__":
    main()
