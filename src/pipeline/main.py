"""
Skill Match - Main entry point.

Usage:
    # Analyze a job (normal + hidden requirements)
    skillmatch analyze-job jobs/backend.yaml

    # Match a candidate against an analyzed job
    skillmatch match candidates/ada.yaml --job-id 42

    # Read a stored result as a candidate would see it
    skillmatch show --candidate-id ada --job-id 42 --role candidate

    # Public requirements of a job, and all of a candidate's matches
    skillmatch show-job 42 --role candidate
    skillmatch matches ada --role candidate

    # Triage all candidates of a job
    skillmatch rank 42
"""

import asyncio
import json
from dataclasses import asdict
from pathlib import Path
from typing import Any, Awaitable, Callable, Optional

import click
from loguru import logger

from shared.database import Database
from shared.errors import InputError, PersistenceError
from shared.log import setup_logging

from .inputs import load_candidate_profile, load_job_posting
from .service import MatchingService


def _echo_json(data: Any) -> None:
    click.echo(json.dumps(data, indent=2, default=str))


def _fail(error: Exception) -> click.ClickException:
    logger.error(str(error))
    return click.ClickException(str(error))


def _load(loader: Callable[[Path], Any], path: Path) -> Any:
    """Read an input file, reporting invalid content as a CLI error."""
    try:
        return loader(path)
    except InputError as e:
        raise _fail(e) from e


def _run(action: Callable[[MatchingService], Awaitable[Any]]) -> Any:
    """Connect, run one action against the service, always disconnect."""

    async def run():
        db = Database()
        await db.connect()
        try:
            return await action(MatchingService(db))
        finally:
            await db.disconnect()

    try:
        return asyncio.run(run())
    except (InputError, PersistenceError) as e:
        raise _fail(e) from e


role_option = click.option(
    "--role",
    "-r",
    type=click.Choice(["operator", "admin", "candidate"], case_sensitive=False),
    default="candidate",
    help="Caller role, decides which fields are visible",
)


@click.group()
@click.option("--log-level", "-l", default=None, help="Override LOG_LEVEL (e.g. DEBUG)")
def main(log_level: Optional[str]):
    """Skill Match - explainable candidate/job matching."""
    setup_logging(level=log_level)


@main.command("init-db")
def init_db():
    """Create database indexes."""

    async def action(service: MatchingService):
        await service.store.ensure_indexes()

    _run(action)
    click.echo("Indexes created")


@main.command("analyze-job")
@click.argument("job_file", type=click.Path(exists=True, path_type=Path))
def analyze_job(job_file: Path):
    """Extract normal and hidden requirements from a job posting file (operator view)."""
    job = _load(load_job_posting, job_file)
    requirements = _run(lambda service: service.analyze_job(job))
    _echo_json(requirements.model_dump(mode="json"))


@main.command("match")
@click.argument("candidate_file", type=click.Path(exists=True, path_type=Path))
@click.option("--job-id", "-j", required=True, help="Job to match against")
@click.option(
    "--job-file",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Job posting file for experience range, work mode and location",
)
def match(candidate_file: Path, job_id: str, job_file: Optional[Path]):
    """Match a candidate profile against an analyzed job (operator view)."""
    profile = _load(load_candidate_profile, candidate_file)
    job = _load(load_job_posting, job_file) if job_file else None
    result = _run(lambda service: service.match_candidate(profile, job_id, job))
    _echo_json(result.model_dump(mode="json"))


@main.command("show")
@click.option("--candidate-id", "-c", required=True)
@click.option("--job-id", "-j", required=True)
@role_option
def show(candidate_id: str, job_id: str, role: str):
    """Show a stored match result filtered for a role."""
    view = _run(lambda service: service.get_result(candidate_id, job_id, role))
    if view is None:
        raise click.ClickException(f"No match result for candidate {candidate_id}, job {job_id}")
    _echo_json(view)


@main.command("show-job")
@click.argument("job_id")
@role_option
def show_job(job_id: str, role: str):
    """Show a job's stored requirements filtered for a role."""
    view = _run(lambda service: service.get_requirements(job_id, role))
    if view is None:
        raise click.ClickException(f"Job {job_id} has not been analyzed yet")
    _echo_json(view)


@main.command("matches")
@click.argument("candidate_id")
@role_option
def matches(candidate_id: str, role: str):
    """List every stored match result of a candidate, filtered for a role."""
    _echo_json(_run(lambda service: service.candidate_matches(candidate_id, role)))


@main.command("delete")
@click.option("--candidate-id", "-c", required=True)
@click.option("--job-id", "-j", required=True)
def delete(candidate_id: str, job_id: str):
    """Delete a stored match result."""
    if not _run(lambda service: service.delete_result(candidate_id, job_id)):
        raise click.ClickException(f"No match result for candidate {candidate_id}, job {job_id}")
    click.echo(f"Deleted match result {candidate_id}/{job_id}")


@main.command("rank")
@click.argument("job_id")
@click.option("--top", "-t", type=int, default=None, help="Only the best N at or above --min-score")
@click.option("--min-score", "-m", type=int, default=60)
def rank(job_id: str, top: Optional[int], min_score: int):
    """Rank a job's candidates by full score (Shortlist / Hold / Reject)."""
    if top is not None:
        results = _run(lambda service: service.top_matches(job_id, limit=top, min_score=min_score))
        _echo_json(
            [
                {
                    "candidate_id": r.candidate_id,
                    "overall_score": r.overall_score,
                    "match_grade": r.match_grade,
                    "matched_skills": [m.skill_name for m in r.matched_skills],
                    "strengths": r.ai_insights.strengths,
                }
                for r in results
            ]
        )
        return

    ranking = _run(lambda service: service.rank_job(job_id))
    _echo_json([asdict(row) for row in ranking])


@main.command("stats")
@click.argument("job_id")
def stats(job_id: str):
    """Per-grade score statistics for a job."""
    statistics = _run(lambda service: service.job_statistics(job_id))
    _echo_json(asdict(statistics))


if __name__ == "__main__":
    main()
