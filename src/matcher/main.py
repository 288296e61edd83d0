"""
Matcher Service - Main entry point.
Extracts skills from a resume and ranks the job catalog against them.
"""

import asyncio
import json
import sys
from pathlib import Path
from typing import Any, Optional

import click
from loguru import logger

from extractor.document import extract_text
from extractor.skill_extractor import build_extractor
from shared.config import Settings, get_settings
from shared.database import Database
from shared.errors import DocumentError, ExtractionError
from shared.services import Services, get_services

from .orchestrator import build_matcher


def setup_logging(settings: Optional[Settings] = None):
    """Configure loguru logging."""
    settings = settings or get_settings()
    logger.remove()

    if settings.log_format == "json":
        logger.add(
            sys.stderr,
            format="{message}",
            level=settings.log_level,
            serialize=True,
        )
    else:
        logger.add(
            sys.stderr,
            format=(
                "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
                "<level>{level: <8}</level> | "
                "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
                "<level>{message}</level>"
            ),
            level=settings.log_level,
        )


async def process_resume(
    resume_path: Path,
    predict_role: bool = False,
    services: Optional[Services] = None,
) -> dict[str, Any]:
    """
    Run the full upload flow for one resume file.

    Returns:
        Dict with extracted skills, experience and ranked matched jobs

    Raises:
        DocumentError: if the file cannot be read
        ExtractionError: if skill extraction fails
    """
    services = services or get_services()

    resume_text = extract_text(resume_path)
    if not resume_text.strip():
        raise DocumentError(f"Could not extract any text from {resume_path.name}")

    extractor = build_extractor(services)

    db = Database(services.settings)
    await db.connect()

    try:
        profile = await extractor.extract_skills(resume_text)

        matcher = build_matcher(db, services)
        matches = await matcher.match_jobs(profile.skills)

        result: dict[str, Any] = {
            "extracted_skills": profile.skills,
            "experience": profile.experience,
            "matched_jobs": [m.to_response() for m in matches],
        }

        if predict_role:
            role = await extractor.predict_job_role(
                resume_text, profile.skills, profile.experience
            )
            result["predicted_role"] = role.model_dump()

        logger.info(f"Resume processed: {len(matches)} matched jobs")
        return result

    finally:
        await db.disconnect()
        # The HTTP client is bound to this event loop; the next call reopens it
        await services.llm.close()


async def match_skills(skills: list[str], services: Optional[Services] = None) -> list[dict]:
    """Rank the catalog against an explicit skill list."""
    services = services or get_services()
    db = Database(services.settings)
    await db.connect()

    try:
        matcher = build_matcher(db, services)
        matches = await matcher.match_jobs(skills)
        return [m.to_response() for m in matches]
    finally:
        await db.disconnect()
        await services.llm.close()


async def search_catalog(query: str, settings: Optional[Settings] = None) -> list[dict]:
    """Text search over the job catalog."""
    db = Database(settings)
    await db.connect()

    try:
        jobs = await db.search_jobs(query)
        return [job.model_dump() for job in jobs]
    finally:
        await db.disconnect()


def _echo_json(data: Any) -> None:
    click.echo(json.dumps(data, indent=2, ensure_ascii=False, default=str))


@click.group()
def cli():
    """Resume Matcher - Ranks job postings against a resume."""
    setup_logging()


@cli.command()
@click.option(
    "--resume",
    "-r",
    "resume_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    required=True,
    help="Resume file (PDF or TXT)",
)
@click.option(
    "--predict-role",
    is_flag=True,
    help="Also predict the most suitable job role",
)
def match(resume_path: Path, predict_role: bool):
    """Extract skills from a resume and print matching jobs."""
    try:
        result = asyncio.run(process_resume(resume_path, predict_role=predict_role))
    except (DocumentError, ExtractionError) as e:
        logger.error(f"Resume processing error: {e}")
        raise click.ClickException(str(e))

    _echo_json(result)


@cli.command("match-skills")
@click.argument("skills", nargs=-1, required=True)
def match_skills_command(skills: tuple[str, ...]):
    """Print matching jobs for the given SKILLS."""
    _echo_json(asyncio.run(match_skills(list(skills))))


@cli.command()
@click.argument("query")
def search(query: str):
    """Search the job catalog by title, company, location or description."""
    try:
        jobs = asyncio.run(search_catalog(query))
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="QUERY")

    _echo_json(jobs)


if __name__ == "__main__":
    cli()
