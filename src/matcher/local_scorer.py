"""
Keyword-overlap scoring between resume skills and a job description.
"""

from dataclasses import dataclass, field
from typing import Sequence

from shared.models import Job

NO_MATCH_REASON = "No direct skill matches found"


@dataclass(frozen=True)
class LocalScore:
    """Result of local scoring."""

    relevance: int
    reason: str
    matched_skills: list[str] = field(default_factory=list)


def score_locally(skills: Sequence[str], job: Job, points_per_match: int = 20) -> LocalScore:
    """
    Score a job by how many skills appear verbatim in its description.

    Each skill found (case-insensitive substring) is worth `points_per_match`.
    The score is not capped, so many matching skills can exceed 100.
    """
    description = job.job_description.lower()
    matched = [skill for skill in skills if skill.lower() in description]

    if matched:
        reason = f"Direct matches found: {', '.join(matched)}"
    else:
        reason = NO_MATCH_REASON

    return LocalScore(
        relevance=len(matched) * points_per_match,
        reason=reason,
        matched_skills=matched,
    )
