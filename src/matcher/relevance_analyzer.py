"""
AI-assisted relevance analysis for jobs the keyword scorer could not settle.

Jobs are sent to the provider in small batches; a batch that fails or comes
back malformed is retried job by job, and a job that still fails gets a zero
score instead of an error.
"""

import json
from dataclasses import dataclass
from typing import Optional, Sequence

from loguru import logger

from shared.cache import ResponseCache, analysis_cache_key
from shared.llm import LLMClient
from shared.models import Job, RelevanceVerdict
from shared.parsing import parse_verdict, parse_verdicts
from shared.rate_limiter import RateLimitedScheduler

from .local_scorer import NO_MATCH_REASON

FAILED_REASON = "Failed to analyze relevance"

SCORING_CRITERIA = """Consider:
1. Direct skill matches
2. Related skills and technologies
3. Industry relevance
4. Experience level requirements"""


@dataclass(frozen=True)
class JobAnalysis:
    """AI relevance result for one job."""

    job: Job
    relevance: float
    reason: str


def build_job_prompt(skills: Sequence[str], job_description: str) -> str:
    return f"""Analyze the relevance of this job to the candidate's skills.

Skills: {json.dumps(list(skills))}

Job Description:
{job_description}

{SCORING_CRITERIA}

Respond with a score from 0 to 100 (0 = not relevant, 100 = highly relevant) and a brief explanation.
Format: {{"score": X, "reason": "Brief explanation"}}"""


def build_batch_prompt(skills: Sequence[str], jobs: Sequence[Job]) -> str:
    listing = "\n".join(
        f"Job {i}:\n{job.job_description}\n" for i, job in enumerate(jobs, 1)
    )
    return f"""Analyze the relevance of these {len(jobs)} jobs to the candidate's skills.

Skills: {json.dumps(list(skills))}

Jobs:
{listing}
{SCORING_CRITERIA}

For each job, respond with a score from 0 to 100 (0 = not relevant, 100 = highly relevant) and a brief explanation.
Return a JSON array with exactly {len(jobs)} objects, in the same order as the jobs above.
Format: [{{"score": X, "reason": "Brief explanation"}}, {{"score": Y, "reason": "Brief explanation"}}]"""


class RelevanceAnalyzer:
    """Scores job relevance with the AI provider."""

    def __init__(
        self,
        llm: LLMClient,
        scheduler: RateLimitedScheduler,
        cache: ResponseCache,
        batch_size: int = 5,
    ):
        if batch_size < 1:
            raise ValueError("batch_size must be at least 1")
        self.llm = llm
        self.scheduler = scheduler
        self.cache = cache
        self.batch_size = batch_size

    async def analyze_batch(
        self, skills: Sequence[str], jobs: Sequence[Job]
    ) -> list[JobAnalysis]:
        """
        Analyze jobs in groups of `batch_size`, preserving input order.

        Returns:
            One JobAnalysis per input job
        """
        groups = [
            list(jobs[i : i + self.batch_size]) for i in range(0, len(jobs), self.batch_size)
        ]
        logger.info(f"Analyzing {len(jobs)} jobs with AI in {len(groups)} batches")

        analyses: list[JobAnalysis] = []
        for index, group in enumerate(groups, 1):
            try:
                verdicts = await self._analyze_group(skills, group)
            except Exception as e:
                logger.warning(
                    f"Batch {index}/{len(groups)} failed ({e}), falling back to single-job analysis"
                )
                for job in group:
                    verdict = await self.analyze_job_relevance(skills, job.job_description)
                    analyses.append(JobAnalysis(job, verdict.score, verdict.reason))
                continue

            analyses.extend(
                JobAnalysis(job, verdict.score, verdict.reason)
                for job, verdict in zip(group, verdicts)
            )

        self.cache.purge_expired()
        return analyses

    async def _analyze_group(
        self, skills: Sequence[str], group: list[Job]
    ) -> list[RelevanceVerdict]:
        prompt = build_batch_prompt(skills, group)
        text = await self.scheduler.execute(lambda: self.llm.complete(prompt))
        return parse_verdicts(text, expected=len(group))

    async def analyze_job_relevance(
        self, skills: Sequence[str], job_description: str
    ) -> RelevanceVerdict:
        """
        Analyze a single job. Never raises for provider or parsing problems.

        Jobs that mention none of the skills get a zero score without a
        provider call.
        """
        cache_key = analysis_cache_key(skills, job_description)
        try:
            cached: Optional[RelevanceVerdict] = self.cache.get(cache_key)
            if cached is not None:
                logger.debug("Relevance cache hit")
                return cached

            description = job_description.lower()
            if not any(skill.lower() in description for skill in skills):
                return RelevanceVerdict(score=0, reason=NO_MATCH_REASON)

            prompt = build_job_prompt(skills, job_description)
            try:
                text = await self.scheduler.execute(lambda: self.llm.complete(prompt))
                verdict = parse_verdict(text)
            except Exception as e:
                logger.error(f"Error analyzing job relevance: {e}")
                return RelevanceVerdict(score=0, reason=FAILED_REASON)

            self.cache.put(cache_key, verdict)
            return verdict
        finally:
            self.cache.purge_expired()
