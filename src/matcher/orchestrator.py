"""
Job matching orchestration.

classify skills → filter catalog by category → score locally →
return strong local matches, or refine the rest with AI analysis.
"""

from typing import Optional, Protocol, Sequence

from loguru import logger

from shared.models import Job, Provenance, ScoredJob
from shared.services import Services, get_services

from .categories import CategoryClassifier
from .local_scorer import score_locally
from .relevance_analyzer import RelevanceAnalyzer


class JobStore(Protocol):
    """Read-only job catalog."""

    async def find_all_jobs(self) -> list[Job]: ...


class JobMatcher:
    """Ranks the job catalog against a resume's skills."""

    def __init__(
        self,
        store: JobStore,
        classifier: CategoryClassifier,
        analyzer: RelevanceAnalyzer,
        points_per_match: int = 20,
        local_match_threshold: float = 60,
        ai_match_threshold: float = 50,
    ):
        self.store = store
        self.classifier = classifier
        self.analyzer = analyzer
        self.points_per_match = points_per_match
        self.local_match_threshold = local_match_threshold
        self.ai_match_threshold = ai_match_threshold

    async def match_jobs(self, skills: Sequence[str]) -> list[ScoredJob]:
        """
        Return matching jobs ordered by descending relevance.

        Never raises: any failure is logged and yields an empty list.
        """
        try:
            return await self._match(skills)
        except Exception:
            logger.exception("Error matching jobs")
            return []

    async def _match(self, skills: Sequence[str]) -> list[ScoredJob]:
        skills = tuple(s.strip() for s in skills if s and s.strip())
        if not skills:
            logger.info("No skills to match against")
            return []

        category = self.classifier.classify(skills)
        logger.info(f"Matching {len(skills)} skills, category: {category.value}")

        jobs = await self.store.find_all_jobs()
        candidates = [
            job for job in jobs if self.classifier.matches_category(job.job_description, category)
        ]
        logger.info(f"{len(candidates)}/{len(jobs)} jobs in category {category.value}")

        local_matches = []
        for job in candidates:
            local = score_locally(skills, job, self.points_per_match)
            if local.relevance > 0:
                local_matches.append(
                    ScoredJob(
                        job=job,
                        relevance=local.relevance,
                        reason=local.reason,
                        provenance=Provenance.LOCAL,
                    )
                )

        if any(m.relevance >= self.local_match_threshold for m in local_matches):
            logger.info(
                f"Found strong local matches, returning {len(local_matches)} jobs without AI"
            )
            return _ranked(local_matches)

        if not local_matches:
            return []

        analyses = await self.analyzer.analyze_batch(skills, [m.job for m in local_matches])
        results = [
            ScoredJob(
                job=a.job,
                relevance=a.relevance,
                reason=a.reason,
                provenance=Provenance.AI,
            )
            for a in analyses
            if a.relevance >= self.ai_match_threshold
        ]
        logger.info(f"AI analysis kept {len(results)}/{len(analyses)} jobs")
        return _ranked(results)


def _ranked(matches: list[ScoredJob]) -> list[ScoredJob]:
    return sorted(matches, key=lambda m: m.relevance, reverse=True)


def build_matcher(store: JobStore, services: Optional[Services] = None) -> JobMatcher:
    """Wire a JobMatcher onto the process-wide client, scheduler and cache."""
    services = services or get_services()
    settings = services.settings
    analyzer = RelevanceAnalyzer(
        llm=services.llm,
        scheduler=services.scheduler,
        cache=services.analysis_cache,
        batch_size=settings.analysis_batch_size,
    )
    return JobMatcher(
        store=store,
        classifier=CategoryClassifier(settings.categories_path),
        analyzer=analyzer,
        points_per_match=settings.local_points_per_match,
        local_match_threshold=settings.local_match_threshold,
        ai_match_threshold=settings.ai_match_threshold,
    )
