"""
AI extraction of skills, experience and a suggested role from resume text.
"""

from typing import Any, Callable, Optional, Sequence, TypeVar

from loguru import logger
from pydantic import BaseModel

from shared.cache import ResponseCache, extraction_cache_key
from shared.config import Settings, get_settings
from shared.errors import ExtractionError, ParseError
from shared.llm import LLMClient
from shared.models import ResumeProfile, RolePrediction
from shared.parsing import parse_json_payload
from shared.rate_limiter import RateLimitedScheduler
from shared.services import Services, get_services

M = TypeVar("M", bound=BaseModel)


def _parse_profile(text: str) -> ResumeProfile:
    try:
        data = parse_json_payload(text)
        if not isinstance(data, dict):
            raise ParseError("Expected a JSON object")
        skills = data.get("skills")
        if not isinstance(skills, list):
            raise ParseError("Invalid skills format")
        return ResumeProfile(
            skills=[str(s).strip() for s in skills if str(s).strip()],
            experience=_as_number(data.get("experience")),
            education=str(data.get("education") or "Not specified"),
        )
    except ParseError as e:
        logger.error(f"Failed to parse skills response: {e}")
        return ResumeProfile()


def _parse_role(text: str) -> RolePrediction:
    try:
        data = parse_json_payload(text)
        if not isinstance(data, dict):
            raise ParseError("Expected a JSON object")
        return RolePrediction(
            predicted_role=str(data.get("predictedRole") or "Professional"),
            confidence=str(data.get("confidence") or "medium"),
            reason=str(data.get("reason") or "Based on skills and experience"),
        )
    except ParseError as e:
        logger.error(f"Failed to parse job role prediction: {e}")
        return RolePrediction(
            predicted_role="Professional",
            confidence="low",
            reason="Default role based on general skills",
        )


def _as_number(value: Any) -> float:
    try:
        return float(value or 0)
    except (TypeError, ValueError):
        return 0


class SkillExtractor:
    """Extracts structured data from resumes with the AI provider."""

    def __init__(
        self,
        llm: LLMClient,
        scheduler: RateLimitedScheduler,
        cache: ResponseCache,
        settings: Optional[Settings] = None,
    ):
        self.settings = settings or get_settings()
        self.llm = llm
        self.scheduler = scheduler
        self.cache = cache

    async def _extract(self, prompt: str, cache_key: str, parse: Callable[[str], M]) -> M:
        cached = self.cache.get(cache_key)
        if cached is not None:
            return cached.model_copy(deep=True)

        try:
            text = await self.scheduler.execute(lambda: self.llm.complete(prompt))
        except Exception as e:
            logger.error(f"AI extraction failed: {e}")
            raise ExtractionError(f"Failed to process with AI: {e}") from e

        result = parse(text)
        self.cache.put(cache_key, result)
        return result.model_copy(deep=True)

    async def extract_skills(self, resume_text: str) -> ResumeProfile:
        """
        Extract skills, years of experience and education level.

        Raises:
            ExtractionError: if the provider call fails
        """
        prompt = f"""Given the following resume content, extract a list of relevant professional skills.
Return a JSON object with:
- skills: array of technical skills and tools
- experience: years of experience as a number
- education: highest education level

Resume:
{resume_text[: self.settings.resume_text_limit]}"""

        profile = await self._extract(
            prompt, extraction_cache_key("skills", resume_text), _parse_profile
        )
        logger.info(f"Extracted {len(profile.skills)} skills, {profile.experience} years experience")
        return profile

    async def predict_job_role(
        self, resume_text: str, skills: Sequence[str], experience: float
    ) -> RolePrediction:
        """
        Predict the most suitable job title for a resume.

        Raises:
            ExtractionError: if the provider call fails
        """
        prompt = f"""Based on the following resume content, skills, and experience, predict the most suitable job role.
Return a JSON object with:
- predictedRole: most suitable job title
- confidence: high/medium/low
- reason: brief explanation

Resume Summary:
{resume_text[: self.settings.role_text_limit]}

Skills: {', '.join(skills)}
Experience: {experience} years"""

        return await self._extract(
            prompt, extraction_cache_key("role", resume_text), _parse_role
        )


def build_extractor(services: Optional[Services] = None) -> SkillExtractor:
    """Wire a SkillExtractor onto the process-wide client, scheduler and cache."""
    services = services or get_services()
    return SkillExtractor(
        llm=services.llm,
        scheduler=services.scheduler,
        cache=services.extraction_cache,
        settings=services.settings,
    )
