"""Tests for AI skill and role extraction."""

from __future__ import annotations

import pytest

from conftest import FakeClock, StubLLM
from extractor.skill_extractor import SkillExtractor
from shared.cache import ResponseCache
from shared.config import Settings
from shared.errors import ExtractionError, ProviderError

RESUME = "Jane Doe\nSenior engineer. Python, Docker, AWS. 7 years.\nBSc Computer Science"


@pytest.fixture
def make_extractor(scheduler, clock: FakeClock):
    def _make(llm: StubLLM) -> SkillExtractor:
        cache = ResponseCache("extraction", ttl_seconds=24 * 3600, clock=clock)
        return SkillExtractor(llm, scheduler, cache, settings=Settings(resume_text_limit=20))

    return _make


async def test_extracts_skills_from_fenced_response(make_extractor) -> None:
    llm = StubLLM(
        '```json\n{"skills": ["Python", " Docker ", "AWS"], "experience": 7, '
        '"education": "Bachelor"}\n```'
    )
    profile = await make_extractor(llm).extract_skills(RESUME)

    assert profile.skills == ["Python", "Docker", "AWS"]
    assert profile.experience == 7
    assert profile.education == "Bachelor"


async def test_resume_text_is_truncated_in_prompt(make_extractor) -> None:
    llm = StubLLM('{"skills": []}')
    await make_extractor(llm).extract_skills(RESUME)

    assert RESUME[:20] in llm.prompts[0]
    assert "BSc Computer Science" not in llm.prompts[0]


async def test_missing_fields_get_defaults(make_extractor) -> None:
    profile = await make_extractor(StubLLM('{"skills": ["SQL"]}')).extract_skills(RESUME)
    assert profile.experience == 0
    assert profile.education == "Not specified"


async def test_invalid_response_yields_empty_profile(make_extractor) -> None:
    profile = await make_extractor(StubLLM('{"skills": "python"}')).extract_skills(RESUME)
    assert profile.skills == []
    assert profile.education == "Not specified"


async def test_extraction_is_cached_per_resume(make_extractor) -> None:
    llm = StubLLM('{"skills": ["Python"], "experience": 3}')
    extractor = make_extractor(llm)

    first = await extractor.extract_skills(RESUME)
    second = await extractor.extract_skills(RESUME)
    await extractor.extract_skills(RESUME + " more")

    assert first == second
    assert llm.calls == 2


async def test_provider_failure_raises_extraction_error(make_extractor) -> None:
    with pytest.raises(ExtractionError, match="Failed to process with AI"):
        await make_extractor(StubLLM(ProviderError("down"))).extract_skills(RESUME)


async def test_predict_job_role(make_extractor) -> None:
    llm = StubLLM('{"predictedRole": "Cloud Engineer", "confidence": "high", "reason": "AWS"}')
    extractor = make_extractor(llm)

    role = await extractor.predict_job_role(RESUME, ["Python", "AWS"], 7)

    assert role.predicted_role == "Cloud Engineer"
    assert role.confidence == "high"
    assert "Skills: Python, AWS" in llm.prompts[0]
    assert "Experience: 7 years" in llm.prompts[0]


async def test_role_and_skills_use_separate_cache_keys(make_extractor) -> None:
    llm = StubLLM('{"skills": ["Python"], "predictedRole": "Developer"}')
    extractor = make_extractor(llm)

    await extractor.extract_skills(RESUME)
    role = await extractor.predict_job_role(RESUME, ["Python"], 1)

    assert role.predicted_role == "Developer"
    assert role.confidence == "medium"
    assert llm.calls == 2


async def test_unparseable_role_falls_back_to_default(make_extractor) -> None:
    role = await make_extractor(StubLLM("I think: engineer")).predict_job_role(RESUME, [], 0)
    assert role.predicted_role == "Professional"
    assert role.confidence == "low"


async def test_changing_a_returned_profile_leaves_cache_intact(make_extractor) -> None:
    llm = StubLLM('{"skills": ["Python", "AWS"], "experience": 3}')
    extractor = make_extractor(llm)

    first = await extractor.extract_skills(RESUME)
    first.skills.append("Cobol")
    second = await extractor.extract_skills(RESUME)
    second.skills.clear()
    third = await extractor.extract_skills(RESUME)

    assert third.skills == ["Python", "AWS"]
    assert llm.calls == 1
