"""Shared fixtures: stub AI provider, fake clock, in-memory job catalog."""

from __future__ import annotations

from typing import Callable, Union

import pytest

from matcher.categories import CategoryClassifier
from matcher.orchestrator import JobMatcher
from matcher.relevance_analyzer import RelevanceAnalyzer
from shared.cache import ResponseCache
from shared.models import Job
from shared.rate_limiter import RateLimitedScheduler, TokenBucket

Reply = Union[str, Exception]


class FakeClock:
    """Manually advanced clock."""

    def __init__(self, start: float = 1_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class StubLLM:
    """AI provider stand-in that records prompts and answers via a callback."""

    def __init__(self, reply: Union[Reply, Callable[[str], Reply]]) -> None:
        self._reply = reply
        self.prompts: list[str] = []
        self.closed = 0

    @property
    def calls(self) -> int:
        return len(self.prompts)

    @property
    def batch_calls(self) -> int:
        return sum(1 for p in self.prompts if is_batch_prompt(p))

    async def complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        reply = self._reply(prompt) if callable(self._reply) else self._reply
        if isinstance(reply, Exception):
            raise reply
        return reply

    async def close(self) -> None:
        self.closed += 1


class FakeJobStore:
    """In-memory job catalog."""

    def __init__(self, jobs: list[Job] | None = None, error: Exception | None = None) -> None:
        self.jobs = jobs or []
        self.error = error
        self.calls = 0

    async def find_all_jobs(self) -> list[Job]:
        self.calls += 1
        if self.error:
            raise self.error
        return list(self.jobs)


class SleepRecorder:
    """Replacement for asyncio.sleep that returns immediately."""

    def __init__(self) -> None:
        self.waits: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.waits.append(seconds)


def is_batch_prompt(prompt: str) -> bool:
    return "Return a JSON array" in prompt


def make_job(description: str, title: str = "Engineer", company: str = "Acme") -> Job:
    return Job(
        id=f"{company}-{title}-{abs(hash(description)) % 10_000}",
        company_name=company,
        job_title=title,
        job_location="Remote",
        apply_link="https://example.com/apply",
        job_description=description,
        source="test",
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def sleep() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture
def scheduler(sleep: SleepRecorder) -> RateLimitedScheduler:
    return RateLimitedScheduler(TokenBucket(points=1_000, duration=60), key="test-api", sleep=sleep)


@pytest.fixture
def analysis_cache(clock: FakeClock) -> ResponseCache:
    return ResponseCache("analysis", ttl_seconds=24 * 3600, clock=clock)


@pytest.fixture
def make_analyzer(scheduler: RateLimitedScheduler, analysis_cache: ResponseCache):
    def _make(llm: StubLLM, batch_size: int = 5) -> RelevanceAnalyzer:
        return RelevanceAnalyzer(llm, scheduler, analysis_cache, batch_size=batch_size)

    return _make


@pytest.fixture
def make_matcher(make_analyzer):
    def _make(llm: StubLLM, store: FakeJobStore) -> JobMatcher:
        return JobMatcher(store, CategoryClassifier(), make_analyzer(llm))

    return _make
