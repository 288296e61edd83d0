"""
Process-wide service objects.

The AI client, the rate-limit scheduler and both response caches live for
the whole process, so every upload shares one quota and one set of cached
provider results.
"""

from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from .cache import ResponseCache
from .config import Settings, get_settings
from .llm import LLMClient
from .rate_limiter import RateLimitedScheduler


@dataclass
class Services:
    settings: Settings
    llm: LLMClient
    scheduler: RateLimitedScheduler
    extraction_cache: ResponseCache
    analysis_cache: ResponseCache

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "Services":
        settings = settings or get_settings()
        return cls(
            settings=settings,
            llm=LLMClient(settings),
            scheduler=RateLimitedScheduler.from_settings(settings),
            extraction_cache=ResponseCache("extraction", ttl_seconds=settings.cache_ttl_seconds),
            analysis_cache=ResponseCache("analysis", ttl_seconds=settings.cache_ttl_seconds),
        )


@lru_cache
def get_services() -> Services:
    """Get the process-wide services instance."""
    return Services.from_settings(get_settings())
