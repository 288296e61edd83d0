# Shared module for common utilities, models, and configuration
from .cache import ResponseCache, stable_hash
from .config import Settings, get_settings
from .database import Database
from .errors import (
    DocumentError,
    ExtractionError,
    MatcherError,
    ParseError,
    ProviderError,
    QuotaExceeded,
)
from .models import Job, Provenance, RelevanceVerdict, ResumeProfile, RolePrediction, ScoredJob
from .rate_limiter import RateLimitedScheduler, TokenBucket
from .services import Services, get_services

__all__ = [
    "ResponseCache",
    "stable_hash",
    "Settings",
    "get_settings",
    "Database",
    "DocumentError",
    "ExtractionError",
    "MatcherError",
    "ParseError",
    "ProviderError",
    "QuotaExceeded",
    "Job",
    "Provenance",
    "RelevanceVerdict",
    "ResumeProfile",
    "RolePrediction",
    "ScoredJob",
    "RateLimitedScheduler",
    "TokenBucket",
    "Services",
    "get_services",
]
