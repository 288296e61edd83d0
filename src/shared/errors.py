"""
Error types shared by the matcher and extractor services.
"""


class MatcherError(Exception):
    """Base class for all matcher errors."""


class ProviderError(MatcherError):
    """Transport or API failure while calling the AI provider."""


class QuotaExceeded(MatcherError):
    """Rate limit hit, either locally or reported by the provider."""

    def __init__(self, ms_before_next: int, message: str = ""):
        self.ms_before_next = max(0, int(ms_before_next))
        super().__init__(message or f"Quota exceeded, retry in {self.ms_before_next}ms")


class ParseError(MatcherError):
    """Provider response was not the JSON shape we asked for."""


class ExtractionError(MatcherError):
    """Skill extraction from a resume failed."""


class DocumentError(MatcherError):
    """Resume document could not be read."""
