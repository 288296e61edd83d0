"""
Pydantic models for jobs, match results and AI responses.
"""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class Provenance(str, Enum):
    """Where a relevance score came from."""

    LOCAL = "local"  # Keyword overlap only
    AI = "ai"  # Scored by the AI provider


class Job(BaseModel):
    """Job posting as stored in the catalog."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: Optional[str] = Field(default=None, description="Catalog document ID")
    company_name: str = Field(default="", description="Company name")
    job_title: str = Field(default="", description="Job title")
    job_location: str = Field(default="", description="Job location")
    apply_link: str = Field(default="", description="Application URL")
    job_description: str = Field(default="", description="Full job description")
    source: str = Field(default="", description="Where the posting was collected")

    @classmethod
    def from_document(cls, doc: dict[str, Any]) -> "Job":
        """Build a Job from a raw MongoDB document."""
        data = {k: v for k, v in doc.items() if k in cls.model_fields and v is not None}
        if doc.get("_id") is not None:
            data["id"] = str(doc["_id"])
        return cls(**data)


class RelevanceVerdict(BaseModel):
    """A single {score, reason} object returned by the AI provider."""

    model_config = ConfigDict(frozen=True)

    score: float
    reason: str = ""


class ScoredJob(BaseModel):
    """A job annotated with its relevance for one resume."""

    job: Job
    relevance: float
    reason: str
    provenance: Provenance

    def to_response(self) -> dict[str, Any]:
        """Flatten into the job fields plus relevance and reason."""
        payload = self.job.model_dump()
        payload["relevance"] = self.relevance
        payload["reason"] = self.reason
        return payload


class ResumeProfile(BaseModel):
    """Skills and background extracted from a resume."""

    skills: list[str] = Field(default_factory=list)
    experience: float = 0
    education: str = "Not specified"


class RolePrediction(BaseModel):
    """Most suitable job role for a resume."""

    predicted_role: str = "Professional"
    confidence: str = "medium"
    reason: str = "Based on skills and experience"
