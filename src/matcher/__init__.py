"""
Matcher Service - resume-to-job relevance ranking.

Classifies a resume's skills into a job category, scores the catalog by
keyword overlap and refines inconclusive results with the AI provider.
"""

from .categories import Category, CategoryClassifier
from .local_scorer import LocalScore, score_locally
from .orchestrator import JobMatcher, build_matcher
from .relevance_analyzer import JobAnalysis, RelevanceAnalyzer

__all__ = [
    "Category",
    "CategoryClassifier",
    "LocalScore",
    "score_locally",
    "JobMatcher",
    "build_matcher",
    "JobAnalysis",
    "RelevanceAnalyzer",
]
