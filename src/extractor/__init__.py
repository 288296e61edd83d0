# Extractor service - resume text and AI skill extraction
from .document import extract_text
from .skill_extractor import SkillExtractor, build_extractor

__all__ = ["extract_text", "SkillExtractor", "build_extractor"]
