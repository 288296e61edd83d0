"""
Category classification for skill sets.
Maps extracted skills to a coarse job domain used to pre-filter the catalog.
"""

from enum import Enum
from pathlib import Path
from typing import Optional, Sequence

import yaml
from loguru import logger


class Category(str, Enum):
    """Job domains, in tie-break order."""

    IT = "IT"
    ENGINEERING = "Engineering"
    SCIENCE = "Science"
    FINANCE = "Finance"
    HEALTHCARE = "Healthcare"
    EDUCATION = "Education"
    MARKETING = "Marketing"
    OPERATIONS = "Operations"
    LEGAL = "Legal"
    OTHER = "Other"


CATEGORY_KEYWORDS: dict[Category, tuple[str, ...]] = {
    Category.IT: (
        "javascript", "python", "java", "node.js", "react", "angular", "vue", "sql", "aws",
        "azure", "docker", "kubernetes", "devops", "cloud", "database", "full stack",
        "backend", "frontend", "software", "developer", "engineer", "programming", "coding",
        "tech", "technology",
    ),
    Category.ENGINEERING: (
        "civil", "mechanical", "electrical", "structural", "mechanics", "materials",
        "drafting", "cad", "autocad", "solidworks", "revit", "engineer", "engineering",
        "design", "construction",
    ),
    Category.SCIENCE: (
        "biology", "chemistry", "physics", "research", "laboratory", "lab", "microbiology",
        "genetics", "biochemistry", "pharmaceutical", "science", "scientist", "researcher",
    ),
    Category.FINANCE: (
        "finance", "accounting", "financial", "banking", "investment", "analyst",
        "financial analyst", "accountant", "cpa", "tax", "audit",
    ),
    Category.HEALTHCARE: (
        "nurse", "doctor", "medical", "healthcare", "hospital", "clinical", "pharmacy",
        "pharmacist", "physician", "health", "care",
    ),
    Category.EDUCATION: (
        "teacher", "education", "professor", "instructor", "teaching", "school",
        "university", "training", "tutor",
    ),
    Category.MARKETING: (
        "marketing", "advertising", "sales", "promotion", "digital marketing", "content",
        "social media", "brand", "strategy", "market",
    ),
    Category.OPERATIONS: (
        "operations", "logistics", "supply chain", "management", "operations manager",
        "logistics coordinator", "supply chain analyst",
    ),
    Category.LEGAL: (
        "law", "legal", "attorney", "lawyer", "paralegal", "legal assistant", "litigation",
        "compliance", "contract",
    ),
    Category.OTHER: (),
}


class CategoryClassifier:
    """Picks the category whose keywords best cover a skill set."""

    def __init__(self, keywords_path: Optional[Path] = None):
        self.keywords: dict[Category, tuple[str, ...]] = dict(CATEGORY_KEYWORDS)

        if keywords_path:
            self.load_keywords(keywords_path)

    def load_keywords(self, path: Path) -> None:
        """
        Override keyword lists from a YAML mapping of category name to keywords.

        Raises:
            ValueError: if the file is not a `categories:` mapping of lists
        """
        if not path.exists():
            logger.warning(f"Category keywords file not found: {path}")
            return

        with open(path) as f:
            data = yaml.safe_load(f) or {}

        categories = (data.get("categories") or {}) if isinstance(data, dict) else None
        if not isinstance(categories, dict):
            raise ValueError(f"{path}: expected a 'categories' mapping of category to keywords")

        loaded = 0
        for name, keywords in categories.items():
            try:
                category = Category(name)
            except ValueError:
                logger.warning(f"Ignoring unknown category: {name}")
                continue
            if category is Category.OTHER:
                continue
            if keywords is not None and not isinstance(keywords, list):
                raise ValueError(f"{path}: keywords for {name} must be a list")
            # Blank keywords would match every skill and description
            self.keywords[category] = tuple(
                str(k).lower().strip() for k in keywords or [] if k is not None and str(k).strip()
            )
            loaded += 1

        logger.info(f"Loaded keywords for {loaded} categories from {path}")

    def keywords_for(self, category: Category) -> tuple[str, ...]:
        return self.keywords.get(category, ())

    def classify(self, skills: Sequence[str]) -> Category:
        """
        Return the category matched by the most skills.

        A skill counts toward a category when it contains any of the
        category's keywords (case-insensitive). Ties go to the category
        listed first; no matches at all gives Category.OTHER.
        """
        best = Category.OTHER
        best_count = 0

        for category in Category:
            keywords = self.keywords_for(category)
            if not keywords:
                continue
            count = sum(
                1 for skill in skills if any(keyword in skill.lower() for keyword in keywords)
            )
            if count > best_count:
                best, best_count = category, count

        logger.debug(f"Classified {len(skills)} skills as {best.value} ({best_count} matches)")
        return best

    def matches_category(self, description: str, category: Category) -> bool:
        """Whether a job description mentions any keyword of the category."""
        text = description.lower()
        return any(keyword in text for keyword in self.keywords_for(category))
