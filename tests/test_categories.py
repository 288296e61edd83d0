"""Tests for skill-set category classification."""

from __future__ import annotations

from pathlib import Path

import pytest

from matcher.categories import Category, CategoryClassifier


def test_classifies_software_skills_as_it() -> None:
    classifier = CategoryClassifier()
    assert classifier.classify(["Python", "Docker", "AWS"]) is Category.IT


def test_no_keyword_overlap_gives_other() -> None:
    classifier = CategoryClassifier()
    assert classifier.classify(["juggling", "origami"]) is Category.OTHER
    assert classifier.classify([]) is Category.OTHER


def test_substring_match_is_case_insensitive() -> None:
    classifier = CategoryClassifier()
    assert classifier.classify(["Registered NURSE"]) is Category.HEALTHCARE


def test_highest_count_wins() -> None:
    classifier = CategoryClassifier()
    skills = ["accounting", "tax preparation", "python"]
    assert classifier.classify(skills) is Category.FINANCE


def test_tie_goes_to_first_category_in_order() -> None:
    classifier = CategoryClassifier()
    # One IT skill and one Legal skill
    assert classifier.classify(["kubernetes", "litigation"]) is Category.IT
    # One Finance skill and one Legal skill
    assert classifier.classify(["litigation", "audit"]) is Category.FINANCE


def test_skill_counts_toward_several_categories() -> None:
    classifier = CategoryClassifier()
    # "engineer" is an IT and an Engineering keyword; "autocad" only Engineering
    assert classifier.classify(["civil engineer", "autocad"]) is Category.ENGINEERING


def test_matches_category_checks_description_keywords() -> None:
    classifier = CategoryClassifier()
    assert classifier.matches_category("Senior Python Developer", Category.IT)
    assert not classifier.matches_category("Barista wanted", Category.IT)
    assert not classifier.matches_category("Anything at all", Category.OTHER)


def test_load_keywords_overrides_lists(tmp_path: Path) -> None:
    path = tmp_path / "categories.yaml"
    path.write_text(
        "categories:\n"
        "  Legal:\n"
        "    - Notary\n"
        "  Unknown:\n"
        "    - anything\n",
        encoding="utf-8",
    )
    classifier = CategoryClassifier(path)

    assert classifier.keywords_for(Category.LEGAL) == ("notary",)
    assert classifier.classify(["notary public"]) is Category.LEGAL
    # Other lists are untouched
    assert "python" in classifier.keywords_for(Category.IT)


def test_missing_keywords_file_keeps_defaults(tmp_path: Path) -> None:
    classifier = CategoryClassifier(tmp_path / "missing.yaml")
    assert classifier.classify(["python"]) is Category.IT


def test_blank_and_null_keywords_are_dropped(tmp_path: Path) -> None:
    path = tmp_path / "categories.yaml"
    path.write_text(
        "categories:\n"
        "  Legal:\n"
        "    - ''\n"
        "    - '   '\n"
        "    - null\n"
        "    - Notary\n",
        encoding="utf-8",
    )
    classifier = CategoryClassifier(path)

    assert classifier.keywords_for(Category.LEGAL) == ("notary",)
    assert not classifier.matches_category("Barista wanted", Category.LEGAL)
    assert classifier.classify(["juggling"]) is Category.OTHER


@pytest.mark.parametrize(
    "content",
    [
        "- python\n- docker\n",
        "just a string\n",
        "categories:\n  - IT\n",
        "categories:\n  IT: python\n",
    ],
)
def test_malformed_keywords_file_is_rejected(tmp_path: Path, content: str) -> None:
    path = tmp_path / "categories.yaml"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(ValueError, match="categories.yaml"):
        CategoryClassifier(path)
