"""
Plain-text extraction from uploaded resume files.
"""

from pathlib import Path

from loguru import logger
from pypdf import PdfReader
from pypdf.errors import PdfReadError

from shared.errors import DocumentError


def extract_text(path: Path) -> str:
    """Return plain text from a PDF or TXT resume."""
    if not path.exists():
        raise DocumentError(f"Resume file not found: {path}")

    suffix = path.suffix.lower()
    if suffix in (".txt", ".md"):
        return path.read_text(encoding="utf-8", errors="ignore")
    if suffix == ".pdf":
        return _extract_pdf(path)
    raise DocumentError(f"Unsupported resume format: {suffix}")


def _extract_pdf(path: Path) -> str:
    try:
        reader = PdfReader(str(path))
        pages = [page.extract_text() or "" for page in reader.pages]
    except (PdfReadError, OSError) as e:
        raise DocumentError(f"Failed to parse PDF file: {e}") from e

    text = "\n".join(pages)
    logger.info(f"Extracted {len(text)} characters from {len(pages)} pages of {path.name}")
    return text
