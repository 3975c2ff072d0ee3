"""
PDF processing utilities for checking exported resumes.

Helper functions:
    page_count: Quick page count without full extraction.
    extract_text: Plain text of all pages, in reading order.
    pdf_metadata: Document information dictionary.
    normalize_for_matching: Text normalization for fuzzy matching.
"""

from pathlib import Path
from typing import Dict, Optional

import pdfplumber
from PyPDF2 import PdfReader
from PyPDF2.errors import PdfReadError


def page_count(pdf_path: Path) -> Optional[int]:
    """Get page count from PDF, or None if unreadable."""
    try:
        reader = PdfReader(str(pdf_path))
        return len(reader.pages)
    except Exception:
        return None


def pdf_metadata(pdf_path: Path) -> Dict[str, str]:
    """Get the document information dictionary ("/Title", "/Producer", ...), or {} if absent."""
    try:
        reader = PdfReader(str(pdf_path))
        info = reader.metadata
    except (OSError, PdfReadError):
        return {}
    if info is None:
        return {}
    return {str(key): str(value) for key, value in info.items()}


def extract_text(pdf_path: Path, max_pages: int = 20) -> str:
    """
    Extract plain text from a PDF.

    Args:
        pdf_path: Path to PDF file
        max_pages: Stop after this many pages

    Returns:
        Text of each page joined by newlines ('' if the PDF can't be parsed)
    """
    try:
        with pdfplumber.open(pdf_path) as pdf:
            pages = [page.extract_text() or "" for page in pdf.pages[:max_pages]]
    except Exception:
        return ""
    return "\n".join(pages)


def normalize_for_matching(text: str) -> str:
    """Keep only lowercase alphanumeric characters for fuzzy text matching."""
    return "".join(c for c in text.lower() if c.isalnum())
