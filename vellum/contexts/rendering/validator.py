"""
Exported resume validation.

Checks an exported PDF for the properties a readable resume should have:
a sensible page count and file size, extractable text, the candidate's contact
details, and the name appearing before the first section.
"""

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Mapping, Optional, Union

from vellum.contexts.rendering.logger import log_validation_result, log_validation_start
from vellum.utils.pdf_processing import extract_text, normalize_for_matching, page_count

SECTION_HEADERS = ["Work Experience", "Experience", "Employment", "Education", "Skills", "Projects"]

DATE_PATTERNS = [
    re.compile(r"\d{4}\s*[-–]\s*\d{4}"),  # 2014-2016
    re.compile(r"\d{4}\s*[-–]\s*Present", re.IGNORECASE),  # 2014-Present
    re.compile(r"\d{1,2}/\d{4}"),  # 05/2014
    re.compile(r"[A-Z][a-z]{2}\s+\d{4}"),  # May 2014
]

MIN_TEXT_LENGTH = 100
MIN_WORD_COUNT = 50


@dataclass
class ValidationResult:
    """
    Result of exported resume validation.

    Attributes:
        is_valid: Whether the PDF passes all checks
        page_count: Pages in the PDF (None if unreadable)
        text_length: Characters of extracted text
        word_count: Words of extracted text
        issues: Human-readable description of each failed check
    """

    is_valid: bool
    page_count: Optional[int] = None
    text_length: int = 0
    word_count: int = 0
    issues: List[str] = field(default_factory=list)


def _check_contact_details(text: str, resume: Mapping[str, Any]) -> List[str]:
    """Check that name, email, phone and website from the resume appear in the text."""
    issues = []
    basics = resume.get("basics")
    if not isinstance(basics, Mapping):
        return issues
    text_norm = normalize_for_matching(text)

    name = basics.get("name")
    if name and normalize_for_matching(name) not in text_norm:
        issues.append(f"Name not found: {name}")

    email = basics.get("email")
    if email and normalize_for_matching(email) not in text_norm:
        issues.append(f"Email not found: {email}")

    phone = basics.get("phone")
    if phone:
        digits = re.sub(r"\D", "", phone)
        # Renderers may reflow the number; the last four digits are enough
        if digits and digits not in text_norm and digits[-4:] not in text_norm:
            issues.append(f"Phone number not found: {phone}")

    website = basics.get("url") or basics.get("website")
    if website:
        domain = re.sub(r"^https?://", "", website, flags=re.IGNORECASE).rstrip("/")
        if normalize_for_matching(domain) not in text_norm:
            issues.append(f"Website not found: {website}")

    return issues


def _check_section_order(text: str, resume: Mapping[str, Any]) -> List[str]:
    """Check that the name precedes every section header found in the text."""
    basics = resume.get("basics")
    name = basics.get("name") if isinstance(basics, Mapping) else None
    if not name:
        return []

    name_pos = text.find(name)
    if name_pos == -1:
        return []

    positions = {header: text.find(header) for header in SECTION_HEADERS}
    found = {header: pos for header, pos in positions.items() if pos != -1}
    if not found:
        return ["No section header found"]

    return [
        f'Name should appear before the "{header}" section'
        for header, pos in found.items()
        if pos < name_pos
    ]


def _has_dated_entries(resume: Mapping[str, Any]) -> bool:
    for section in ("work", "education", "volunteer", "projects"):
        entries = resume.get(section)
        if isinstance(entries, list) and any(
            isinstance(e, Mapping) and (e.get("startDate") or e.get("endDate")) for e in entries
        ):
            return True
    return False


def validate_pdf(
    pdf_path: Union[str, Path],
    resume: Optional[Mapping[str, Any]] = None,
    min_pages: int = 1,
    max_pages: int = 3,
    min_size_kb: float = 5,
    max_size_kb: float = 2000,
) -> ValidationResult:
    """
    Validate an exported resume PDF.

    Args:
        pdf_path: PDF to check
        resume: Resume record the PDF was exported from. Enables the contact,
                date and section-order checks.
        min_pages: Fewest acceptable pages
        max_pages: Most acceptable pages
        min_size_kb: Smallest acceptable file size
        max_size_kb: Largest acceptable file size

    Returns:
        ValidationResult listing every failed check

    Example:
        >>> result = validate_pdf("outs/resume.pdf", resume)
        >>> result.is_valid
        True
    """
    pdf_path = Path(pdf_path)
    log_validation_start(pdf_path)

    if not pdf_path.exists():
        result = ValidationResult(is_valid=False, issues=[f"PDF not found: {pdf_path}"])
        log_validation_result(result)
        return result

    issues = []

    pages = page_count(pdf_path)
    if pages is None:
        issues.append("PDF could not be read")
    elif not min_pages <= pages <= max_pages:
        issues.append(f"Page count {pages} outside {min_pages}-{max_pages}")

    size_kb = pdf_path.stat().st_size / 1024
    if size_kb < min_size_kb:
        issues.append(f"PDF too small ({size_kb:.1f}KB < {min_size_kb}KB)")
    elif size_kb > max_size_kb:
        issues.append(f"PDF too large ({size_kb:.1f}KB > {max_size_kb}KB)")

    text = extract_text(pdf_path)
    word_count = len(text.split())
    if len(text) <= MIN_TEXT_LENGTH or word_count <= MIN_WORD_COUNT:
        issues.append(f"Too little extractable text ({len(text)} characters, {word_count} words)")

    if resume is not None and text:
        issues.extend(_check_contact_details(text, resume))
        issues.extend(_check_section_order(text, resume))
        if _has_dated_entries(resume) and not any(p.search(text) for p in DATE_PATTERNS):
            issues.append("No formatted dates found")

    result = ValidationResult(
        is_valid=not issues,
        page_count=pages,
        text_length=len(text),
        word_count=word_count,
        issues=issues,
    )
    log_validation_result(result)
    return result
