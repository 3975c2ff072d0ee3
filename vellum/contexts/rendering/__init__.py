"""
Rendering Context

Responsibilities:
- Hands rendered HTML to the external PDF renderer
- Manages PDF page options
- Validates exported PDFs

Owns: PDF export, renderer invocation, output checks
Never: Modifies template content
"""

from vellum.contexts.rendering.exporter import (
    PDF_RENDER_OPTIONS,
    ExportResult,
    export_pdf,
    export_resume,
)
from vellum.contexts.rendering.validator import ValidationResult, validate_pdf

__all__ = [
    "PDF_RENDER_OPTIONS",
    "ExportResult",
    "export_pdf",
    "export_resume",
    "ValidationResult",
    "validate_pdf",
]
