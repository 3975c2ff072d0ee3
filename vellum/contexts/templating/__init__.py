"""
Templating Context

Responsibilities:
- Formats resume field values for display (template helpers)
- Discovers partial templates from theme directories
- Composes stylesheet, main template, partials and resume data into HTML

Owns: Theme templates, helper registry, HTML composition
Never: Produces PDFs or touches output files
"""

from vellum.contexts.templating.compositor import render
from vellum.contexts.templating.exceptions import InvalidResumeError, TemplateRenderError
from vellum.contexts.templating.helpers import (
    HELPERS,
    eq,
    format_address,
    format_date,
    get_value_if_diff_from_previous,
    wrap_mail,
    wrap_url,
)
from vellum.contexts.templating.registries import PartialRegistry

__all__ = [
    # Orchestrator
    "render",
    # Registry
    "PartialRegistry",
    # Helpers
    "HELPERS",
    "wrap_url",
    "wrap_mail",
    "format_address",
    "format_date",
    "get_value_if_diff_from_previous",
    "eq",
    # Errors
    "InvalidResumeError",
    "TemplateRenderError",
]
