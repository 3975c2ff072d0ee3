"""
Vellum - resume theme renderer

Renders a JSON Resume record into a single styled HTML document and hands it to
an external tool for PDF export.

Architecture:
- Templating Context: Template helpers, partial discovery, HTML composition
- Rendering Context: PDF export and post-export checks
"""

__version__ = "0.1.0"

from vellum.contexts.templating import InvalidResumeError, render

__all__ = ["render", "InvalidResumeError", "__version__"]
