"""Custom exceptions for templating context."""

from pathlib import Path
from typing import Optional


class InvalidResumeError(ValueError):
    """
    Exception raised when the top-level resume input is not a mapping.

    Raised before any theme file is read. An empty mapping is valid input.
    """

    def __init__(self, message: str = "Expected input to be a valid resume object"):
        super().__init__(message)


class TemplateRenderError(Exception):
    """
    Exception raised when template rendering fails.

    Attributes:
        message: Error description
        template_name: Name of the template or partial being rendered
        template_path: Path to the template file
        original_error: The original Jinja2 error
    """

    def __init__(
        self,
        message: str,
        template_name: Optional[str] = None,
        template_path: Optional[Path] = None,
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.template_name = template_name
        self.template_path = template_path
        self.original_error = original_error

        # Build enhanced error message
        parts = [message]

        if template_name:
            parts.append(f"\nTemplate: {template_name}")
        if template_path:
            parts.append(f"Path: {template_path}")

        if original_error:
            parts.append(f"\nOriginal error: {str(original_error)}")

        super().__init__("\n".join(parts))
