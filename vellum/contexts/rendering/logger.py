"""
Rendering context logger.

Provides logging interface for rendering context with automatic [render] prefix.
All rendering modules should import from this module, not from utils.logger directly.
"""

import os
from pathlib import Path

from dotenv import load_dotenv
from loguru import logger

from vellum.utils.logger import setup_logger as _setup_logger

load_dotenv()

CONTEXT_PREFIX = "[render]"


def setup_rendering_logger(log_dir: Path, console_level: str = None) -> Path:
    """
    Setup logger for rendering context.

    Configures loguru with provenance tracking and rendering-specific context.

    Args:
        log_dir: Directory for this rendering session
        console_level: Minimum level shown on the console (default: VELLUM_LOG_LEVEL or INFO)

    Returns:
        Path to log file

    Example:
        from vellum.contexts.rendering.logger import setup_rendering_logger

        log_file = setup_rendering_logger(log_dir)
    """
    return _setup_logger(
        context_name="render",
        log_dir=log_dir,
        extra_provenance={"PDF renderer": os.getenv("VELLUM_PDF_RENDERER", "wkhtmltopdf")},
        console_level=console_level,
    )


# Wrapper functions with automatic [render] prefix


def _log_info(message: str) -> None:
    """Log info message with [render] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [render] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [render] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [render] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [render] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level rendering-specific logging helpers


def log_export_start(resume_name: str, pdf_path: Path, renderer: str) -> None:
    """Log start of a PDF export with context."""
    _log_info(f"Starting export: {resume_name or '<unnamed resume>'}")
    _log_debug(f"  Output: {pdf_path}")
    _log_debug(f"  Renderer: {renderer}")


def log_export_result(
    resume_name: str,
    result,  # ExportResult
    elapsed_time: float,
    verbose: bool = False,
) -> None:
    """
    Log export result with diagnostics.

    Args:
        resume_name: Resume identifier
        result: ExportResult from export_pdf()
        elapsed_time: Time taken to export
        verbose: Log full renderer output even on success
    """
    resume_name = resume_name or "<unnamed resume>"
    if result.success:
        _log_success(f"{resume_name}: exported {result.page_count} page(s) ({elapsed_time:.2f}s)")
        if result.pdf_path:
            _log_debug(f"  PDF: {result.pdf_path}")
    else:
        _log_error(f"{resume_name}: export failed with {len(result.errors)} error(s) ({elapsed_time:.2f}s)")
        for i, err in enumerate(result.errors, 1):
            _log_error(f"  Error {i}: {err}")

    for warning in result.warnings:
        _log_warning(warning)

    # Bypass the format template so multi-line renderer output stays readable
    if verbose or not result.success:
        if result.stdout:
            logger.opt(raw=True).debug(
                f"\n{'=' * 80}\nRENDERER STDOUT:\n{'=' * 80}\n{result.stdout}\n"
            )
        if result.stderr:
            logger.opt(raw=True).debug(
                f"\n{'=' * 80}\nRENDERER STDERR:\n{'=' * 80}\n{result.stderr}\n"
            )


def log_validation_start(pdf_path: Path) -> None:
    """Log start of PDF validation."""
    _log_info(f"Validating {pdf_path}")


def log_validation_result(result) -> None:
    """Log validation result and each issue found."""
    if result.is_valid:
        _log_success(f"Validation passed ({result.page_count} page(s), {result.word_count} words)")
    else:
        _log_error(f"Validation failed with {len(result.issues)} issue(s)")
        for issue in result.issues:
            _log_error(f"  {issue}")
