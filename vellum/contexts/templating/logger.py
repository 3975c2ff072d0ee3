"""
Templating context logger.

Provides logging interface for templating context with automatic [template] prefix.
All templating modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from vellum.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[template]"


def setup_templating_logger(log_dir: Path, theme_path: Path = None) -> Path:
    """
    Setup logger for templating context.

    Args:
        log_dir: Directory for this templating session
        theme_path: Theme directory, recorded in the provenance header

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="template",
        log_dir=log_dir,
        extra_provenance={"Theme": theme_path} if theme_path else None,
    )


# Wrapper functions with automatic [template] prefix


def _log_info(message: str) -> None:
    """Log info message with [template] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [template] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [template] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [template] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level templating-specific logging helpers


def log_render_start(resume_name: str, theme_path: Path) -> None:
    """Log start of an HTML render."""
    _log_info(f"Rendering {resume_name or '<unnamed resume>'}")
    _log_debug(f"  Theme: {theme_path}")


def log_partials_loaded(directory: Path, count: int) -> None:
    """Log how many partials a directory contributed."""
    _log_debug(f"Registered {count} partial(s) from {directory}")


def log_render_result(resume_name: str, html: str, elapsed_time: float) -> None:
    """Log a finished render with output size."""
    _log_success(
        f"{resume_name or '<unnamed resume>'}: rendered {len(html)} characters ({elapsed_time:.3f}s)"
    )
