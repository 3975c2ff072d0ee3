"""
Session logging for vellum commands.

Each CLI invocation (html, export, validate) logs into its own session directory
under LOGS_PATH. The templating context writes template.log and the rendering
context writes render.log. Every session log opens with a provenance header
naming the vellum version, the command line and the context's own settings
(theme directory, PDF renderer).

Contexts wrap this module in contexts/{templating,rendering}/logger.py and add
their [template] / [render] prefixes there.
"""

import os
import sys
from pathlib import Path

from dotenv import load_dotenv
from loguru import logger

from vellum import __version__

load_dotenv()

# Console threshold when a context doesn't pass one (VELLUM_LOG_LEVEL=DEBUG for renderer output)
DEFAULT_CONSOLE_LEVEL = os.getenv("VELLUM_LOG_LEVEL", "INFO")

# Renderer and template failures stand out on the console
LEVEL_COLORS = {
    "WARNING": "<yellow>",
    "ERROR": "<red>",
    "CRITICAL": "<bold><red>",
}

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {message}"
CONSOLE_FORMAT = "{time:HH:mm:ss} | <level>{level: <7}</level> | <level>{message}</level>"


def setup_logger(
    context_name: str,
    log_dir: Path,
    extra_provenance: dict = None,
    console_level: str = None,
) -> Path:
    """
    Start a logging session for one vellum context.

    Replaces any previous sinks, so the most recent command owns the console.
    The session file records DEBUG and above, including raw renderer output.

    Args:
        context_name: "template" or "render"; names the session log file
        log_dir: Session directory (e.g. outs/logs/export_20251114_123456)
        extra_provenance: Context settings for the provenance header
        console_level: Console threshold (default: VELLUM_LOG_LEVEL or INFO)

    Returns:
        Path to the session log file

    Example:
        log_file = setup_logger(
            context_name="render",
            log_dir=Path("outs/logs/export_20251114_123456"),
            extra_provenance={"PDF renderer": "wkhtmltopdf"},
        )
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(exist_ok=True, parents=True)
    log_file = log_dir / f"{context_name}.log"

    logger.remove()
    for level_name, color in LEVEL_COLORS.items():
        logger.level(level_name, color=color)

    logger.add(log_file, format=FILE_FORMAT, level="DEBUG")
    logger.add(
        sys.stdout,
        format=CONSOLE_FORMAT,
        level=console_level or DEFAULT_CONSOLE_LEVEL,
        colorize=True,
    )

    log_provenance(context_name, extra_provenance)
    return log_file


def log_provenance(context_name: str, extra_context: dict = None) -> None:
    """Write the session header: vellum version, command line and context settings."""
    logger.info("=" * 80)
    logger.info(f"vellum {__version__} [{context_name}] session")
    logger.info(f"Command: {' '.join(sys.argv)}")
    logger.info(f"Working directory: {Path.cwd()}")
    logger.info(f"Python: {sys.version.split()[0]}")

    for key, value in (extra_context or {}).items():
        logger.info(f"{key}: {value}")

    logger.info("=" * 80)
