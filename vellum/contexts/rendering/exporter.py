"""
PDF Export Module

Hands rendered resume HTML to an external PDF renderer (wkhtmltopdf by default)
running in a subprocess.
"""

import os
import subprocess
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Mapping, Optional, Union

from dotenv import load_dotenv
from omegaconf import DictConfig, OmegaConf

from vellum.contexts.rendering.logger import (
    _log_debug,
    log_export_result,
    log_export_start,
)
from vellum.contexts.templating.compositor import render, resume_display_name
from vellum.utils.pdf_processing import page_count

load_dotenv()

PDF_RENDERER = os.getenv("VELLUM_PDF_RENDERER", "wkhtmltopdf")
PDF_OPTIONS_PATH = Path(__file__).with_name("pdf_options.yaml")

# Page format and media type expected by the theme's stylesheet
PDF_RENDER_OPTIONS: DictConfig = OmegaConf.load(PDF_OPTIONS_PATH)

MARGIN_SIDES = ("top", "bottom", "left", "right")


@dataclass
class ExportResult:
    """
    Result of a PDF export.

    Attributes:
        success: Whether a PDF was produced
        pdf_path: Path to generated PDF (None if failed)
        html_path: Path to the intermediate HTML file (None once removed)
        stdout: Standard output from the renderer
        stderr: Standard error from the renderer
        errors: Reasons the export failed
        warnings: Non-fatal problems (e.g. non-zero exit with a PDF produced)
        page_count: Number of pages in generated PDF (None if not available)
    """

    success: bool
    pdf_path: Optional[Path] = None
    html_path: Optional[Path] = None
    stdout: str = ""
    stderr: str = ""
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    page_count: Optional[int] = None


def resolve_pdf_options(overrides: Optional[Mapping[str, Any]] = None) -> DictConfig:
    """Merge option overrides onto the default PDF render options."""
    return OmegaConf.merge(PDF_RENDER_OPTIONS, overrides or {})


def build_renderer_command(
    renderer: str, html_file: Path, pdf_file: Path, options: DictConfig
) -> List[str]:
    """
    Build the wkhtmltopdf-style command line for one export.

    Args:
        renderer: Renderer executable
        html_file: Input HTML file
        pdf_file: Output PDF file
        options: Resolved PDF render options (format, media_type, margin)

    Returns:
        Command as an argument list
    """
    cmd = [renderer, "--quiet", "--encoding", "utf-8", "--page-size", str(options.format)]

    if options.media_type == "print":
        cmd.append("--print-media-type")
    else:
        cmd.append("--no-print-media-type")

    margin = options.get("margin") or {}
    for side in MARGIN_SIDES:
        if margin.get(side) is not None:
            cmd.extend([f"--margin-{side}", str(margin[side])])

    cmd.extend(["--enable-local-file-access", str(html_file), str(pdf_file)])
    return cmd


def export_pdf(
    html: str,
    pdf_path: Union[str, Path],
    options: Optional[Mapping[str, Any]] = None,
    renderer: Optional[str] = None,
    timeout: Optional[float] = None,
    keep_html: bool = False,
) -> ExportResult:
    """
    Convert an HTML document to PDF with the external renderer.

    The HTML is written next to the PDF (same stem, .html suffix) and passed to
    the renderer by path. Renderer failures are reported in the result, never raised.

    Args:
        html: Rendered HTML document
        pdf_path: Destination PDF path (parent directories are created)
        options: Overrides for PDF_RENDER_OPTIONS
        renderer: Renderer executable (default: VELLUM_PDF_RENDERER or wkhtmltopdf)
        timeout: Seconds before the renderer is killed (default: no timeout)
        keep_html: Keep the intermediate HTML file

    Returns:
        ExportResult with success status and diagnostic information
    """
    pdf_path = Path(pdf_path).resolve()
    pdf_path.parent.mkdir(parents=True, exist_ok=True)
    html_path = pdf_path.with_suffix(".html")
    renderer = renderer or PDF_RENDERER

    html_path.write_text(html, encoding="utf-8")

    # Stale output would make a failed run look successful
    if pdf_path.exists():
        pdf_path.unlink()

    cmd = build_renderer_command(renderer, html_path, pdf_path, resolve_pdf_options(options))
    _log_debug(f"Running: {' '.join(cmd)}")

    errors: List[str] = []
    warnings: List[str] = []
    stdout = ""
    stderr = ""

    try:
        completed = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            timeout=timeout,
        )
        stdout, stderr = completed.stdout or "", completed.stderr or ""
        if completed.returncode != 0:
            message = f"{renderer} exited with status {completed.returncode}"
            if stderr.strip():
                message += f": {stderr.strip().splitlines()[-1]}"
            warnings.append(message)
    except FileNotFoundError:
        errors.append(f"PDF renderer not found: {renderer}")
    except subprocess.TimeoutExpired:
        errors.append(f"{renderer} timed out after {timeout}s")

    # A produced PDF counts as success even on a non-zero exit (renderers
    # exit non-zero for unreachable assets while still writing the document)
    success = pdf_path.exists() and not errors
    if not success:
        errors.extend(warnings)
        warnings = []
        if not errors:
            errors.append("PDF file was not generated")

    if not keep_html and html_path.exists():
        html_path.unlink()

    return ExportResult(
        success=success,
        pdf_path=pdf_path if success else None,
        html_path=html_path if keep_html else None,
        stdout=stdout,
        stderr=stderr,
        errors=errors,
        warnings=warnings,
        page_count=page_count(pdf_path) if success else None,
    )


def export_resume(
    resume: Mapping[str, Any],
    pdf_path: Union[str, Path],
    theme_path: Optional[Union[str, Path]] = None,
    options: Optional[Mapping[str, Any]] = None,
    renderer: Optional[str] = None,
    timeout: Optional[float] = None,
    keep_html: bool = False,
    verbose: bool = False,
) -> ExportResult:
    """
    Render a resume record to HTML and export it to PDF.

    Orchestration function that wraps render() and export_pdf() with logging.

    Raises:
        InvalidResumeError: If resume is not a mapping
        OSError: If mandatory theme files can't be read
        TemplateRenderError: If the theme fails to render
    """
    html = render(resume, theme_path=theme_path)

    resume_name = resume_display_name(resume)
    log_export_start(resume_name, Path(pdf_path), renderer or PDF_RENDERER)
    start_time = time.time()

    result = export_pdf(
        html,
        pdf_path,
        options=options,
        renderer=renderer,
        timeout=timeout,
        keep_html=keep_html,
    )

    log_export_result(resume_name, result, time.time() - start_time, verbose=verbose)
    return result
