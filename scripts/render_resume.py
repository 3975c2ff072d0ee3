#!/usr/bin/env python3
"""
Resume Rendering CLI

Renders JSON Resume documents to HTML, exports them to PDF and validates exported PDFs.

Commands:
    html     - Render a resume to a standalone HTML file
    export   - Render a resume and export it to PDF
    validate - Check an exported PDF

Examples:\n

    render_resume.py html resume.json                         # Writes resume.html

    render_resume.py export resume.json outs/resume.pdf       # Export to PDF

    render_resume.py validate outs/resume.pdf -r resume.json  # Validate against source
"""

import os
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from vellum.contexts.rendering import export_resume, validate_pdf
from vellum.contexts.rendering.logger import setup_rendering_logger
from vellum.contexts.templating import InvalidResumeError, TemplateRenderError, render
from vellum.contexts.templating.logger import setup_templating_logger
from vellum.utils.resume_io import load_resume
from vellum.utils.timestamp import now

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))


app = typer.Typer(
    help="Render JSON Resume documents to HTML and PDF",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def _load_or_exit(resume_file: Path) -> dict:
    try:
        return load_resume(resume_file)
    except (OSError, ValueError) as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)


@app.command("html")
def html_command(
    resume_file: Annotated[
        Path,
        typer.Argument(help="JSON Resume file", exists=True, dir_okay=False),
    ],
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="HTML output path (default: alongside the JSON file)"),
    ] = None,
    theme: Annotated[
        Optional[Path],
        typer.Option("--theme", "-t", help="Theme directory (default: bundled theme)"),
    ] = None,
):
    """
    Render a resume to a standalone HTML file.

    Examples:\n

        $ render_resume.py html resume.json

        $ render_resume.py html resume.json -o site/index.html
    """
    setup_templating_logger(LOGS_PATH / f"html_{now()}", theme_path=theme)
    resume = _load_or_exit(resume_file)

    try:
        html = render(resume, theme_path=theme)
    except (InvalidResumeError, TemplateRenderError, OSError) as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    output = output or resume_file.with_suffix(".html")
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(html, encoding="utf-8")
    typer.secho(f"✓ HTML written to {output}", fg=typer.colors.GREEN, bold=True)


@app.command("export")
def export_command(
    resume_file: Annotated[
        Path,
        typer.Argument(help="JSON Resume file", exists=True, dir_okay=False),
    ],
    pdf_file: Annotated[
        Path,
        typer.Argument(help="PDF output path"),
    ],
    theme: Annotated[
        Optional[Path],
        typer.Option("--theme", "-t", help="Theme directory (default: bundled theme)"),
    ] = None,
    renderer: Annotated[
        Optional[str],
        typer.Option("--renderer", help="PDF renderer executable (default: VELLUM_PDF_RENDERER)"),
    ] = None,
    timeout: Annotated[
        Optional[float],
        typer.Option("--timeout", help="Seconds before the renderer is stopped", min=1),
    ] = None,
    keep_html: Annotated[
        bool,
        typer.Option("--keep-html", "-k", help="Keep the intermediate HTML next to the PDF"),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log full renderer output"),
    ] = False,
):
    """
    Render a resume and export it to PDF.

    Examples:\n

        $ render_resume.py export resume.json outs/resume.pdf

        $ render_resume.py export resume.json outs/resume.pdf --renderer /opt/bin/wkhtmltopdf
    """
    log_file = setup_rendering_logger(LOGS_PATH / f"export_{now()}")
    resume = _load_or_exit(resume_file)

    typer.secho(f"\nExporting: {resume_file}", fg=typer.colors.BLUE, bold=True)

    try:
        result = export_resume(
            resume,
            pdf_file,
            theme_path=theme,
            renderer=renderer,
            timeout=timeout,
            keep_html=keep_html,
            verbose=verbose,
        )
    except (InvalidResumeError, TemplateRenderError, OSError) as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    typer.echo("")
    if result.success:
        typer.secho("✓ Export succeeded", fg=typer.colors.GREEN, bold=True)
        typer.echo(f"  Pages: {result.page_count}")
        typer.echo(f"  PDF: {result.pdf_path}")
    else:
        typer.secho(
            f"✗ Export failed with {len(result.errors)} errors", fg=typer.colors.RED, bold=True
        )
        for error in result.errors[:10]:
            typer.secho(f"  - {error}", fg=typer.colors.RED)

    typer.echo(f"  Log: {log_file}")
    typer.echo("")

    raise typer.Exit(code=0 if result.success else 1)


@app.command("validate")
def validate_command(
    pdf_file: Annotated[
        Path,
        typer.Argument(help="Exported PDF to check"),
    ],
    resume_file: Annotated[
        Optional[Path],
        typer.Option(
            "--resume", "-r", help="JSON Resume the PDF was exported from", exists=True, dir_okay=False
        ),
    ] = None,
    max_pages: Annotated[
        int,
        typer.Option("--max-pages", help="Most acceptable pages", min=1),
    ] = 3,
):
    """
    Validate an exported resume PDF.

    Checks page count, file size and extractable text. With --resume, also checks
    that contact details appear and the name precedes every section.

    Examples:\n

        $ render_resume.py validate outs/resume.pdf

        $ render_resume.py validate outs/resume.pdf -r resume.json --max-pages 2
    """
    setup_rendering_logger(LOGS_PATH / f"validate_{now()}")
    resume = _load_or_exit(resume_file) if resume_file else None

    typer.secho(f"\nValidating: {pdf_file}", fg=typer.colors.BLUE, bold=True)
    result = validate_pdf(pdf_file, resume=resume, max_pages=max_pages)

    typer.echo("")
    if result.is_valid:
        typer.secho("✓ Validation passed", fg=typer.colors.GREEN, bold=True)
    else:
        typer.secho(f"✗ {len(result.issues)} issue(s) found", fg=typer.colors.RED, bold=True)
        for issue in result.issues:
            typer.secho(f"  - {issue}", fg=typer.colors.RED)
    typer.echo("")

    raise typer.Exit(code=0 if result.is_valid else 1)


if __name__ == "__main__":
    app()
