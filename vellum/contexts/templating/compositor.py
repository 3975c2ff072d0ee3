"""
Template Compositor

Assembles the stylesheet, main template, partials and helpers of a theme with a
resume record into a single HTML document.
"""

import os
import time
from pathlib import Path
from typing import Any, Mapping, Optional, Union

from dotenv import load_dotenv
from jinja2 import ChainableUndefined, Environment, TemplateError

from vellum.contexts.templating.exceptions import InvalidResumeError, TemplateRenderError
from vellum.contexts.templating.helpers import HELPERS, TESTS
from vellum.contexts.templating.logger import log_render_result, log_render_start
from vellum.contexts.templating.registries import TEMPLATE_EXTENSION, PartialRegistry

load_dotenv()

BUNDLED_THEME_PATH = Path(__file__).resolve().parents[2] / "theme"
THEME_PATH = Path(os.getenv("VELLUM_THEME_PATH") or BUNDLED_THEME_PATH)

STYLESHEET_FILENAME = "style.css"
MAIN_TEMPLATE_FILENAME = f"resume{TEMPLATE_EXTENSION}"
PARTIALS_DIRNAME = "partials"
VIEWS_DIRNAME = "views"


def resume_display_name(resume: Mapping[str, Any]) -> str:
    """Return basics.name of a resume record, or '' if absent."""
    basics = resume.get("basics")
    if isinstance(basics, Mapping):
        return str(basics.get("name") or "")
    return ""


def _blank_none(value: Any) -> Any:
    return "" if value is None else value


def build_partial_registry(theme_path: Path) -> PartialRegistry:
    """
    Build a fresh partial registry for a theme.

    partials/ is loaded first and must exist; views/ is loaded second, may be
    absent, and overrides same-named partials.
    """
    registry = PartialRegistry()
    registry.load_directory(theme_path / PARTIALS_DIRNAME)
    registry.load_optional_directory(theme_path / VIEWS_DIRNAME)
    return registry


def create_environment(registry: PartialRegistry) -> Environment:
    """
    Create a Jinja2 environment bound to a partial registry and the template helpers.

    Output is HTML-escaped by default; helpers returning Markup pass through.
    Missing resume fields (and JSON nulls) render as empty output instead of raising.
    Sections iterate only over lists, so a wrongly typed collection renders nothing.
    """
    env = Environment(
        loader=registry.loader(),
        autoescape=True,
        undefined=ChainableUndefined,
        finalize=_blank_none,
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.globals.update(HELPERS)
    env.tests.update(TESTS)
    return env


def render(resume: Mapping[str, Any], theme_path: Optional[Union[str, Path]] = None) -> str:
    """
    Render a resume record to a standalone HTML document.

    Args:
        resume: Resume record (JSON Resume layout). Every field is optional.
        theme_path: Theme directory containing style.css, resume.html.jinja,
                    partials/ and optionally views/. Defaults to VELLUM_THEME_PATH
                    or the bundled theme.

    Returns:
        HTML document with the stylesheet inlined

    Raises:
        InvalidResumeError: If resume is None or not a mapping (before any file access)
        OSError: If the stylesheet, main template or partials/ can't be read
        TemplateRenderError: If a template fails to compile or evaluate

    Example:
        >>> html = render({"basics": {"name": "Jane Doe"}})
        >>> "<title>Jane Doe</title>" in html
        True
    """
    if resume is None or not isinstance(resume, Mapping):
        raise InvalidResumeError()

    theme_path = Path(theme_path) if theme_path is not None else THEME_PATH
    resume_name = resume_display_name(resume)
    log_render_start(resume_name, theme_path)
    start_time = time.time()

    css = (theme_path / STYLESHEET_FILENAME).read_text(encoding="utf-8")
    main_template_path = theme_path / MAIN_TEMPLATE_FILENAME
    main_template_source = main_template_path.read_text(encoding="utf-8")

    registry = build_partial_registry(theme_path)
    env = create_environment(registry)

    try:
        template = env.from_string(main_template_source)
        html = template.render(css=css, resume=resume)
    except TemplateError as e:
        raise TemplateRenderError(
            "Failed to render resume template",
            template_name=getattr(e, "name", None) or MAIN_TEMPLATE_FILENAME,
            template_path=main_template_path,
            original_error=e,
        ) from e

    log_render_result(resume_name, html, time.time() - start_time)
    return html
