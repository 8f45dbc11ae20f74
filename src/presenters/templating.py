"""Template dispatch for presenters.

The presenter layer only computes the (directory, template_name, format)
triple; file lookup and rendering belong to the template engine. Partials
live at ``{directory}/_{template_name}.{format}.j2``.

Configuration (environment):
- PRESENTER_TEMPLATES_DIR: application template root, searched before the
  built-in shared templates
- PRESENTER_DEFAULT_FORMAT: format used when neither the caller nor the
  render context names one (default: html)
"""

import logging
import os
from pathlib import Path
from typing import Any, Optional, Protocol

from jinja2 import (
    BaseLoader,
    ChoiceLoader,
    Environment,
    FileSystemLoader,
    TemplateNotFound,
    select_autoescape,
)
from markupsafe import Markup

from .errors import TemplateNotFoundError
from .helpers import register_filters
from .schemas import RenderContext

logger = logging.getLogger(__name__)

TEMPLATES_DIR = os.environ.get("PRESENTER_TEMPLATES_DIR", "")
DEFAULT_FORMAT = os.environ.get("PRESENTER_DEFAULT_FORMAT", "html")

BUILTIN_TEMPLATES_DIR = Path(__file__).parent / "templates"


def resolve_format(format: Optional[str], context: Optional[RenderContext] = None) -> str:
    """Explicit format, else the render context's, else the configured default."""
    if format:
        return format
    if context is not None and context.format:
        return context.format
    return DEFAULT_FORMAT


def template_path(directory: str, template_name: str, format: str) -> str:
    return f"{directory}/_{template_name}.{format}.j2"


class TemplateEngine(Protocol):
    """What the presenter layer needs from a template engine."""

    def render(
        self,
        directory: str,
        template_name: str,
        format: str,
        context: dict[str, Any],
    ) -> str: ...


class JinjaTemplateEngine:
    """Jinja2-backed template engine.

    Usage:
        engine = JinjaTemplateEngine(search_paths=[Path("templates")])
        html = engine.render("book", "header", "html", {"presenter": p})
    """

    def __init__(
        self,
        loader: Optional[BaseLoader] = None,
        search_paths: Optional[list[Path]] = None,
    ):
        """Initialize the engine.

        Args:
            loader: Custom Jinja2 loader (e.g. DictLoader). The built-in
                shared templates are always searched after it.
            search_paths: Template directories, used when no loader is
                given. PRESENTER_TEMPLATES_DIR is appended when set.
        """
        builtin = FileSystemLoader(str(BUILTIN_TEMPLATES_DIR))
        if loader is None:
            paths = [str(p) for p in (search_paths or [])]
            if TEMPLATES_DIR:
                paths.append(TEMPLATES_DIR)
            loader = FileSystemLoader(paths)

        self.env = Environment(
            loader=ChoiceLoader([loader, builtin]),
            autoescape=select_autoescape(
                enabled_extensions=("html.j2", "xml.j2"),
                default_for_string=False,
            ),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        register_filters(self.env)

    def render(
        self,
        directory: str,
        template_name: str,
        format: str,
        context: dict[str, Any],
    ) -> Markup:
        path = template_path(directory, template_name, format)
        try:
            template = self.env.get_template(path)
        except TemplateNotFound:
            logger.warning(f"Template not found: {path}")
            raise TemplateNotFoundError(directory, template_name, format) from None

        # Markup so nested partials are not escaped again by the outer template
        return Markup(template.render(**context))


# Global engine instance
_engine: Optional[TemplateEngine] = None


def get_template_engine() -> TemplateEngine:
    """Get the global template engine instance."""
    global _engine
    if _engine is None:
        _engine = JinjaTemplateEngine()
        logger.info(f"Template engine initialized (default format: {DEFAULT_FORMAT})")
    return _engine


def set_template_engine(engine: Optional[TemplateEngine]) -> None:
    """Replace the global template engine (None resets to the default)."""
    global _engine
    _engine = engine
