"""Template rendering engine for Pagewright.

This module uses Jinja2 to merge compiled pages into the shared page
template. The template receives three variables:

- ``entries``: the navigation list, each item with ``title``, ``link``
  and ``active``.
- ``title``: the page title from its config (autoescaped).
- ``content``: the page's rendered HTML (inserted unescaped).

Key classes:
- RenderInput: The values handed to the template for one page.
- TemplateEngine: Loads the page template once and renders pages with it.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import IO, Any

from jinja2 import (
    Environment,
    FileSystemLoader,
    StrictUndefined,
    TemplateNotFound,
    TemplateSyntaxError,
)
from markupsafe import Markup

from .content import CompiledPage
from .errors import BuildError, format_error_message
from .navigation import Entry

__all__ = ["RenderInput", "TemplateEngine"]


@dataclass(frozen=True)
class RenderInput:
    """Values exposed to the page template for a single render."""

    entries: list[Entry]
    title: str
    content: Markup

    @classmethod
    def for_page(cls, page: CompiledPage, entries: list[Entry]) -> RenderInput:
        return cls(entries=entries, title=page.title, content=Markup(page.html))

    def as_context(self) -> dict[str, Any]:
        return {"entries": self.entries, "title": self.title, "content": self.content}


class TemplateEngine:
    """Page template renderer using Jinja2.

    The template is loaded when the engine is constructed, so a missing or
    malformed template fails the build before any page is written.

    Attributes:
        template_path: Path to the page template.
        env: Jinja2 environment rooted at the template's directory.
        template: The loaded page template.
    """

    def __init__(self, template_path: Path):
        """Initialize the template engine.

        Args:
            template_path: Path to the shared page template.

        Raises:
            BuildError: If the template does not exist or fails to parse.
        """
        self.template_path = template_path
        self.env = Environment(
            loader=FileSystemLoader(template_path.parent),
            autoescape=True,
            undefined=StrictUndefined,
            enable_async=False,
        )
        try:
            self.template = self.env.get_template(template_path.name)
        except TemplateNotFound as exc:
            raise BuildError(template_path, "Template not found", exc) from exc
        except TemplateSyntaxError as exc:
            raise BuildError(
                template_path,
                f"Template syntax error on line {exc.lineno}: {exc.message}",
                exc,
            ) from exc

    def render_to(
        self, page: CompiledPage, entries: list[Entry], stream: IO[str]
    ) -> None:
        """Render a page into an open text stream.

        Args:
            page: The compiled page.
            entries: Navigation entries for this page.
            stream: Writable text stream receiving the output.

        Raises:
            BuildError: If the template fails while rendering.
        """
        context = RenderInput.for_page(page, entries).as_context()
        try:
            self.template.stream(**context).dump(stream)
        except TemplateNotFound as exc:
            raise BuildError(
                page.page.content_path, format_error_message(exc), exc
            ) from exc
        except OSError:
            # stream write failures are reported by the caller
            raise
        except Exception as exc:
            raise BuildError(
                page.page.content_path, format_error_message(exc), exc
            ) from exc

    def render(self, page: CompiledPage, entries: list[Entry]) -> str:
        """Render a page to a string.

        Args:
            page: The compiled page.
            entries: Navigation entries for this page.

        Returns:
            Rendered HTML.
        """
        context = RenderInput.for_page(page, entries).as_context()
        try:
            return self.template.render(**context)
        except Exception as exc:
            raise BuildError(
                page.page.content_path, format_error_message(exc), exc
            ) from exc
