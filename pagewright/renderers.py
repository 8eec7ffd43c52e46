"""Markdown rendering for Pagewright.

This module converts page content from Markdown to HTML with mistune.
The renderer enables the common extensions (tables, strikethrough,
footnotes, definition lists, bare URLs), gives every heading an anchor id
and marks images for lazy loading.

Key classes:
- LazyImageRenderer: mistune HTML renderer with heading ids and lazy images.
- MarkdownRenderer: Converts Markdown text to an HTML string.
"""

from __future__ import annotations

import re

import mistune

MARKDOWN_PLUGINS = ["strikethrough", "footnotes", "table", "url", "def_list"]


def _generate_heading_id(text: str) -> str:
    """Generate a URL-friendly ID from heading text.

    Args:
        text: The heading text.

    Returns:
        URL-friendly slug suitable for anchor links.
    """
    slug = re.sub(r"<[^>]+>", "", text).lower().strip()
    slug = re.sub(r"[^\w\s-]", "", slug)
    slug = re.sub(r"[-\s]+", "-", slug)
    return slug.strip("-")


class LazyImageRenderer(mistune.HTMLRenderer):
    """HTML renderer that anchors headings and defers image loading."""

    def __init__(self):
        super().__init__(escape=False)
        self._heading_id_counts: dict[str, int] = {}

    def heading(self, text: str, level: int, **attrs) -> str:
        """Render a heading with an auto-generated, de-duplicated id.

        Args:
            text: Rendered heading text.
            level: Heading level (1-6).
            **attrs: Additional attributes.

        Returns:
            HTML heading tag with id attribute.
        """
        base_id = _generate_heading_id(text)
        if not base_id:
            return f"<h{level}>{text}</h{level}>\n"

        if base_id in self._heading_id_counts:
            self._heading_id_counts[base_id] += 1
            heading_id = f"{base_id}-{self._heading_id_counts[base_id]}"
        else:
            self._heading_id_counts[base_id] = 0
            heading_id = base_id

        return f'<h{level} id="{heading_id}">{text}</h{level}>\n'

    def image(self, text: str, url: str, title: str | None = None) -> str:
        """Render an image tag with loading="lazy".

        Args:
            text: Alt text value from markdown.
            url: Image source URL.
            title: Title attribute.

        Returns:
            HTML image tag string.
        """
        html = super().image(text, url, title)
        return html.replace("<img ", '<img loading="lazy" ', 1)

    def block_code(self, code: str, info: str | None = None) -> str:
        """Render a fenced or indented code block.

        Args:
            code: The code content.
            info: Language identifier from the fence, if any.

        Returns:
            HTML pre/code block with a language class when one is given.
        """
        escaped = code.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")
        lang = info.split()[0] if info and info.strip() else ""
        lang_class = f' class="language-{lang}"' if lang else ""
        return f"<pre><code{lang_class}>{escaped}</code></pre>\n"


class MarkdownRenderer:
    """Converts Markdown content to HTML.

    A fresh mistune parser is created for every call so heading id counters
    never leak from one page into the next.
    """

    def render(self, content: str) -> str:
        """Render Markdown content to HTML.

        Args:
            content: Markdown source content.

        Returns:
            Rendered HTML.
        """
        markdown = mistune.create_markdown(
            renderer=LazyImageRenderer(), plugins=MARKDOWN_PLUGINS
        )
        return markdown(content)
