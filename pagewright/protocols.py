"""Protocol definitions for Pagewright.

These protocols let the compiler accept any content renderer and the
build accept any page source, which keeps the components easy to swap
out in tests.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from .content import Page


@runtime_checkable
class ContentRenderer(Protocol):
    """Protocol for turning page source text into HTML."""

    @abstractmethod
    def render(self, content: str) -> str:
        """Render content to HTML.

        Args:
            content: Source content to render.

        Returns:
            Rendered HTML.
        """
        ...


@runtime_checkable
class PageSource(Protocol):
    """Protocol for discovering the pages of a site."""

    @abstractmethod
    def discover(self) -> list[Page]:
        """Return every page of the site in build order."""
        ...
