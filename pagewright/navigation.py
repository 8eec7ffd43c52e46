"""Navigation entries shared by every rendered page."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from pathlib import Path

from .content import CompiledPage


@dataclass(frozen=True)
class Entry:
    """One link in the navigation list.

    Attributes:
        title: Title of the linked page.
        link: Site-relative path of the linked page.
        active: True when the link points at the page being rendered.
    """

    title: str
    link: str
    active: bool = False


def build_entries(pages: Sequence[CompiledPage], active_index: int) -> list[Entry]:
    """Build the navigation list for the page at ``active_index``.

    Args:
        pages: Every compiled page, in build order.
        active_index: Position of the page being rendered.

    Returns:
        One Entry per page, in the same order, with only the entry at
        ``active_index`` marked active.

    Raises:
        IndexError: If ``active_index`` is outside ``pages``.
    """
    if not 0 <= active_index < len(pages):
        raise IndexError(f"active_index {active_index} out of range")
    return [
        Entry(title=page.title, link=page.page.web_path, active=i == active_index)
        for i, page in enumerate(pages)
    ]


class Navigation(Sequence[CompiledPage]):
    """The full set of compiled pages, used to derive per-page entry lists.

    Navigation needs every page's title, so it is only built once all pages
    have been compiled.
    """

    def __init__(self, pages: Iterable[CompiledPage]):
        self._pages = list(pages)

    def __iter__(self) -> Iterator[CompiledPage]:
        return iter(self._pages)

    def __len__(self) -> int:
        return len(self._pages)

    def __getitem__(self, item):
        return self._pages[item]

    def entries_for(self, index: int) -> list[Entry]:
        return build_entries(self._pages, index)

    def collisions(self, output_root: Path) -> list[tuple[CompiledPage, CompiledPage]]:
        """Find pages that would be written to the same output file.

        Returns:
            Pairs of (earlier page, later page) sharing an output path; the
            later page overwrites the earlier one when written.
        """
        seen: dict[Path, CompiledPage] = {}
        clashes: list[tuple[CompiledPage, CompiledPage]] = []
        for compiled in self._pages:
            target = compiled.page.output_path(output_root)
            if target in seen:
                clashes.append((seen[target], compiled))
            seen[target] = compiled
        return clashes

    def __repr__(self) -> str:  # pragma: no cover - for debugging
        return f"Navigation({len(self._pages)} pages)"
