"""Content discovery and compilation for Pagewright.

This module finds the pages of a site and turns each one into HTML ready
for templating.

A site's pages directory looks like::

    pages/
      index.md          # the site index
      config.yml        # index page config
      about/
        content.md      # a sub-page
        config.yml

Key classes:
- Page: A discovered content file and its config file.
- PageConfig: Metadata loaded from a page's config.yml.
- CompiledPage: A page after config parsing and Markdown conversion.
- PageDiscovery: Walks the pages directory and builds Page objects.
- PageCompiler: Reads a page's files and produces a CompiledPage.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from pathlib import Path

import yaml

from .errors import BuildError
from .protocols import ContentRenderer
from .renderers import MarkdownRenderer
from .utils import read_text

INDEX_FILE = "index.md"
CONTENT_FILE = "content.md"
CONFIG_FILE = "config.yml"
OUTPUT_FILE = "index.html"
NULL_TAG = "tag:yaml.org,2002:null"


class PageKind(enum.Enum):
    """Whether a page is the site index or one of its sub-pages."""

    INDEX = "index"
    SUBPAGE = "subpage"


@dataclass(frozen=True)
class Page:
    """A content file discovered under the pages directory.

    Attributes:
        kind: PageKind.INDEX for the root index file, PageKind.SUBPAGE otherwise.
        config_path: The config.yml next to the content file.
        content_path: The Markdown source file.
    """

    kind: PageKind
    config_path: Path
    content_path: Path

    @property
    def name(self) -> str:
        """Base name of the directory holding the content file.

        Sub-pages are addressed by this name alone, so two sub-pages whose
        parent directories share a base name map to the same output.
        """
        return self.content_path.parent.name

    @property
    def web_path(self) -> str:
        """Site-relative link to the rendered page."""
        if self.kind is PageKind.INDEX:
            return "/"
        return f"/{self.name}"

    def output_dir(self, output_root: Path) -> Path:
        """Directory the rendered page is written into."""
        if self.kind is PageKind.INDEX:
            return output_root
        return output_root / self.name

    def output_path(self, output_root: Path) -> Path:
        """File the rendered page is written to."""
        return self.output_dir(output_root) / OUTPUT_FILE

    def __str__(self) -> str:
        return str(self.content_path)


@dataclass(frozen=True)
class PageConfig:
    """Per-page metadata loaded from config.yml."""

    title: str = ""

    @classmethod
    def from_node(cls, node: yaml.Node | None) -> PageConfig:
        """Build a config from a composed YAML document.

        Only ``title`` is recognized; other keys are ignored. The title is
        the scalar's source text, so ``title: No`` stays ``"No"`` rather
        than becoming a boolean. An empty document, a non-mapping document,
        a missing or null title, or a non-scalar title yields an empty title.
        """
        if not isinstance(node, yaml.MappingNode):
            return cls()
        title = ""
        for key_node, value_node in node.value:
            if not isinstance(key_node, yaml.ScalarNode) or key_node.value != "title":
                continue
            if isinstance(value_node, yaml.ScalarNode) and value_node.tag != NULL_TAG:
                title = value_node.value
            else:
                title = ""
        return cls(title=title)


@dataclass
class CompiledPage:
    """A page after its config has been parsed and its Markdown rendered.

    Attributes:
        page: The source page.
        title: Title from the page config, empty if absent.
        html: Rendered HTML body.
    """

    page: Page
    title: str
    html: str


def load_page_config(path: Path) -> PageConfig:
    """Read and parse a page's config.yml.

    Args:
        path: Path to the config file.

    Returns:
        The parsed PageConfig.

    Raises:
        BuildError: If the file cannot be read or is not valid YAML.
    """
    text = read_text(path)
    try:
        document = yaml.compose(text, Loader=yaml.SafeLoader)
    except yaml.YAMLError as exc:
        raise BuildError(path, f"Invalid YAML: {exc}", exc) from exc
    return PageConfig.from_node(document)


class PageDiscovery:
    """Finds the content files of a site.

    Attributes:
        pages_dir: Root of the content tree.
    """

    def __init__(self, pages_dir: Path):
        """Initialize the discovery walker.

        Args:
            pages_dir: Path to the pages directory.
        """
        self.pages_dir = pages_dir

    def discover(self) -> list[Page]:
        """Walk the pages directory and return every page.

        A file is a page when its name is ``index.md`` or ``content.md``,
        compared case-insensitively. Only ``index.md`` directly inside the
        pages directory is the site index; every other match is a sub-page.
        Pages are returned in sorted path order.

        Returns:
            List of Page objects.

        Raises:
            BuildError: If the pages directory does not exist.
        """
        if not self.pages_dir.is_dir():
            raise BuildError(self.pages_dir, "Pages directory not found")

        pages: list[Page] = []
        for path in sorted(self.pages_dir.rglob("*")):
            if path.is_dir():
                continue
            if path.name.lower() not in (INDEX_FILE, CONTENT_FILE):
                continue
            pages.append(self._make_page(path))
        return pages

    def _make_page(self, path: Path) -> Page:
        is_index = (
            path.name.lower() == INDEX_FILE and path.parent == self.pages_dir
        )
        return Page(
            kind=PageKind.INDEX if is_index else PageKind.SUBPAGE,
            config_path=path.parent / CONFIG_FILE,
            content_path=path,
        )


class PageCompiler:
    """Compiles pages into titled HTML fragments.

    Attributes:
        renderer: Converts page source text to HTML.
    """

    def __init__(self, renderer: ContentRenderer | None = None):
        """Initialize the compiler.

        Args:
            renderer: Optional custom content renderer; Markdown by default.
        """
        self.renderer = renderer or MarkdownRenderer()

    def compile(self, page: Page) -> CompiledPage:
        """Compile a single page.

        Args:
            page: The page to compile.

        Returns:
            The compiled page.

        Raises:
            BuildError: If the config or content file cannot be read or the
                config is not valid YAML.
        """
        config = load_page_config(page.config_path)
        content = read_text(page.content_path)
        return CompiledPage(
            page=page,
            title=config.title,
            html=self.renderer.render(content),
        )

    def compile_all(self, pages: list[Page]) -> list[CompiledPage]:
        """Compile every page, stopping at the first failure.

        Args:
            pages: Pages in build order.

        Returns:
            Compiled pages, one per input page, in the same order.
        """
        return [self.compile(page) for page in pages]
