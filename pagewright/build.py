"""Site building functionality for Pagewright.

This module contains the core logic for building a static site from source
files. It loads configuration, discovers and compiles pages, renders each
one through the page template and copies static assets.

Pages are compiled in a first pass and rendered in a second, because every
rendered page carries a navigation list built from all page titles.

Key functions:
- build_site: Main function to build the entire site.
- load_config: Loads site configuration from pagewright.yaml.
- write_page: Renders one page into its output file.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from .assets import AssetCopier
from .content import CompiledPage, PageCompiler, PageDiscovery
from .errors import BuildError
from .navigation import Entry, Navigation
from .protocols import ContentRenderer, PageSource
from .templates import TemplateEngine
from .utils import ensure_clean_dir, read_text

__all__ = [
    "BuildError",
    "BuildResult",
    "DEFAULT_CONFIG",
    "build_site",
    "load_config",
    "write_page",
]

CONFIG_FILENAME = "pagewright.yaml"

DEFAULT_CONFIG = {
    "pages_dir": "pages",
    "template": "template/page.html",
    "assets_dir": "assets",
    "output_dir": "compiled",
}


@dataclass
class BuildResult:
    """Result of a site build operation.

    Attributes:
        pages: Compiled pages, in build order.
        output_dir: Directory where the site was built.
        assets_copied: False if copying static assets failed.
    """

    pages: list[CompiledPage]
    output_dir: Path
    assets_copied: bool = True


def load_config(project_root: Path) -> dict[str, Any]:
    """Load site configuration from pagewright.yaml.

    Args:
        project_root: Root directory of the project.

    Returns:
        Dictionary containing configuration values, with defaults applied.

    Raises:
        BuildError: If the config file exists but is not valid YAML.
    """
    config_path = project_root / CONFIG_FILENAME
    config = DEFAULT_CONFIG.copy()
    if config_path.exists():
        try:
            loaded = yaml.safe_load(read_text(config_path)) or {}
        except yaml.YAMLError as exc:
            raise BuildError(config_path, f"Invalid YAML: {exc}", exc) from exc
        if isinstance(loaded, dict):
            config.update(loaded)
    return config


def write_page(
    engine: TemplateEngine,
    page: CompiledPage,
    entries: list[Entry],
    output_dir: Path,
) -> Path:
    """Render a page into its output file.

    The output directory is created if needed and the file is truncated
    before rendering starts.

    Args:
        engine: Template engine holding the page template.
        page: The compiled page.
        entries: Navigation entries for this page.
        output_dir: Base output directory.

    Returns:
        Path of the written file.

    Raises:
        BuildError: If the output cannot be written or the template fails.
    """
    target = page.page.output_path(output_dir)
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        with open(target, "w", encoding="utf-8") as f:
            engine.render_to(page, entries, f)
    except OSError as exc:
        raise BuildError(target, f"Cannot write output: {exc}", exc) from exc
    return target


def build_site(
    project_root: Path,
    clean_output: bool = False,
    output_dir_override: Path | None = None,
    page_source: PageSource | None = None,
    renderer: ContentRenderer | None = None,
) -> BuildResult:
    """Build the entire static site.

    Args:
        project_root: Root directory of the project.
        clean_output: Whether to wipe the output directory before building.
        output_dir_override: Optional path to write the build output instead
            of the configured output_dir.
        page_source: Optional page source; defaults to walking the
            configured pages_dir.
        renderer: Optional content renderer; Markdown by default.

    Returns:
        BuildResult containing the compiled pages and output directory.

    Raises:
        BuildError: On any unreadable source, malformed YAML, template
            failure or unwritable output. Files already written stay on disk.
    """
    config = load_config(project_root)
    pages_dir = project_root / config["pages_dir"]
    template_path = project_root / config["template"]
    assets_dir = project_root / config["assets_dir"]
    output_dir = output_dir_override or (project_root / config["output_dir"])

    engine = TemplateEngine(template_path)
    pages = (page_source or PageDiscovery(pages_dir)).discover()
    navigation = Navigation(PageCompiler(renderer).compile_all(pages))

    for earlier, later in navigation.collisions(output_dir):
        print(
            f"Warning: {later.page.content_path} and {earlier.page.content_path} "
            f"both render to {later.page.output_path(output_dir)}; "
            f"{later.page.content_path} wins."
        )

    if clean_output:
        ensure_clean_dir(output_dir)

    for index, page in enumerate(navigation):
        write_page(engine, page, navigation.entries_for(index), output_dir)

    assets_copied = AssetCopier(assets_dir, output_dir).run()
    return BuildResult(
        pages=list(navigation), output_dir=output_dir, assets_copied=assets_copied
    )
