"""Pagewright static site generator.

This package builds a small static site from a directory of Markdown pages,
each with a YAML config file, rendered through a single shared Jinja2 page
template. Static assets are copied alongside the generated HTML.

The main entry point is the CLI module, which provides commands for
scaffolding a project, adding pages and building the site.

Pipeline:
- Discovery: find index and sub-page content files under the pages directory.
- Compilation: parse each page's config and convert its Markdown to HTML.
- Navigation: derive the shared entry list once every page is compiled.
- Rendering: merge each page into the template and write it to disk.
- Assets: copy the assets directory into the output tree.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
