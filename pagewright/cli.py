"""Command-line interface for Pagewright.

This module defines the CLI commands using the Click framework.
Running ``pagewright`` with no command builds the site in the current
directory.

Commands:
- build: Build the site into the output directory.
- new: Scaffold a new Pagewright project.
- page: Create a new sub-page interactively.
"""

from __future__ import annotations

from pathlib import Path

import click
import questionary

from . import __version__

SCAFFOLD_FILES = {
    "pages/index.md": "# Welcome\n\nThis is the home page of your new site.\n",
    "pages/config.yml": "title: Home\n",
    "pages/about/content.md": "# About\n\nTell visitors what this site is about.\n",
    "pages/about/config.yml": "title: About\n",
    "template/page.html": """<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <title>{{ title }}</title>
  <link rel="stylesheet" href="/assets/css/site.css">
</head>
<body>
  <nav>
    <ul>
    {% for entry in entries %}
      <li{% if entry.active %} class="active"{% endif %}><a href="{{ entry.link }}">{{ entry.title }}</a></li>
    {% endfor %}
    </ul>
  </nav>
  <main>
    {{ content }}
  </main>
</body>
</html>
""",
    "assets/css/site.css": "nav .active a { font-weight: bold; }\n",
}


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="pagewright")
@click.pass_context
def cli(ctx: click.Context):
    """Pagewright static site generator."""
    if ctx.invoked_subcommand is None:
        ctx.invoke(build)


@cli.command()
@click.option("--clean", is_flag=True, help="Empty the output directory first")
def build(clean: bool):
    """Build the site into the output directory.

    Asset copying is best-effort: if the assets directory cannot be copied a
    warning is printed and the build still succeeds.
    """
    project_root = Path.cwd()
    from .build import BuildError, build_site

    try:
        result = build_site(project_root, clean_output=clean)
    except BuildError as exc:
        click.echo(click.style("Build failed:", fg="red", bold=True), err=True)
        click.echo(
            click.style(f"  File: {_display_path(exc.source_path, project_root)}", fg="yellow"),
            err=True,
        )
        click.echo(click.style(f"  Error: {exc.message}", fg="white"), err=True)
        raise SystemExit(1) from None
    if not result.assets_copied:
        click.echo(
            click.style("Warning: assets were not copied", fg="yellow"), err=True
        )
    click.echo(f"Built {len(result.pages)} pages into {result.output_dir}")


@cli.command()
@click.argument("name")
def new(name: str):
    """Scaffold a new Pagewright project."""
    target = Path(name).resolve()
    if target.exists() and any(target.iterdir()):
        raise click.ClickException(
            f"Refusing to initialize into non-empty directory: {target}"
        )
    _scaffold(target)
    click.echo(f"New Pagewright site created at {target}")


@cli.command()
def page():
    """Create a new sub-page interactively."""
    from .build import load_config
    from .utils import slugify, titleize

    project_root = Path.cwd()
    pages_dir = project_root / load_config(project_root)["pages_dir"]

    if not pages_dir.is_dir():
        raise click.ClickException(
            "No pages/ directory found. Run this command from a Pagewright project root."
        )

    name = questionary.text(
        "Page name:",
        validate=lambda x: bool(slugify(x)) or "Page name must contain letters or digits",
        style=_questionary_style(),
    ).ask()

    if name is None:
        raise click.Abort()

    slug = slugify(name)
    target_dir = pages_dir / slug
    if target_dir.exists():
        raise click.ClickException(
            f"Page already exists: {target_dir.relative_to(project_root)}"
        )

    title = questionary.text(
        "Title:",
        default=titleize(slug),
        style=_questionary_style(),
    ).ask()

    if title is None:
        raise click.Abort()

    target_dir.mkdir(parents=True)
    (target_dir / "config.yml").write_text(
        f"title: {_yaml_string(title)}\n", encoding="utf-8"
    )
    (target_dir / "content.md").write_text(f"# {title}\n\n", encoding="utf-8")

    click.echo(f"Created {target_dir.relative_to(project_root)}")


def _yaml_string(value: str) -> str:
    """Quote a string for a one-line YAML scalar."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def _display_path(path: Path, project_root: Path) -> Path:
    """Show paths relative to the project when they live inside it."""
    try:
        return path.relative_to(project_root)
    except ValueError:
        return path


def _questionary_style():
    """Return consistent questionary style."""
    return questionary.Style(
        [
            ("qmark", "fg:cyan bold"),
            ("question", "bold"),
            ("answer", "fg:cyan"),
            ("pointer", "fg:cyan bold"),
            ("highlighted", "fg:cyan bold"),
            ("selected", "fg:cyan"),
        ]
    )


def main():
    """Entry point for the CLI application."""
    cli()


def _scaffold(root: Path) -> None:
    """Create the directory structure and files for a new Pagewright project.

    Args:
        root: Root directory for the new project.
    """
    for rel_path, text in SCAFFOLD_FILES.items():
        dest_path = root / rel_path
        dest_path.parent.mkdir(parents=True, exist_ok=True)
        dest_path.write_text(text, encoding="utf-8")
