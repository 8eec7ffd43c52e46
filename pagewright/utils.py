"""Utility functions for Pagewright.

Key functions:
    slugify: Convert a page name to a URL-friendly directory name.
    titleize: Convert a page name to a human-readable title.
    ensure_clean_dir: Ensure a directory exists and is empty.
    read_text: Read a source file, raising BuildError on failure.
"""

from __future__ import annotations

import re
import shutil
from pathlib import Path

from .errors import BuildError


def slugify(name: str) -> str:
    """Convert a page name to a slug suitable for a sub-page directory.

    Args:
        name: Free-form page name.

    Returns:
        Lowercase slug with runs of non-alphanumerics collapsed to hyphens,
        or an empty string when nothing usable remains.

    Examples:
        >>> slugify("Getting Started!")
        'getting-started'
    """
    cleaned = re.sub(r"[^a-zA-Z0-9]+", "-", name)
    return cleaned.strip("-").lower()


def titleize(name: str) -> str:
    """Convert a page name to a human-readable title.

    Replaces hyphens and underscores with spaces and capitalizes each word.

    Args:
        name: Page or directory name.

    Returns:
        Human-readable title string.

    Examples:
        >>> titleize("getting-started")
        'Getting Started'
    """
    words = re.split(r"[\s\-_]+", name)
    return " ".join(word.capitalize() for word in words if word) or "Untitled"


def ensure_clean_dir(path: Path) -> None:
    """Ensure a directory exists and is empty.

    If the directory exists, removes all contents. Creates the
    directory if it doesn't exist.

    Args:
        path: Directory path to clean or create.
    """
    if path.exists():
        shutil.rmtree(str(path))
    path.mkdir(parents=True, exist_ok=True)


def read_text(path: Path) -> str:
    """Read a UTF-8 source file.

    Args:
        path: File to read.

    Returns:
        The file contents.

    Raises:
        BuildError: If the file cannot be read or decoded.
    """
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise BuildError(path, f"Cannot read file: {exc}", exc) from exc
