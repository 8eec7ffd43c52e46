"""Static asset copying for Pagewright.

The assets directory is copied as-is into ``<output>/assets``. Copying is
advisory: a failure is reported but never stops the build, and a project
without an assets directory simply has nothing to copy.
"""

from __future__ import annotations

import shutil
from pathlib import Path


class AssetCopier:
    """Copies the project's static assets into the output directory.

    Attributes:
        assets_dir (Path): Directory containing source assets.
        output_dir (Path): Build output directory.
        target_dir (Path): Where assets end up, ``output_dir / "assets"``.
    """

    def __init__(self, assets_dir: Path, output_dir: Path):
        """Initialize the asset copier.

        Args:
            assets_dir: Directory containing the project's assets.
            output_dir: Directory where the site is built.
        """
        self.assets_dir = assets_dir
        self.output_dir = output_dir
        self.target_dir = output_dir / "assets"

    def run(self) -> bool:
        """Copy the asset tree, preserving its relative structure.

        Existing files in the target are overwritten; files that are not in
        the source are left alone.

        Returns:
            True if the assets were copied or there were none to copy,
            False if the copy failed.
        """
        if not self.assets_dir.is_dir():
            return True
        try:
            shutil.copytree(self.assets_dir, self.target_dir, dirs_exist_ok=True)
        except OSError as exc:
            print(f"Asset copy failed ({self.assets_dir} -> {self.target_dir}): {exc}")
            return False
        return True
