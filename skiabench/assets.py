# this_file: skiabench/assets.py
"""
Input file resolution.

Every file an enabled stage needs is checked before the first stage draws, so
a missing asset aborts the run without touching the output file.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .base import MissingAssetError
from .config import HarnessConfig
from .constants import FONT_FILE, RASTER_FILE, SVG_FILE


@dataclass(frozen=True)
class AssetPaths:
    """Existing input files for the enabled stages (None when not needed)."""

    raster: Path | None = None
    font: Path | None = None
    svg: Path | None = None
    path_data: Path | None = None


def check_file_exists(path: Path) -> Path:
    if not path.exists():
        raise MissingAssetError(path)
    return path


def resolve_assets(config: HarnessConfig) -> AssetPaths:
    """
    Resolve and existence-check the inputs of every enabled stage.

    Args:
        config: Harness configuration

    Returns:
        AssetPaths with a path for each enabled stage that reads a file

    Raises:
        MissingAssetError: If any required file is absent
    """
    root = config.working_dir
    path_data = None
    if config.draw_path and config.path_file_path is not None:
        path_data = check_file_exists(config.path_file_path)

    return AssetPaths(
        raster=check_file_exists(root / RASTER_FILE) if config.draw_raster else None,
        font=check_file_exists(root / FONT_FILE) if config.draw_text else None,
        svg=check_file_exists(root / SVG_FILE) if config.draw_svg else None,
        path_data=path_data,
    )
