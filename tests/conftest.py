# this_file: tests/conftest.py

"""Shared fixtures: a synthetic asset directory and pixel helpers."""

import shutil
from pathlib import Path

import numpy as np
import pytest
import skia
from PIL import Image

from skiabench.constants import FONT_FILE, RASTER_FILE, SVG_FILE

SVG_DOCUMENT = """<svg xmlns="http://www.w3.org/2000/svg" width="400" height="400" viewBox="0 0 400 400">
  <rect x="10" y="10" width="200" height="300" fill="#c03020"/>
  <circle cx="300" cy="200" r="80" fill="#2050c0"/>
</svg>
"""


def write_raster(path: Path, width: int = 400, height: int = 300) -> Path:
    """Write a red/blue gradient JPEG."""
    xs = np.linspace(0, 255, width, dtype=np.float64)
    ys = np.linspace(0, 255, height, dtype=np.float64)
    rgb = np.zeros((height, width, 3), dtype=np.uint8)
    rgb[:, :, 0] = 200
    rgb[:, :, 1] = (ys[:, None] * 0.2).astype(np.uint8)
    rgb[:, :, 2] = xs[None, :].astype(np.uint8)
    Image.fromarray(rgb, "RGB").save(path, "JPEG", quality=90)
    return path


@pytest.fixture
def asset_dir(tmp_path):
    """Directory with a decodable image and SVG plus an undecodable font."""
    write_raster(tmp_path / RASTER_FILE)
    (tmp_path / SVG_FILE).write_text(SVG_DOCUMENT, encoding="utf-8")
    # No font ships with the tests; Skia falls back to the platform font manager
    (tmp_path / FONT_FILE).write_bytes(b"not a font")
    return tmp_path


FONT_DIRS = (
    Path("/usr/share/fonts"),
    Path("/usr/local/share/fonts"),
    Path("/Library/Fonts"),
    Path("/System/Library/Fonts"),
    Path("C:/Windows/Fonts"),
)


LATIN_FONTS = ("DejaVuSans.ttf", "LiberationSans-Regular.ttf", "Arial.ttf", "arial.ttf")


@pytest.fixture
def system_font():
    """A decodable TrueType font with Latin glyphs, preferring common families."""
    installed = [p for d in FONT_DIRS if d.is_dir() for p in sorted(d.rglob("*.ttf"))]
    installed.sort(key=lambda p: p.name not in LATIN_FONTS)
    for candidate in installed:
        if skia.Typeface.MakeFromFile(str(candidate)):
            return candidate
    pytest.skip("no TrueType font installed")


@pytest.fixture
def font_asset_dir(asset_dir, system_font):
    """Asset directory whose font file is a real, decodable font."""
    shutil.copyfile(system_font, asset_dir / FONT_FILE)
    return asset_dir


def load_rgba(path: Path) -> np.ndarray:
    with Image.open(path) as img:
        return np.asarray(img.convert("RGBA")).copy()


def is_white(pixels: np.ndarray) -> bool:
    return bool((pixels == 255).all())
