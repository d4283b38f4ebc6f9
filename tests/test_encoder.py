# this_file: tests/test_encoder.py

"""Tests for PNG encoding and the atomic write."""

import os
import stat
import sys

import pytest
import skia

from skiabench.base import EncodeError, HarnessError
from skiabench.bench import verify_png
from skiabench.encoder import encode_png, save_to_png
from skiabench.surface import RasterSurface


@pytest.fixture
def surface():
    surface = RasterSurface.allocate(40, 30)
    surface.canvas.clear(skia.ColorWHITE)
    return surface


def test_encode_png_signature(surface):
    payload = encode_png(surface)
    assert payload[:8] == b"\x89PNG\r\n\x1a\n"


def test_save_writes_decodable_png(surface, tmp_path):
    target = tmp_path / "frame.png"
    written = save_to_png(surface, target)
    assert written == target.stat().st_size
    assert verify_png(target) == (40, 30)


def test_save_overwrites_existing_file(surface, tmp_path):
    target = tmp_path / "frame.png"
    target.write_bytes(b"stale")
    save_to_png(surface, target)
    assert target.read_bytes()[:4] == b"\x89PNG"


def test_write_failure_is_fatal_and_leaves_no_temp(surface, tmp_path):
    target = tmp_path / "frame.png"
    target.mkdir()
    with pytest.raises(EncodeError) as excinfo:
        save_to_png(surface, target)
    assert isinstance(excinfo.value, HarnessError)
    assert target.is_dir()
    assert [p.name for p in tmp_path.iterdir()] == ["frame.png"]


def test_missing_directory_is_fatal(surface, tmp_path):
    with pytest.raises(EncodeError):
        save_to_png(surface, tmp_path / "absent" / "frame.png")


posix_only = pytest.mark.skipif(sys.platform == "win32", reason="POSIX permission bits")


@posix_only
def test_new_file_gets_umask_default_mode(surface, tmp_path):
    umask = os.umask(0o022)
    try:
        target = tmp_path / "frame.png"
        save_to_png(surface, target)
    finally:
        os.umask(umask)
    assert stat.S_IMODE(target.stat().st_mode) == 0o644


@posix_only
def test_replacement_keeps_existing_mode(surface, tmp_path):
    target = tmp_path / "frame.png"
    target.write_bytes(b"stale")
    target.chmod(0o640)
    save_to_png(surface, target)
    assert stat.S_IMODE(target.stat().st_mode) == 0o640
