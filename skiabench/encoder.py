# this_file: skiabench/encoder.py
"""
PNG encoding of the final frame.
"""

from __future__ import annotations

import os
import stat
import tempfile
from pathlib import Path

import skia

from .base import EncodeError
from .surface import RasterSurface


def encode_png(surface: RasterSurface) -> bytes:
    """
    Snapshot the surface and encode it as PNG.

    Raises:
        EncodeError: If Skia cannot encode the snapshot
    """
    image = surface.snapshot()
    data = image.encodeToData(skia.EncodedImageFormat.kPNG, 100)
    if data is None:
        raise EncodeError("Failed to encode surface snapshot as PNG")
    return bytes(data)


def _replacement_mode(output_path: Path) -> int:
    # existing file keeps its mode, a new one gets the umask default
    try:
        return stat.S_IMODE(output_path.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def save_to_png(surface: RasterSurface, output_path: Path) -> int:
    """
    Encode the surface and write it to ``output_path``, replacing any old file.

    The bytes go to a temporary file next to the target first, so a failed
    write never leaves a truncated PNG behind.

    Returns:
        Number of bytes written

    Raises:
        EncodeError: On encode failure or any I/O error while writing
    """
    payload = encode_png(surface)
    output_path = Path(output_path)

    tmp_name = None
    try:
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{output_path.name}.", suffix=".tmp", dir=output_path.parent
        )
        with os.fdopen(fd, "wb") as handle:
            handle.write(payload)
        os.chmod(tmp_name, _replacement_mode(output_path))
        os.replace(tmp_name, output_path)
    except OSError as exc:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise EncodeError(f"Failed to write {output_path}: {exc}") from exc

    return len(payload)
