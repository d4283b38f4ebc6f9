# this_file: skiabench/pathdata.py
"""
SVG path data loading.

The path mini-language (``M L H V C S Q T A Z`` in absolute and relative
form) is parsed by ``svg.path``, which resolves relative coordinates and
smooth control points into absolute segments with complex-number points.
"""

from __future__ import annotations

from dataclasses import dataclass

from svg.path import Move, parse_path
from svg.path import Path as SegmentPath


class PathSyntaxError(ValueError):
    """Raised when path data does not follow the SVG path grammar."""


def parse_path_data(text: str) -> SegmentPath:
    """
    Parse path data into absolute segments.

    Blank input yields an empty path. Anything else has to start with a
    moveto, as the SVG grammar requires.

    Raises:
        PathSyntaxError: On malformed data
    """
    if not text.strip():
        return SegmentPath()
    try:
        segments = parse_path(text)
    except ValueError as exc:
        # svg.path raises InvalidPathError (a ValueError) for grammar errors
        raise PathSyntaxError(str(exc)) from exc
    if segments and not isinstance(segments[0], Move):
        raise PathSyntaxError("path data must begin with a moveto")
    return segments


@dataclass(frozen=True)
class PathGeometry:
    """Parsed vector path."""

    segments: SegmentPath

    @classmethod
    def from_svg(cls, text: str) -> PathGeometry:
        return cls(parse_path_data(text))

    def __len__(self) -> int:
        return len(self.segments)
