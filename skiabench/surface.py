# this_file: skiabench/surface.py
"""
Raster surface allocation and scoped canvas transforms.
"""

from __future__ import annotations

from dataclasses import dataclass

import skia

from .base import SurfaceAllocationError


class RasterSurface:
    """
    Premultiplied N32 raster surface with its bound canvas.
    """

    def __init__(self, surface: skia.Surface, width: int, height: int):
        self._surface = surface
        self._canvas = surface.getCanvas()
        self.width = width
        self.height = height

    @classmethod
    def allocate(cls, width: int, height: int) -> RasterSurface:
        """
        Allocate a raster surface.

        Raises:
            SurfaceAllocationError: For non-positive sizes or when Skia refuses
                the allocation (e.g. the buffer would not fit in memory)
        """
        if width <= 0 or height <= 0:
            raise SurfaceAllocationError(f"Invalid surface size {width}x{height}")
        try:
            surface = skia.Surface.MakeRasterN32Premul(width, height)
        except (RuntimeError, ValueError, MemoryError) as exc:
            raise SurfaceAllocationError(
                f"Failed to allocate {width}x{height} surface: {exc}"
            ) from exc
        if surface is None:
            raise SurfaceAllocationError(f"Failed to allocate {width}x{height} surface")
        return cls(surface, width, height)

    @property
    def canvas(self) -> skia.Canvas:
        return self._canvas

    def snapshot(self) -> skia.Image:
        """Immutable copy of the current pixels."""
        return self._surface.makeImageSnapshot()


class TransformScope:
    """
    Save the canvas state on entry and restore it on every exit path.

    Restoring to the recorded save count also unwinds any nested saves a
    stage forgot to balance.
    """

    def __init__(self, canvas):
        self.canvas = canvas
        self._save_count: int | None = None

    def __enter__(self):
        self._save_count = self.canvas.save()
        return self.canvas

    def __exit__(self, exc_type, exc, tb):
        self.canvas.restoreToCount(self._save_count)
        self._save_count = None
        return False


@dataclass(frozen=True, slots=True)
class Placement:
    """Local translate followed by a uniform scale."""

    dx: float = 0.0
    dy: float = 0.0
    scale: float = 1.0

    @classmethod
    def of(cls, spec: tuple[float, float, float]) -> Placement:
        dx, dy, scale = spec
        return cls(float(dx), float(dy), float(scale))

    def apply(self, canvas) -> None:
        if self.dx or self.dy:
            canvas.translate(self.dx, self.dy)
        if self.scale != 1.0:
            canvas.scale(self.scale, self.scale)
