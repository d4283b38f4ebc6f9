# this_file: skiabench/stages.py
"""
Element renderers for the vector path, bitmap and SVG stages.
"""

from __future__ import annotations

from pathlib import Path

import skia
from svg.path import Arc, Close, CubicBezier, Line, Move, QuadraticBezier

from .assets import AssetPaths
from .base import (
    BaseStage,
    GeometryParseError,
    ImageDecodeError,
    StageWarning,
    SvgParseError,
)
from .config import HarnessConfig
from .constants import EARTH_PATH, PATH_PLACEMENT, RASTER_PLACEMENT, SVG_PLACEMENT
from .pathdata import PathGeometry, PathSyntaxError
from .surface import Placement
from .text import TextStage


def to_skia_path(geometry: PathGeometry) -> skia.Path:
    """Replay parsed segments into a skia.Path."""
    path = skia.Path()
    for segment in geometry.segments:
        end = segment.end
        # Close derives from the same line base class, so test it first
        if isinstance(segment, Close):
            path.close()
        elif isinstance(segment, Move):
            path.moveTo(end.real, end.imag)
        elif isinstance(segment, Line):
            path.lineTo(end.real, end.imag)
        elif isinstance(segment, QuadraticBezier):
            control = segment.control
            path.quadTo(control.real, control.imag, end.real, end.imag)
        elif isinstance(segment, CubicBezier):
            c1, c2 = segment.control1, segment.control2
            path.cubicTo(c1.real, c1.imag, c2.real, c2.imag, end.real, end.imag)
        elif isinstance(segment, Arc):
            path.arcTo(
                segment.radius.real,
                segment.radius.imag,
                segment.rotation,
                skia.Path.ArcSize.kLarge_ArcSize if segment.arc else skia.Path.ArcSize.kSmall_ArcSize,
                skia.PathDirection.kCW if segment.sweep else skia.PathDirection.kCCW,
                end.real,
                end.imag,
            )
        else:
            raise ValueError(f"unhandled path segment: {type(segment).__name__}")
    return path


class PathStage(BaseStage):
    """Fill a vector path in solid black."""

    stage = "path"

    def __init__(
        self,
        path_data: str = EARTH_PATH,
        *,
        source: Path | None = None,
        placement: Placement | None = None,
    ):
        self.path_data = path_data
        self.source = source
        self.placement = placement or Placement.of(PATH_PLACEMENT)
        self._paint = skia.Paint(Color=skia.ColorBLACK, AntiAlias=True)

    @classmethod
    def from_file(cls, source: Path, **kwargs) -> PathStage:
        return cls(source.read_text(encoding="utf-8", errors="replace"), source=source, **kwargs)

    def geometry(self) -> PathGeometry:
        try:
            return PathGeometry.from_svg(self.path_data)
        except PathSyntaxError as exc:
            origin = self.source or "embedded geometry"
            raise GeometryParseError(f"Invalid path data in {origin}: {exc}") from exc

    def render(self, canvas) -> list[StageWarning]:
        self.placement.apply(canvas)
        canvas.drawPath(to_skia_path(self.geometry()), self._paint)
        return []

    def summary(self):
        return {"stage": self.stage, "source": str(self.source) if self.source else "embedded"}


class RasterStage(BaseStage):
    """Blit a decoded bitmap, letting the placement transform do the resize."""

    stage = "raster"

    def __init__(self, image_path: Path, *, placement: Placement | None = None):
        self.image_path = image_path
        self.placement = placement or Placement.of(RASTER_PLACEMENT)
        self._paint = skia.Paint(AntiAlias=True)
        self._sampling = skia.SamplingOptions(skia.FilterMode.kLinear, skia.MipmapMode.kLinear)

    def decode(self) -> skia.Image:
        data = skia.Data.MakeWithCopy(self.image_path.read_bytes())
        image = skia.Image.MakeFromEncoded(data)
        if image is None:
            raise ImageDecodeError(f"Failed to decode image {self.image_path}")
        return image

    def render(self, canvas) -> list[StageWarning]:
        self.placement.apply(canvas)
        image = self.decode()
        rect = skia.Rect.MakeWH(image.width(), image.height())
        canvas.drawImageRect(
            image,
            rect,
            rect,
            self._sampling,
            self._paint,
            skia.Canvas.kFast_SrcRectConstraint,
        )
        return []

    def summary(self):
        return {"stage": self.stage, "image": self.image_path.name}


class SvgStage(BaseStage):
    """Render an SVG document through Skia's SVG module."""

    stage = "svg"

    def __init__(self, svg_path: Path, *, placement: Placement | None = None):
        self.svg_path = svg_path
        self.placement = placement or Placement.of(SVG_PLACEMENT)

    def parse(self) -> skia.SVGDOM:
        # The stream borrows the buffer, keep it referenced until parsed
        raw = self.svg_path.read_bytes()
        stream = skia.MemoryStream(raw)
        dom = skia.SVGDOM.MakeFromStream(stream)
        if dom is None:
            raise SvgParseError(f"Failed to parse SVG {self.svg_path}")
        return dom

    def render(self, canvas) -> list[StageWarning]:
        self.placement.apply(canvas)
        self.parse().render(canvas)
        return []

    def summary(self):
        return {"stage": self.stage, "svg": self.svg_path.name}


def build_stages(config: HarnessConfig, assets: AssetPaths) -> list[BaseStage]:
    """
    Instantiate the enabled stages in pipeline order.

    Args:
        config: Harness configuration
        assets: Files resolved by resolve_assets()
    """
    builders = {
        "path": lambda: (
            PathStage.from_file(assets.path_data) if assets.path_data else PathStage()
        ),
        "raster": lambda: RasterStage(assets.raster),
        "text": lambda: TextStage(assets.font),
        "svg": lambda: SvgStage(assets.svg),
    }
    return [builders[name]() for name in config.enabled_stages]
