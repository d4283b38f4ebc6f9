"""
skiabench - a smoke test and micro-benchmark for Skia rendering

Draws a vector path, a bitmap, a multi-color paragraph and an SVG document
onto one raster surface and writes the frame as PNG.

## Quick Start

```python
from skiabench import HarnessConfig, run_harness

config = HarnessConfig.from_flags("assets/", loop_count=10)
reports = run_harness(config)
```
"""

from __future__ import annotations

from .assets import AssetPaths, resolve_assets
from .base import (
    BaseStage,
    EncodeError,
    FontDecodeError,
    GeometryParseError,
    HarnessError,
    ImageDecodeError,
    MissingAssetError,
    StageError,
    StageWarning,
    SurfaceAllocationError,
    SvgParseError,
)
from .composer import FrameComposer, RunReport, StageOutcome, run_harness
from .config import HarnessConfig
from .encoder import save_to_png
from .pathdata import PathGeometry, PathSyntaxError, parse_path_data
from .stages import PathStage, RasterStage, SvgStage, build_stages
from .surface import Placement, RasterSurface, TransformScope
from .text import StyledTextRun, TextStage

__version__ = "0.1.0"

__all__ = [
    "AssetPaths",
    "BaseStage",
    "EncodeError",
    "FontDecodeError",
    "FrameComposer",
    "GeometryParseError",
    "HarnessConfig",
    "HarnessError",
    "ImageDecodeError",
    "MissingAssetError",
    "PathGeometry",
    "PathStage",
    "PathSyntaxError",
    "Placement",
    "RasterStage",
    "RasterSurface",
    "RunReport",
    "StageError",
    "StageOutcome",
    "StageWarning",
    "StyledTextRun",
    "SurfaceAllocationError",
    "SvgParseError",
    "SvgStage",
    "TextStage",
    "TransformScope",
    "build_stages",
    "parse_path_data",
    "resolve_assets",
    "run_harness",
    "save_to_png",
    "__version__",
]
