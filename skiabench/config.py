# this_file: skiabench/config.py
"""
Run configuration, built once from parsed command-line input.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .constants import CANVAS_SIZE, OUTPUT_FILE, STAGE_ORDER


@dataclass(frozen=True)
class HarnessConfig:
    """
    Immutable description of what one harness invocation does.

    Attributes:
        working_dir: Directory holding the assets and receiving the PNG
        loop_count: Number of independent pipeline runs
        scale: Integer surface scale multiplier
        canvas_size: Base canvas edge length before scaling
        draw_path: Run the path stage
        draw_raster: Run the image stage
        draw_text: Run the paragraph stage
        draw_svg: Run the SVG stage
        save: Encode the frame to PNG
        path_file: Optional path-description file replacing the embedded geometry
    """

    working_dir: Path
    loop_count: int = 1
    scale: int = 1
    canvas_size: int = CANVAS_SIZE
    draw_path: bool = True
    draw_raster: bool = True
    draw_text: bool = True
    draw_svg: bool = True
    save: bool = True
    path_file: Path | None = None

    def __post_init__(self):
        if self.loop_count < 0:
            raise ValueError("loop_count must not be negative")
        if self.scale < 1:
            raise ValueError("scale must be at least 1")
        if self.canvas_size < 1:
            raise ValueError("canvas_size must be positive")

    @classmethod
    def from_flags(
        cls,
        working_dir: Path | str,
        *,
        loop_count: int = 1,
        scale: int = 1,
        canvas_size: int = CANVAS_SIZE,
        path: bool = False,
        raster: bool = False,
        text: bool = False,
        svg: bool = False,
        save: bool = False,
        path_file: Path | str | None = None,
    ) -> HarnessConfig:
        """
        Build a config from individual stage toggles.

        When no toggle is set at all, every stage plus saving is enabled.
        """
        if not (path or raster or text or svg or save):
            path = raster = text = svg = save = True

        return cls(
            working_dir=Path(working_dir),
            loop_count=loop_count,
            scale=scale,
            canvas_size=canvas_size,
            draw_path=path,
            draw_raster=raster,
            draw_text=text,
            draw_svg=svg,
            save=save,
            path_file=Path(path_file) if path_file is not None else None,
        )

    @property
    def enabled_stages(self) -> tuple[str, ...]:
        """Enabled stage names in pipeline order."""
        flags = {
            "path": self.draw_path,
            "raster": self.draw_raster,
            "text": self.draw_text,
            "svg": self.draw_svg,
        }
        return tuple(name for name in STAGE_ORDER if flags[name])

    @property
    def surface_size(self) -> tuple[int, int]:
        edge = self.canvas_size * self.scale
        return (edge, edge)

    @property
    def output_path(self) -> Path:
        return self.working_dir / OUTPUT_FILE

    @property
    def path_file_path(self) -> Path | None:
        """Path-description file resolved against the working directory."""
        if self.path_file is None:
            return None
        if self.path_file.is_absolute():
            return self.path_file
        return self.working_dir / self.path_file
