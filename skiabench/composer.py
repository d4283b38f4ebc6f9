# this_file: skiabench/composer.py
"""
Frame composition: clear, draw each enabled stage in its own transform scope,
then encode.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import skia
from loguru import logger

from .assets import AssetPaths, resolve_assets
from .base import BaseStage, StageError, StageWarning
from .config import HarnessConfig
from .encoder import save_to_png
from .stages import build_stages
from .surface import RasterSurface, TransformScope


@dataclass(slots=True)
class StageOutcome:
    """
    Result of one stage within one run.

    Attributes:
        stage: Stage name
        elapsed: Wall time spent in the stage, in seconds
        warnings: Degraded failures; a skipped warning means nothing was drawn
    """

    stage: str
    elapsed: float
    warnings: list[StageWarning] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.warnings

    @property
    def skipped(self) -> bool:
        return any(w.skipped for w in self.warnings)

    def to_dict(self) -> dict[str, Any]:
        return {
            "stage": self.stage,
            "elapsed_ms": self.elapsed * 1000,
            "warnings": [w.to_dict() for w in self.warnings],
        }


@dataclass(slots=True)
class RunReport:
    """Everything one pipeline run produced."""

    iteration: int
    width: int
    height: int
    outcomes: list[StageOutcome] = field(default_factory=list)
    output_path: Path | None = None
    output_bytes: int | None = None
    encode_elapsed: float = 0.0
    elapsed: float = 0.0

    @property
    def warnings(self) -> list[StageWarning]:
        return [w for outcome in self.outcomes for w in outcome.warnings]

    def outcome(self, stage: str) -> StageOutcome:
        for outcome in self.outcomes:
            if outcome.stage == stage:
                return outcome
        raise KeyError(stage)

    def to_dict(self) -> dict[str, Any]:
        return {
            "iteration": self.iteration,
            "size": [self.width, self.height],
            "stages": [outcome.to_dict() for outcome in self.outcomes],
            "output": str(self.output_path) if self.output_path else None,
            "output_bytes": self.output_bytes,
            "encode_ms": self.encode_elapsed * 1000,
            "elapsed_ms": self.elapsed * 1000,
        }


class FrameComposer:
    """
    Compose one frame per call to compose().

    Stages are rebuilt for every frame so repetitions share no decoded state.
    """

    def __init__(self, config: HarnessConfig, assets: AssetPaths):
        self.config = config
        self.assets = assets

    def _run_stage(self, stage: BaseStage, canvas) -> StageOutcome:
        start = time.perf_counter()
        with TransformScope(canvas):
            try:
                warnings = stage.render(canvas)
            except StageError as exc:
                logger.debug(f"{stage.stage}: skipped ({exc})")
                warnings = [StageWarning(stage.stage, str(exc), skipped=True)]
        elapsed = time.perf_counter() - start
        logger.debug(f"{stage.stage}: {elapsed * 1000:.3f}ms")
        return StageOutcome(stage.stage, elapsed, warnings)

    def compose(self, iteration: int = 0) -> RunReport:
        """
        Run the pipeline once.

        Raises:
            SurfaceAllocationError: If the surface cannot be allocated
            EncodeError: If saving is enabled and the PNG cannot be written
        """
        start = time.perf_counter()
        width, height = self.config.surface_size
        surface = RasterSurface.allocate(width, height)
        report = RunReport(iteration=iteration, width=width, height=height)

        canvas = surface.canvas
        canvas.clear(skia.ColorWHITE)
        canvas.scale(self.config.scale, self.config.scale)

        for stage in build_stages(self.config, self.assets):
            report.outcomes.append(self._run_stage(stage, canvas))

        if self.config.save:
            encode_start = time.perf_counter()
            report.output_bytes = save_to_png(surface, self.config.output_path)
            report.encode_elapsed = time.perf_counter() - encode_start
            report.output_path = self.config.output_path

        report.elapsed = time.perf_counter() - start
        return report


def run_harness(config: HarnessConfig) -> list[RunReport]:
    """
    Resolve assets once, then compose ``config.loop_count`` independent frames.

    Raises:
        MissingAssetError: Before any drawing, if an enabled stage lacks its file
        SurfaceAllocationError: If a surface cannot be allocated
        EncodeError: If the output PNG cannot be written
    """
    assets = resolve_assets(config)
    composer = FrameComposer(config, assets)

    reports = []
    for iteration in range(config.loop_count):
        report = composer.compose(iteration)
        logger.info(
            f"run {iteration + 1}/{config.loop_count}: {report.elapsed * 1000:.2f}ms, "
            f"{len(report.warnings)} warning(s)"
        )
        reports.append(report)
    return reports
