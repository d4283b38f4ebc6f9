# this_file: skiabench/bench.py
"""
Benchmark helpers: timed repetitions and per-stage statistics.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import numpy as np
from PIL import Image

from .assets import resolve_assets
from .composer import FrameComposer, RunReport
from .config import HarnessConfig


@dataclass(slots=True)
class StageTiming:
    """
    Aggregated timings for one stage (milliseconds).
    """

    stage: str
    samples: int
    mean_ms: float
    median_ms: float
    p95_ms: float
    warnings: int = 0

    @property
    def ops_per_sec(self) -> float:
        return 1000.0 / self.mean_ms if self.mean_ms > 0 else 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "stage": self.stage,
            "samples": self.samples,
            "mean_ms": self.mean_ms,
            "median_ms": self.median_ms,
            "p95_ms": self.p95_ms,
            "ops_per_sec": self.ops_per_sec,
            "warnings": self.warnings,
        }


@dataclass(slots=True)
class BenchResult:
    """
    Results from benchmarking the pipeline.

    Attributes:
        iterations: Number of timed runs
        elapsed: Total wall time of the timed runs in seconds
        stages: Per-stage timings in pipeline order, "encode" last when saving
    """

    iterations: int
    elapsed: float
    stages: list[StageTiming] = field(default_factory=list)

    @property
    def per_iteration_ms(self) -> float:
        """Average time per pipeline run in milliseconds."""
        return (self.elapsed / self.iterations) * 1000

    def to_dict(self) -> dict[str, Any]:
        return {
            "iterations": self.iterations,
            "elapsed": self.elapsed,
            "per_iteration_ms": self.per_iteration_ms,
            "stages": [timing.to_dict() for timing in self.stages],
        }


def _timing(stage: str, samples: list[float], warnings: int = 0) -> StageTiming:
    millis = np.asarray(samples, dtype=np.float64) * 1000.0
    return StageTiming(
        stage=stage,
        samples=int(millis.size),
        mean_ms=float(millis.mean()),
        median_ms=float(np.median(millis)),
        p95_ms=float(np.percentile(millis, 95)),
        warnings=warnings,
    )


def summarize(reports: list[RunReport]) -> list[StageTiming]:
    """
    Collapse run reports into per-stage timings, preserving pipeline order.
    """
    samples: dict[str, list[float]] = {}
    warnings: dict[str, int] = {}
    encode: list[float] = []

    for report in reports:
        for outcome in report.outcomes:
            samples.setdefault(outcome.stage, []).append(outcome.elapsed)
            warnings[outcome.stage] = warnings.get(outcome.stage, 0) + len(outcome.warnings)
        if report.output_path is not None:
            encode.append(report.encode_elapsed)

    timings = [_timing(stage, values, warnings[stage]) for stage, values in samples.items()]
    if encode:
        timings.append(_timing("encode", encode))
    return timings


def run_benchmark(config: HarnessConfig, iterations: int = 20, warmup: int = 2) -> BenchResult:
    """
    Time ``iterations`` pipeline runs after ``warmup`` untimed ones.

    ``config.loop_count`` is ignored; the iteration counts given here win.
    """
    if iterations <= 0:
        raise ValueError("iterations must be positive")

    composer = FrameComposer(config, resolve_assets(config))
    for i in range(warmup):
        composer.compose(i)

    reports = []
    start = time.perf_counter()
    for i in range(iterations):
        reports.append(composer.compose(i))
    elapsed = time.perf_counter() - start

    return BenchResult(iterations=iterations, elapsed=elapsed, stages=summarize(reports))


def verify_png(path: Path) -> tuple[int, int]:
    """
    Open the written PNG and return its (width, height).

    Raises:
        PIL.UnidentifiedImageError: If the file is not a decodable image
    """
    with Image.open(path) as img:
        img.load()
        if img.format != "PNG":
            raise ValueError(f"{path} is {img.format}, expected PNG")
        return img.size
