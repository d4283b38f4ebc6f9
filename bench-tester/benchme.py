#!/usr/bin/env python3
"""skiabench Pipeline Testing & Benchmarking Tool

Renders the composed frame, benchmarks each pipeline stage and reports
what the asset directory contains.

Usage:
    python benchme.py render --dir=assets        # One frame, verified with Pillow
    python benchme.py bench --dir=assets         # Per-stage timings + JSON report
    python benchme.py info --dir=assets          # Environment and asset overview
"""

import json
import sys
import time
from pathlib import Path
from typing import Optional

import fire

# Try importing skiabench - fail gracefully with installation instructions
try:
    import skia
    import skiabench
    from skiabench.bench import run_benchmark, verify_png
    from skiabench.constants import FONT_FILE, RASTER_FILE, STAGE_ORDER, SVG_FILE
except ImportError as exc:
    print(f"Error: skiabench not importable ({exc})")
    print("\nTo install:")
    print("  pip install -e .")
    sys.exit(1)


class SkiaBenchTester:
    """skiabench render, benchmark and environment tool"""

    def __init__(self):
        self.base_dir = Path(__file__).parent
        self.output_dir = self.base_dir / "output"
        self.output_dir.mkdir(exist_ok=True)

    def _config(self, dir: str, scale: int, stages: Optional[str], save: bool = True):
        selected = set(stages.split(",")) if stages else set(STAGE_ORDER)
        unknown = selected - set(STAGE_ORDER)
        if unknown:
            raise ValueError(f"Unknown stage(s): {', '.join(sorted(unknown))}")
        return skiabench.HarnessConfig(
            working_dir=Path(dir),
            scale=scale,
            draw_path="path" in selected,
            draw_raster="raster" in selected,
            draw_text="text" in selected,
            draw_svg="svg" in selected,
            save=save,
        )

    def render(self, dir: str, scale: int = 1, stages: Optional[str] = None):
        """Render one frame and verify the written PNG

        Args:
            dir: Asset directory (also receives output-rust.png)
            scale: Surface scale multiplier (default: 1)
            stages: Comma-separated subset, e.g. 'path,svg' (default: all)

        Examples:
            python benchme.py render --dir=assets
            python benchme.py render --dir=assets --scale=2 --stages=path,text
        """
        print("skiabench Pipeline Rendering Test")
        print("=" * 80)

        try:
            config = self._config(dir, scale, stages)
            start = time.perf_counter()
            composer = skiabench.FrameComposer(config, skiabench.resolve_assets(config))
            report = composer.compose()
            elapsed = time.perf_counter() - start
        except (skiabench.HarnessError, ValueError) as e:
            print(f"Error: {e}")
            return 1

        for outcome in report.outcomes:
            if outcome.ok:
                status = "✓"
            elif outcome.skipped:
                status = "✗ skipped"
            else:
                status = "⚠ degraded"
            print(f"  {outcome.stage:10s} {outcome.elapsed * 1000:8.3f}ms  {status}")
            for warning in outcome.warnings:
                print(f"      {warning.message}")

        width, height = verify_png(report.output_path)
        size_kb = report.output_bytes / 1024
        print(f"\n{'=' * 80}")
        print(f"Wrote {report.output_path} ({width}x{height}, {size_kb:.1f}KB) in {elapsed * 1000:.2f}ms")
        return 0

    def bench(
        self,
        dir: str,
        iterations: int = 20,
        warmup: int = 2,
        scale: int = 1,
        stages: Optional[str] = None,
        save: bool = True,
    ):
        """Benchmark the pipeline stage by stage

        Args:
            dir: Asset directory
            iterations: Timed pipeline runs (default: 20)
            warmup: Untimed runs before timing (default: 2)
            scale: Surface scale multiplier (default: 1)
            stages: Comma-separated subset (default: all)
            save: Include PNG encoding in every run (default: True)

        Examples:
            python benchme.py bench --dir=assets
            python benchme.py bench --dir=assets --iterations=200 --save=False
        """
        print("skiabench Pipeline Benchmark")
        print("=" * 80)
        print(f"Iterations: {iterations} (+{warmup} warmup)")
        print(f"Scale: {scale}\n")

        try:
            config = self._config(dir, scale, stages, save=save)
            result = run_benchmark(config, iterations=iterations, warmup=warmup)
        except (skiabench.HarnessError, ValueError) as e:
            print(f"Error: {e}")
            return 1

        print(f"{'Stage':<12} {'Mean (ms)':>12} {'Median (ms)':>12} {'p95 (ms)':>12} {'Ops/sec':>12} {'Warnings':>10}")
        print("-" * 80)
        for timing in result.stages:
            print(
                f"{timing.stage:<12} {timing.mean_ms:>12.3f} {timing.median_ms:>12.3f} "
                f"{timing.p95_ms:>12.3f} {timing.ops_per_sec:>12.1f} {timing.warnings:>10d}"
            )
        print("-" * 80)
        print(f"{'pipeline':<12} {result.per_iteration_ms:>12.3f}")

        report_path = self.output_dir / "benchmark_report.json"
        report = {
            "skiabench": skiabench.__version__,
            "skia": getattr(skia, "__version__", "unknown"),
            "scale": scale,
            **result.to_dict(),
        }
        report_path.write_text(json.dumps(report, indent=2))
        print(f"\nReport: {report_path}")
        return 0

    def info(self, dir: str = "."):
        """Display information about the environment and the asset directory"""
        print("skiabench Testing Environment")
        print("=" * 80)

        print(f"skiabench Version: {skiabench.__version__}")
        print(f"skia-python Version: {getattr(skia, '__version__', 'unknown')}")
        print(f"Python Version: {sys.version.split()[0]}")
        print(f"Asset Directory: {Path(dir).resolve()}\n")

        print("Assets:")
        print("-" * 80)
        for stage, name in (("raster", RASTER_FILE), ("text", FONT_FILE), ("svg", SVG_FILE)):
            path = Path(dir) / name
            exists = "✓" if path.exists() else "✗"
            size = f"{path.stat().st_size / 1024:.1f}KB" if path.exists() else "N/A"
            print(f"  {exists} {stage:8s} {size:>10s}  {name}")

        print("\nStages (pipeline order):")
        print("-" * 80)
        config = skiabench.HarnessConfig(working_dir=Path(dir))
        try:
            stages = skiabench.build_stages(config, skiabench.resolve_assets(config))
        except skiabench.HarnessError as e:
            print(f"  Error: {e}")
            stages = []
        for stage in stages:
            details = ", ".join(f"{k}={v}" for k, v in stage.summary().items() if k != "stage")
            print(f"  {stage.stage:8s} {details}")
        print("  " + " → ".join(STAGE_ORDER) + " → encode")

        print("\n" + "=" * 80)


if __name__ == "__main__":
    fire.Fire(SkiaBenchTester)
