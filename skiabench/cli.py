"""
skiabench command line interface

Click command mirroring the original harness flags: --dir, --loop, --scale and
one toggle per pipeline stage.
"""

import json
import sys
from pathlib import Path
from typing import Optional

import click
from loguru import logger

from . import __version__
from .base import HarnessError
from .composer import run_harness
from .config import HarnessConfig
from .constants import CANVAS_SIZE


def configure_logging(verbose: bool, quiet: bool) -> None:
    """Route loguru to stderr at the level picked on the command line."""
    level = "DEBUG" if verbose else "ERROR" if quiet else "WARNING"
    logger.remove()
    logger.add(sys.stderr, level=level, format="<level>{level: <8}</level> {message}")


@click.command()
@click.version_option(version=__version__, prog_name="skiabench")
@click.option(
    "--dir",
    "working_dir",
    required=True,
    type=click.Path(file_okay=False, path_type=Path),
    help="Directory with mars.jpg, pinocchio.svg, Adigiana_Ultra.ttf; receives output-rust.png",
)
@click.option("--loop", "loop_count", type=click.IntRange(min=0), default=1, show_default=True, help="Pipeline repetitions")
@click.option("--scale", type=click.IntRange(min=1), default=1, show_default=True, help="Uniform surface scale")
@click.option("--size", "canvas_size", type=click.IntRange(min=1), default=CANVAS_SIZE, show_default=True, help="Base canvas edge in pixels")
@click.option("--path", "draw_path", is_flag=True, help="Fill the vector path")
@click.option("--raster", "draw_raster", is_flag=True, help="Draw the bitmap")
@click.option("--text", "draw_text", is_flag=True, help="Lay out and paint the paragraph")
@click.option("--svg", "draw_svg", is_flag=True, help="Render the SVG document")
@click.option("--save", is_flag=True, help="Write output-rust.png")
@click.option(
    "--path-file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Path-description file (relative to --dir) replacing the embedded geometry",
)
@click.option("--report", "report_file", type=click.Path(dir_okay=False, path_type=Path), help="Write run reports as JSON")
@click.option("-v", "--verbose", is_flag=True, help="Log stage timings and degraded failures")
@click.option("-q", "--quiet", is_flag=True, help="Only log errors")
def main(
    working_dir: Path,
    loop_count: int,
    scale: int,
    canvas_size: int,
    draw_path: bool,
    draw_raster: bool,
    draw_text: bool,
    draw_svg: bool,
    save: bool,
    path_file: Optional[Path],
    report_file: Optional[Path],
    verbose: bool,
    quiet: bool,
):
    """Render a path, a bitmap, a paragraph and an SVG with Skia.

    With no stage toggles every stage runs and the frame is saved.
    """
    configure_logging(verbose, quiet)

    config = HarnessConfig.from_flags(
        working_dir,
        loop_count=loop_count,
        scale=scale,
        canvas_size=canvas_size,
        path=draw_path,
        raster=draw_raster,
        text=draw_text,
        svg=draw_svg,
        save=save,
        path_file=path_file,
    )

    try:
        reports = run_harness(config)
    except HarnessError as exc:
        raise click.ClickException(str(exc)) from exc

    if report_file is not None:
        payload = {
            "version": __version__,
            "stages": list(config.enabled_stages),
            "runs": [report.to_dict() for report in reports],
        }
        report_file.write_text(json.dumps(payload, indent=2), encoding="utf-8")


if __name__ == "__main__":
    main()
