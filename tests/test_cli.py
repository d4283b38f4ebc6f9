# this_file: tests/test_cli.py

"""Tests for the click command line interface."""

import json
import sys

import pytest
from click.testing import CliRunner
from loguru import logger

from skiabench import __version__
from skiabench.bench import verify_png
from skiabench.cli import main
from skiabench.constants import EARTH_PATH, OUTPUT_FILE, RASTER_FILE

from conftest import is_white, load_rgba


@pytest.fixture(autouse=True)
def restore_logging():
    yield
    logger.remove()
    logger.add(sys.stderr)


@pytest.fixture
def runner():
    return CliRunner()


def test_version(runner):
    result = runner.invoke(main, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_dir_is_required(runner):
    result = runner.invoke(main, [])
    assert result.exit_code != 0
    assert "--dir" in result.output


def test_default_runs_everything(runner, asset_dir):
    result = runner.invoke(main, ["--dir", str(asset_dir)])
    assert result.exit_code == 0, result.output
    assert verify_png(asset_dir / OUTPUT_FILE) == (512, 512)


def test_scale_flag(runner, asset_dir):
    result = runner.invoke(main, ["--dir", str(asset_dir), "--scale", "2", "--path", "--save"])
    assert result.exit_code == 0, result.output
    assert verify_png(asset_dir / OUTPUT_FILE) == (1024, 1024)


def test_save_only_is_background(runner, tmp_path):
    result = runner.invoke(main, ["--dir", str(tmp_path), "--save"])
    assert result.exit_code == 0, result.output
    assert is_white(load_rgba(tmp_path / OUTPUT_FILE))


def test_missing_asset_exits_nonzero_without_output(runner, asset_dir):
    (asset_dir / RASTER_FILE).unlink()
    result = runner.invoke(main, ["--dir", str(asset_dir)])
    assert result.exit_code == 1
    assert "File doesn't exist" in result.output
    assert RASTER_FILE in result.output
    assert not (asset_dir / OUTPUT_FILE).exists()


def test_missing_asset_for_disabled_stage_is_fine(runner, tmp_path):
    result = runner.invoke(main, ["--dir", str(tmp_path), "--path", "--save"])
    assert result.exit_code == 0, result.output


def test_path_file(runner, tmp_path):
    (tmp_path / "earth.path").write_text(EARTH_PATH, encoding="utf-8")
    result = runner.invoke(
        main, ["--dir", str(tmp_path), "--path", "--save", "--path-file", "earth.path"]
    )
    assert result.exit_code == 0, result.output
    assert not is_white(load_rgba(tmp_path / OUTPUT_FILE))


def test_missing_path_file(runner, tmp_path):
    result = runner.invoke(
        main, ["--dir", str(tmp_path), "--path", "--path-file", "missing.path"]
    )
    assert result.exit_code == 1
    assert "missing.path" in result.output


def test_corrupt_asset_does_not_change_exit_status(runner, asset_dir):
    (asset_dir / RASTER_FILE).write_bytes(b"garbage")
    result = runner.invoke(main, ["--dir", str(asset_dir)])
    assert result.exit_code == 0, result.output
    assert (asset_dir / OUTPUT_FILE).exists()


def test_zero_loops_does_nothing(runner, asset_dir):
    result = runner.invoke(main, ["--dir", str(asset_dir), "--loop", "0"])
    assert result.exit_code == 0
    assert not (asset_dir / OUTPUT_FILE).exists()


def test_zero_scale_rejected(runner, asset_dir):
    result = runner.invoke(main, ["--dir", str(asset_dir), "--scale", "0"])
    assert result.exit_code == 2


def test_report_file(runner, asset_dir, tmp_path_factory):
    report_path = tmp_path_factory.mktemp("reports") / "runs.json"
    result = runner.invoke(
        main, ["--dir", str(asset_dir), "--loop", "2", "--report", str(report_path), "-q"]
    )
    assert result.exit_code == 0, result.output

    data = json.loads(report_path.read_text(encoding="utf-8"))
    assert data["version"] == __version__
    assert data["stages"] == ["path", "raster", "text", "svg"]
    assert len(data["runs"]) == 2
    text_stage = data["runs"][0]["stages"][2]
    assert text_stage["stage"] == "text"
    assert text_stage["warnings"][0]["skipped"] is False
