"""Tests for the diagnostic CLI."""

import json
import logging
from pathlib import Path
from textwrap import dedent

import pytest
from click.testing import CliRunner

from nsloader.cli import cli
from nsloader.logging_setup import JsonlHandler


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    path = tmp_path / "nsloader.yaml"
    path.write_text(
        dedent("""
            base_path: .
            paths:
              - path: lib
            prefixes:
              widgets: [Abstract]
            modules:
              Widgets:
                path: widgets
        """)
    )
    return path


def test_which_found(runner: CliRunner, config_file: Path, make_file):
    expected = make_file("widgets/Button.py")

    result = runner.invoke(cli, ["which", "Widgets\\AbstractButton", "--config", str(config_file)])

    assert result.exit_code == 0
    assert result.output.strip() == str(expected)


def test_which_not_found(runner: CliRunner, config_file: Path):
    result = runner.invoke(cli, ["which", "Widgets\\Missing", "--config", str(config_file)])
    assert result.exit_code == 1


def test_which_base_path_override(runner: CliRunner, tmp_path: Path, make_file):
    expected = make_file("other/lib/Foo/Bar.py")
    config = tmp_path / "paths.yaml"
    config.write_text("paths:\n  - path: lib\n")

    result = runner.invoke(
        cli, ["which", "Foo\\Bar", "--config", str(config), "--base-path", str(tmp_path / "other")]
    )

    assert result.exit_code == 0
    assert result.output.strip() == str(expected)


def test_invalid_config_reported(runner: CliRunner, tmp_path: Path):
    config = tmp_path / "bad.yaml"
    config.write_text("paths: 5\n")

    result = runner.invoke(cli, ["show", "--config", str(config)])

    assert result.exit_code == 1
    assert "Invalid settings" in result.output


def test_show(runner: CliRunner, config_file: Path):
    result = runner.invoke(cli, ["show", "--config", str(config_file)])

    assert result.exit_code == 0
    assert "Options" in result.output
    assert "Search Paths" in result.output
    assert "Abstract" in result.output
    assert "Widgets" in result.output


def test_show_without_config(runner: CliRunner):
    result = runner.invoke(cli, ["show"])

    assert result.exit_code == 0
    assert "No search paths registered" in result.output
    assert "No modules declared" in result.output


def test_log_file(runner: CliRunner, config_file: Path, tmp_path: Path, make_file):
    make_file("widgets/Button.py")
    log_file = tmp_path / "logs" / "nsloader.jsonl"
    root = logging.getLogger()
    previous_level = root.level

    try:
        result = runner.invoke(
            cli,
            ["--log-file", str(log_file), "--log-level", "debug", "which", "Widgets\\Button", "--config", str(config_file)],
        )
        assert result.exit_code == 0
    finally:
        for handler in [h for h in root.handlers if isinstance(h, JsonlHandler)]:
            root.removeHandler(handler)
        root.setLevel(previous_level)

    records = [json.loads(line) for line in log_file.read_text().splitlines()]
    assert any("module tree" in record["message"] for record in records)
