"""Tests for the JSONL logging bootstrap."""

import json
import logging
from pathlib import Path

import pytest

from nsloader.logging_setup import JsonlHandler
from nsloader.logging_setup import init_json_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
    root.setLevel(level)


def test_handler_writes_jsonl(tmp_path: Path):
    log_file = tmp_path / "nested" / "log.jsonl"
    handler = JsonlHandler(log_file)
    record = logging.LogRecord("nsloader.resolver", logging.INFO, "resolver.py", 1, "found %s", ("Button",), None)
    record.identifier = "Vendor\\Button"

    handler.emit(record)

    payload = json.loads(log_file.read_text())
    assert payload["lvl"] == "INFO"
    assert payload["logger"] == "nsloader.resolver"
    assert payload["message"] == "found Button"
    assert payload["identifier"] == "Vendor\\Button"
    assert "pathname" not in payload


def test_init_replaces_previous_sink(tmp_path: Path, restore_root_logger):
    init_json_logging(tmp_path / "first.jsonl", "debug")
    handler = init_json_logging(tmp_path / "second.jsonl", "warning")

    sinks = [h for h in restore_root_logger.handlers if isinstance(h, JsonlHandler)]
    assert sinks == [handler]
    assert restore_root_logger.level == logging.WARNING


def test_unknown_level_defaults_to_info(tmp_path: Path, restore_root_logger):
    init_json_logging(tmp_path / "log.jsonl", "chatty")
    assert restore_root_logger.level == logging.INFO
