"""Tests for application logging setup."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from core.logging import LOG_FILE_NAME, ROOT_LOGGER_NAME, configure_logging, get_logger


@pytest.fixture(autouse=True)
def reset_app_logger():
    yield
    root = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    root.setLevel(logging.NOTSET)


def test_get_logger_is_namespaced():
    assert get_logger("extractors.browser.safari").name == f"{ROOT_LOGGER_NAME}.extractors.browser.safari"
    assert get_logger().name == ROOT_LOGGER_NAME


def test_console_only_without_log_dir():
    root = configure_logging(None, logging.WARNING)

    assert root.level == logging.WARNING
    assert len(root.handlers) == 1
    assert type(root.handlers[0]) is logging.StreamHandler


def test_file_handler_writes_utc_lines(tmp_path: Path):
    log_dir = tmp_path / "logs"
    configure_logging(log_dir, logging.INFO, max_bytes=1024, backup_count=1)

    get_logger("tests").info("hello %s", "world")
    for handler in logging.getLogger(ROOT_LOGGER_NAME).handlers:
        handler.flush()

    line = (log_dir / LOG_FILE_NAME).read_text(encoding="utf-8").strip().splitlines()[-1]
    assert line.endswith("INFO safaritabs.tests hello world")
    assert line[19] == "Z"


def test_reconfigure_replaces_handlers(tmp_path: Path):
    configure_logging(tmp_path / "logs")
    root = configure_logging(tmp_path / "logs")

    assert len(root.handlers) == 2
