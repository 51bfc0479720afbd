from __future__ import annotations

import logging
from logging.handlers import TimedRotatingFileHandler

import pytest

from ldapops import log_config


@pytest.fixture
def root_logger():
    root = logging.getLogger()
    saved = (list(root.handlers), root.level)
    yield root
    for h in list(root.handlers):
        if h not in saved[0]:
            root.removeHandler(h)
            h.close()
    root.setLevel(saved[1])


def test_console_only_by_default(root_logger):
    log_config.setup_logging("debug")

    assert root_logger.level == logging.DEBUG
    assert log_config._console_handler in root_logger.handlers
    assert log_config._file_handler is None


def test_file_handler_when_log_dir_set(root_logger, tmp_path):
    log_config.setup_logging("INFO", str(tmp_path / "logs"))

    fh = log_config._file_handler
    assert isinstance(fh, TimedRotatingFileHandler)
    assert fh in root_logger.handlers
    logging.getLogger("ldapops.test").info("hello")
    fh.flush()
    assert "hello" in (tmp_path / "logs" / "ldapops.log").read_text(encoding="utf-8")


def test_reconfigure_replaces_handlers(root_logger, tmp_path):
    log_config.setup_logging("INFO", str(tmp_path))
    first_console = log_config._console_handler
    first_file = log_config._file_handler

    log_config.setup_logging("WARNING")

    assert first_console not in root_logger.handlers
    assert first_file not in root_logger.handlers
    assert root_logger.level == logging.WARNING


def test_unknown_level_falls_back_to_info(root_logger):
    log_config.setup_logging("chatty")
    assert root_logger.level == logging.INFO
