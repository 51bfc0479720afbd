"""Application logging setup.

- Console handler always (stdout of the CLI / docker logs).
- Optional file handler under LOG_DIR, rotated daily (midnight, UTC) with
  `retention_days` backups kept.
"""
from __future__ import annotations

import logging
import os
from logging.handlers import TimedRotatingFileHandler

_LOG_FORMAT = "%(asctime)s [%(levelname)-8s] %(name)s: %(message)s"
_LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Handlers we installed, so reconfiguration can replace them.
_file_handler: logging.Handler | None = None
_console_handler: logging.Handler | None = None


def setup_logging(level: str = "INFO", log_dir: str = "", retention_days: int = 30) -> None:
    global _file_handler, _console_handler

    level_str = (level or "INFO").strip().upper()
    if level_str not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
        level_str = "INFO"
    log_level = getattr(logging, level_str, logging.INFO)

    root = logging.getLogger()

    if _file_handler and _file_handler in root.handlers:
        root.removeHandler(_file_handler)
        _file_handler.close()
    if _console_handler and _console_handler in root.handlers:
        root.removeHandler(_console_handler)
    _file_handler = None

    formatter = logging.Formatter(_LOG_FORMAT, datefmt=_LOG_DATE_FORMAT)

    ch = logging.StreamHandler()
    ch.setLevel(log_level)
    ch.setFormatter(formatter)
    _console_handler = ch
    root.addHandler(ch)

    log_dir = (log_dir or "").strip()
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        fh = TimedRotatingFileHandler(
            os.path.join(log_dir, "ldapops.log"),
            when="midnight",
            interval=1,
            backupCount=max(1, int(retention_days)),
            encoding="utf-8",
            utc=True,
        )
        fh.suffix = "%Y-%m-%d"
        fh.setLevel(log_level)
        fh.setFormatter(formatter)
        _file_handler = fh
        root.addHandler(fh)

    root.setLevel(log_level)

    # Too chatty at INFO
    logging.getLogger("uvicorn.access").setLevel(max(log_level, logging.WARNING))
    logging.getLogger("ldap3").setLevel(max(log_level, logging.WARNING))

    logging.getLogger("ldapops").debug(
        "Logging configured: level=%s, file=%s", level_str, log_dir or "-",
    )
