"""Logging bootstrap for the city-vitals process.

// [LAW:single-enforcer] Only this module attaches handlers to the city_vitals logger.

Every module logs through logging.getLogger(__name__); records propagate up
to the "city_vitals" logger, which writes to stderr and to a rotating file.
The stderr handler is detached while the TUI owns the terminal.

Environment:
    CITY_VITALS_LOG_LEVEL  level name (default INFO)
    CITY_VITALS_LOG_FILE   explicit log file path
    CITY_VITALS_LOG_DIR    directory for a timestamped log file
"""

from __future__ import annotations

import logging
import os
import time
from dataclasses import dataclass
from logging.handlers import RotatingFileHandler
from pathlib import Path

ROOT_LOGGER = "city_vitals"

LOG_FILE_BYTES = 20 * 1024 * 1024
LOG_FILE_BACKUPS = 5

_CONSOLE_FORMAT = "%(levelname)-7s %(name)s: %(message)s"
_FILE_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s %(message)s"


@dataclass(frozen=True)
class LoggingRuntime:
    """What configure() settled on."""

    level_name: str
    level: int
    file_path: str


_RUNTIME: LoggingRuntime | None = None
_STREAM_HANDLER: logging.Handler | None = None


def _parse_level(raw: str) -> tuple[str, int]:
    """Map a user-supplied level name onto (canonical name, number); unknown means INFO."""
    name = (raw or "").strip().upper()
    level = logging.getLevelName(name) if name else logging.INFO
    if not isinstance(level, int):
        level = logging.INFO
    return logging.getLevelName(level), level


def _log_file_path() -> Path:
    explicit = os.environ.get("CITY_VITALS_LOG_FILE")
    if explicit:
        return Path(explicit)
    log_dir = os.environ.get("CITY_VITALS_LOG_DIR") or os.path.join(
        os.path.expanduser("~"), ".local", "share", "city-vitals", "logs"
    )
    stamp = time.strftime("%Y%m%d-%H%M%S", time.gmtime())
    return Path(log_dir) / "city-vitals-{}-{}.log".format(stamp, os.getpid())


def configure() -> LoggingRuntime:
    """Wire stderr and rotating-file handlers onto the city_vitals logger.

    Safe to call more than once; later calls return the first runtime.
    """
    global _RUNTIME, _STREAM_HANDLER
    if _RUNTIME is not None:
        return _RUNTIME

    level_name, level = _parse_level(os.environ.get("CITY_VITALS_LOG_LEVEL", "INFO"))
    path = _log_file_path()
    path.parent.mkdir(parents=True, exist_ok=True)

    console = logging.StreamHandler()
    console.setFormatter(logging.Formatter(_CONSOLE_FORMAT))

    logfile = RotatingFileHandler(
        path, maxBytes=LOG_FILE_BYTES, backupCount=LOG_FILE_BACKUPS, encoding="utf-8"
    )
    logfile.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))

    root = logging.getLogger(ROOT_LOGGER)
    root.handlers.clear()
    root.propagate = False
    root.setLevel(level)
    for handler in (console, logfile):
        handler.setLevel(level)
        root.addHandler(handler)

    logging.captureWarnings(True)

    _STREAM_HANDLER = console
    _RUNTIME = LoggingRuntime(level_name=level_name, level=level, file_path=str(path))
    return _RUNTIME


def set_stream_enabled(enabled: bool) -> None:
    """Attach or detach the stderr handler. No-op before configure()."""
    if _STREAM_HANDLER is None:
        return
    root = logging.getLogger(ROOT_LOGGER)
    attached = _STREAM_HANDLER in root.handlers
    if enabled and not attached:
        root.addHandler(_STREAM_HANDLER)
    elif attached and not enabled:
        root.removeHandler(_STREAM_HANDLER)


def get_runtime() -> LoggingRuntime | None:
    return _RUNTIME
