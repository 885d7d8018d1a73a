"""Diagnostic logging setup shared by the GUI and CLI entry points.

User-facing progress lines go through the interaction's log view; this module
only configures Python's ``logging`` for diagnostics. Two environment variables
control where the log file is written:

``DOCKER_SETUP_LOG_FILE``
    Absolute path to the log file that should be created.

``DOCKER_SETUP_LOG_DIR``
    Directory for the default log file name. Ignored when
    ``DOCKER_SETUP_LOG_FILE`` is present.
"""
from __future__ import annotations

import logging
import os
from pathlib import Path

from docker_setup_config.user_settings import LOG_VERBOSITY_CHOICES, SETTINGS_DIRNAME

_LOG_FILE_ENV = "DOCKER_SETUP_LOG_FILE"
_LOG_DIR_ENV = "DOCKER_SETUP_LOG_DIR"
_DEFAULT_LOGNAME = "docker_setup.log"
_HANDLER_TAG = "_docker_setup_logging_handler"

_VERBOSITY_LEVELS: dict[str, int] = {
    "error": logging.ERROR,
    "warning": logging.WARNING,
    "info": logging.INFO,
    "verbose": logging.DEBUG,
}


def verbosity_level(verbosity: str) -> int:
    key = verbosity.strip().lower()
    if key not in LOG_VERBOSITY_CHOICES:
        raise ValueError(f"Unsupported log verbosity: {verbosity}")
    return _VERBOSITY_LEVELS[key]


def resolve_log_path() -> Path:
    env_file = os.environ.get(_LOG_FILE_ENV)
    if env_file:
        return Path(env_file).expanduser()
    env_dir = os.environ.get(_LOG_DIR_ENV)
    if env_dir:
        return Path(env_dir).expanduser() / _DEFAULT_LOGNAME
    return Path.home() / SETTINGS_DIRNAME / "logs" / _DEFAULT_LOGNAME


def configure_logging(verbosity: str = "info", *, log_file: Path | None = None, to_file: bool = True) -> Path | None:
    """Attach the application's handlers to the root logger.

    Repeated calls replace the handlers installed by a previous call instead of
    stacking duplicates. Returns the log file path, or ``None`` when file
    logging is disabled.
    """
    level = verbosity_level(verbosity)
    root = logging.getLogger()
    for handler in list(root.handlers):
        if getattr(handler, _HANDLER_TAG, False):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)

    formatter = logging.Formatter(
        "%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(max(level, logging.WARNING))
    stream_handler.setFormatter(formatter)
    setattr(stream_handler, _HANDLER_TAG, True)
    root.addHandler(stream_handler)

    if not to_file:
        return None
    log_path = log_file or resolve_log_path()
    log_path.parent.mkdir(parents=True, exist_ok=True)
    file_handler = logging.FileHandler(log_path, encoding="utf-8")
    file_handler.setLevel(level)
    file_handler.setFormatter(formatter)
    setattr(file_handler, _HANDLER_TAG, True)
    root.addHandler(file_handler)
    logging.getLogger(__name__).info("Writing logs to %s (verbosity=%s)", log_path, verbosity)
    return log_path
