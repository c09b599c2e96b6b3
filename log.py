# Polychora: 4D Geometric Algebra and Polytope Meshes
# Copyright (C) 2026 Eunkyum Kim <nemonanconcode@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
#
# This project is fully open-source, including for commercial use.

"""Logging for mesh construction and projection runs.

Every module logs under ``polychora.<module>``, e.g.
``polychora.mesh.construction``. Levels in use:

    DEBUG    topology derivation (edge/face counts) and construction timings
    INFO     the per-run summary printed by ``main.py``
    WARNING  clipped points and facet-less solids

The level and an optional log file come from the environment and can be
overridden by the ``logging`` block of ``conf/config.yaml`` through
:func:`configure`:

    POLYCHORA_LOG_LEVEL  : DEBUG / INFO (default) / WARNING / ERROR
    POLYCHORA_LOG_FILE   : optional path; appends plain-text log lines
"""

import contextlib
import logging
import os
import sys
import time

ROOT = "polychora"

_CONSOLE_FORMAT = "%(levelname)s %(name)s: %(message)s"
_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# Level name colours on a TTY
_COLORS = {
    logging.DEBUG: "\033[36m",
    logging.INFO: "\033[32m",
    logging.WARNING: "\033[33m",
    logging.ERROR: "\033[31m",
    logging.CRITICAL: "\033[35m",
}
_RESET = "\033[0m"

_configured = False


class _LevelColorFormatter(logging.Formatter):

    def __init__(self, use_color: bool):
        super().__init__(_CONSOLE_FORMAT)
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        if not self.use_color:
            return super().format(record)
        # Copy so file handlers still see the plain level name
        record = logging.makeLogRecord(record.__dict__)
        record.levelname = f"{_COLORS.get(record.levelno, '')}{record.levelname}{_RESET}"
        return super().format(record)


def _add_file_handler(root: logging.Logger, path: str) -> None:
    path = os.path.abspath(path)
    for handler in root.handlers:
        if isinstance(handler, logging.FileHandler) and handler.baseFilename == path:
            return
    handler = logging.FileHandler(path, mode="a")
    handler.setFormatter(logging.Formatter(_FILE_FORMAT))
    root.addHandler(handler)


def _setup() -> logging.Logger:
    """Attaches the console handler once and applies the environment settings."""
    global _configured
    root = logging.getLogger(ROOT)
    if _configured:
        return root
    _configured = True

    level_name = os.environ.get("POLYCHORA_LOG_LEVEL", "INFO").upper()
    root.setLevel(getattr(logging, level_name, logging.INFO))

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(_LevelColorFormatter(
        use_color=hasattr(sys.stderr, "isatty") and sys.stderr.isatty()))
    root.addHandler(console)

    log_file = os.environ.get("POLYCHORA_LOG_FILE")
    if log_file:
        _add_file_handler(root, log_file)
    return root


def configure(level=None, log_file=None) -> logging.Logger:
    """Overrides the environment settings, typically from the run config.

    Args:
        level: Level name (``"DEBUG"``) or number; ``None`` keeps the current one.
        log_file: Extra file to append to; ``None`` adds nothing. Repeated
            calls with the same path attach a single handler.

    Returns:
        The ``polychora`` root logger.

    Raises:
        ValueError: ``level`` is not a known level name.
    """
    root = _setup()
    if level is not None:
        if isinstance(level, str):
            if not isinstance(logging.getLevelName(level.upper()), int):
                raise ValueError(f"Unknown log level: {level}")
            level = level.upper()
        root.setLevel(level)
    if log_file:
        _add_file_handler(root, log_file)
    return root


def get_logger(name: str) -> logging.Logger:
    """Return the ``polychora.<name>`` logger; ``name`` is usually ``__name__``."""
    _setup()
    return logging.getLogger(f"{ROOT}.{name}")


@contextlib.contextmanager
def log_duration(logger: logging.Logger, label: str, level: int = logging.DEBUG):
    """Logs how long the ``with`` body took, e.g. building the 600-cell."""
    start = time.perf_counter()
    yield
    logger.log(level, "%s took %.3fs", label, time.perf_counter() - start)
