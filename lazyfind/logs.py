"""Logging setup for the finder.

The TUI owns the terminal, so records only go to a file when one is
configured; otherwise the package logger discards them.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

LOG_ENV_VAR = "LAZYFIND_LOG"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_package_logger = logging.getLogger("lazyfind")
_package_logger.addHandler(logging.NullHandler())


def configure_logging(log_file: str | Path | None = None, level: int = logging.DEBUG) -> Path | None:
    """Attach a file handler to the package logger.

    ``log_file`` wins over the ``LAZYFIND_LOG`` environment variable. Returns
    the path in use, or ``None`` when logging stays disabled.
    """
    target = log_file or os.environ.get(LOG_ENV_VAR)
    if not target:
        return None

    path = Path(target).expanduser()
    for handler in list(_package_logger.handlers):
        if isinstance(handler, logging.FileHandler):
            _package_logger.removeHandler(handler)
            handler.close()

    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    _package_logger.addHandler(handler)
    _package_logger.setLevel(level)
    return path
