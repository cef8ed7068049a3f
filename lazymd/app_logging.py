"""File-only logging for interactive sessions.

The TUI owns the terminal, so log records go to a per-user log file instead of
stderr. The level comes from ``--log-level`` or ``LAZYMD_LOG_LEVEL``.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from platformdirs import user_log_dir

LOG_LEVEL_ENV = "LAZYMD_LOG_LEVEL"
LOG_FILENAME = "lazymd.log"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DEFAULT_LEVEL = "WARNING"

_LOG = logging.getLogger("lazymd")
_log_path: Path | None = None


def resolve_level(level: str | None = None) -> int:
    """Map a level name (argument, then environment) to a ``logging`` level."""
    name = level or os.environ.get(LOG_LEVEL_ENV) or DEFAULT_LEVEL
    value = getattr(logging, str(name).upper().strip(), None)
    return value if isinstance(value, int) else logging.WARNING


def init_logging(level: str | None = None, log_dir: Path | None = None) -> Path | None:
    """Attach a file handler to the ``lazymd`` logger.

    Returns the log file path, or ``None`` when the log directory cannot be
    created. Calling it twice does not add a second handler.
    """
    global _log_path
    if _log_path is not None:
        return _log_path

    resolved = resolve_level(level)
    _LOG.setLevel(resolved)
    _LOG.propagate = False
    directory = log_dir if log_dir is not None else Path(user_log_dir("lazymd", appauthor=False))
    try:
        directory.mkdir(parents=True, exist_ok=True)
        log_path = directory / LOG_FILENAME
        handler = logging.FileHandler(log_path, encoding="utf-8")
    except OSError:
        # Nowhere to write: keep records from falling through to stderr.
        _LOG.addHandler(logging.NullHandler())
        return None
    handler.setLevel(resolved)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    _LOG.addHandler(handler)
    _log_path = log_path
    _LOG.debug("logging to %s at level %s", log_path, logging.getLevelName(resolved))
    return log_path
