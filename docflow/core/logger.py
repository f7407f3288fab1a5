from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
import sys
from .workspace import _work_dir


_LOGGER: logging.Logger | None = None
_NAMESPACES = ("docflow", "docflow_io")


def get_logger(log_dir: Path | None = None) -> logging.Logger:
    """Return the application logger writing to <work>/logs/app.log.

    Creates the directory if needed. Uses rotating file handler. The
    ``docflow_io`` namespace shares the same handlers.
    """
    global _LOGGER
    if _LOGGER is not None:
        return _LOGGER

    if log_dir is None:
        base = _work_dir() / "logs"
    else:
        base = Path(log_dir)
    base.mkdir(parents=True, exist_ok=True)
    log_path = base / "app.log"

    fmt = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    file_handler = RotatingFileHandler(log_path, maxBytes=2 * 1024 * 1024, backupCount=3, encoding="utf-8")
    file_handler.setFormatter(fmt)

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(fmt)

    for name in _NAMESPACES:
        ns_logger = logging.getLogger(name)
        ns_logger.setLevel(logging.INFO)
        ns_logger.propagate = False
        ns_logger.handlers.clear()
        ns_logger.addHandler(file_handler)
        ns_logger.addHandler(console)

    _LOGGER = logging.getLogger("docflow")
    return _LOGGER


def set_level(level: int) -> None:
    """Apply ``level`` to every configured namespace."""
    for name in _NAMESPACES:
        logging.getLogger(name).setLevel(level)
