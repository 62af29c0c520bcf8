# listing_wizard/core/log.py
"""
Logging helpers.

Every module logs through `get_logger(__name__)`, which lives under the
`listing_wizard` namespace. Nothing is written to disk unless
LISTING_WIZARD_DEBUG is truthy, in which case a rotating file handler at
logs/listing_wizard.log is attached to the namespace root once.
"""

from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler

ROOT_LOGGER_NAME = "listing_wizard"
LOG_PATH = os.path.join("logs", "listing_wizard.log")

_FILE_HANDLER_ATTACHED = False


def debug_enabled() -> bool:
    return os.getenv("LISTING_WIZARD_DEBUG", "").strip().lower() in {"1", "true", "yes", "on"}


def _attach_file_handler(root: logging.Logger) -> None:
    global _FILE_HANDLER_ATTACHED
    if _FILE_HANDLER_ATTACHED:
        return
    _FILE_HANDLER_ATTACHED = True

    # Avoid duplicate handlers if reloaded in REPL/tests
    if any(isinstance(h, RotatingFileHandler) for h in root.handlers):
        return

    try:
        os.makedirs(os.path.dirname(LOG_PATH), exist_ok=True)
        handler = RotatingFileHandler(LOG_PATH, maxBytes=1_000_000, backupCount=3, encoding="utf-8")
    except OSError:
        # Read-only working directory: keep logging to whatever handlers the host configured.
        return

    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s %(levelname)s %(name)s %(message)s",
            datefmt="(%Y-%m-%d %H:%M:%S)",
        )
    )
    root.addHandler(handler)
    root.setLevel(logging.DEBUG)


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a logger under the `listing_wizard` namespace."""
    root = logging.getLogger(ROOT_LOGGER_NAME)
    if debug_enabled():
        _attach_file_handler(root)

    if not name or name == ROOT_LOGGER_NAME:
        return root
    if name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
