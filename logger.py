"""
logger.py
---------
Logging setup for the resolver.

Design Decisions:
    * A single root logger ("resolver") is configured once at import time.
    * Modules obtain a child via ``get_logger(__name__)``; the ``datatypes``
      package prefix is folded into the root, so ``datatypes.factory`` logs
      as ``resolver.factory``.
    * Optional file handler (DATATYPE_LOG_FILE) records everything at DEBUG
      with source locations; the console honours DATATYPE_LOG_LEVEL.
"""
from __future__ import annotations

import logging
import sys
from pathlib import Path

from config import CONFIG, get_log_level

_ROOT_LOGGER_NAME = "resolver"
_PACKAGE_PREFIX = "datatypes."
_CONSOLE_FORMAT = "%(asctime)s [%(levelname)-8s] %(name)s: %(message)s"
_FILE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s (%(filename)s:%(lineno)d): %(message)s"
_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"

_configured = False


def _configure_root_logger() -> None:
    """One-time setup of the root 'resolver' logger and its handlers."""
    global _configured
    if _configured:
        return
    _configured = True

    root = logging.getLogger(_ROOT_LOGGER_NAME)
    root.setLevel(logging.DEBUG if CONFIG.logging.log_file else get_log_level())

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(get_log_level())
    console_handler.setFormatter(
        logging.Formatter(fmt=_CONSOLE_FORMAT, datefmt=_DATE_FORMAT)
    )
    root.addHandler(console_handler)

    if CONFIG.logging.log_file:
        log_path = Path(CONFIG.logging.log_file)
        try:
            log_path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_path, encoding="utf-8")
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(
                logging.Formatter(fmt=_FILE_FORMAT, datefmt=_DATE_FORMAT)
            )
            root.addHandler(file_handler)
        except OSError as exc:
            root.warning("Could not create log file '%s': %s", log_path, exc)


_configure_root_logger()


def get_logger(name: str) -> logging.Logger:
    """
    Return the child logger for module *name*.

    Examples::

        get_logger("datatypes.registry").name  →  "resolver.registry"
        get_logger("config").name              →  "resolver.config"
    """
    if name.startswith(_PACKAGE_PREFIX):
        name = name[len(_PACKAGE_PREFIX):]
    return logging.getLogger(f"{_ROOT_LOGGER_NAME}.{name}")
