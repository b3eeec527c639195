"""
Centralized logging configuration.

Plain text in development, a compact single-line format everywhere else.
Modules import ``logger`` (or ``get_logger(__name__)``) from here.
"""

import logging
import sys

from ide_assistant.config import settings

LOGGER_NAME = "ide_assistant"

_DEV_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"
_PROD_FORMAT = "%(asctime)s %(levelname)s %(name)s %(module)s:%(lineno)d %(message)s"


def setup_logging(level: str | None = None) -> logging.Logger:
    root = logging.getLogger(LOGGER_NAME)
    if root.handlers:
        return root

    handler = logging.StreamHandler(sys.stdout)
    fmt = _DEV_FORMAT if settings.app_env == "development" else _PROD_FORMAT
    handler.setFormatter(logging.Formatter(fmt))
    root.addHandler(handler)
    root.setLevel((level or settings.log_level).upper())
    root.propagate = False
    return root


def get_logger(name: str) -> logging.Logger:
    if name.startswith(LOGGER_NAME):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")


logger = setup_logging()
