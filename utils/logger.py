"""Logging setup shared by the engine, importer and views."""

import logging
import os
import sys
from typing import Optional

from config.defaults import LOG_LEVEL, LOG_LEVEL_ENV_VAR


_LOGGER_INITIALIZED = False


def configure_logging(level: Optional[str] = None) -> None:
    """Configure process-wide logging once.

    Streamlit re-executes the script on every interaction, so repeated calls
    must be no-ops.
    """
    global _LOGGER_INITIALIZED
    if _LOGGER_INITIALIZED:
        return

    resolved_level = (level or os.environ.get(LOG_LEVEL_ENV_VAR) or LOG_LEVEL).upper()

    logging.basicConfig(
        level=resolved_level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        stream=sys.stdout,
    )
    _LOGGER_INITIALIZED = True


def get_logger(name: str) -> logging.Logger:
    """Return a configured logger for the requested module."""
    configure_logging()
    return logging.getLogger(name)
