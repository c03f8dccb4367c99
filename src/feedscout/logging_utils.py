"""Logging helpers."""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(message)s"
LOGGER_NAME = "feedscout"

# Connection pool chatter from requests drowns per-candidate debug lines.
NOISY_LOGGERS = ("urllib3", "charset_normalizer")


def configure_logging(verbose: bool = False, *, debug_libraries: bool = False) -> None:
    """Configure application logging once for CLI usage.

    ``verbose`` turns on DEBUG for feedscout itself; third-party loggers stay
    at WARNING unless ``debug_libraries`` is set as well.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger(LOGGER_NAME).setLevel(level)
    library_level = logging.DEBUG if verbose and debug_libraries else logging.WARNING
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(library_level)


def get_logger() -> logging.Logger:
    """Return the module logger used across the package."""
    return logging.getLogger(LOGGER_NAME)
