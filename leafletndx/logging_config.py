"""Logging configuration helpers."""

import logging
import sys
import warnings
from typing import Optional

from .config import LOG_FORMAT


def configure_logging(log_file: Optional[str] = None, verbose: bool = False) -> None:
    """Configure application logging.

    Parameters
    ----------
    log_file
        Optional path to a log file. When omitted, logs to stderr, since
        standard output may carry the index groups.
    verbose
        Log debug messages
    """

    handler_error = None
    handlers = []
    if log_file:
        try:
            handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
        except OSError as exc:
            handler_error = exc
    if not handlers:
        handlers.append(logging.StreamHandler(sys.stderr))
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        handlers=handlers,
        format=LOG_FORMAT,
        force=True,
    )
    logging.getLogger("MDAnalysis").setLevel(logging.ERROR)
    warnings.filterwarnings(
        "ignore",
        message=".*Failed to guess the mass.*",
        category=UserWarning,
    )
    if handler_error is not None:
        logging.getLogger(__name__).warning(
            "Failed to open log file '%s': %s", log_file, handler_error
        )
