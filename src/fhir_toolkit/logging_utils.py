# src/fhir_toolkit/logging_utils.py
"""
Logging utilities for fhir_toolkit.

Library modules only create loggers (``logging.getLogger(__name__)``); this
module is the one place that attaches handlers, and is called by the CLI or
by applications that want the toolkit's records on a stream.
"""

import logging
import sys
from typing import IO, Optional

TOOLKIT_LOGGER = "fhir_toolkit"

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _levels_for(verbosity: int) -> tuple:
    """
    Map a verbosity count to (root level, toolkit level).

    0 -> INFO everywhere, 1 -> DEBUG for fhir_toolkit only, 2+ -> DEBUG for
    every logger (pydantic, fhir.resources, ...).
    """
    if verbosity == 0:
        return logging.INFO, logging.INFO
    if verbosity == 1:
        return logging.INFO, logging.DEBUG
    return logging.DEBUG, logging.DEBUG


def configure_logging(
    verbosity: int = 0, stream: Optional[IO[str]] = None
) -> logging.Logger:
    """
    Configure logging for the CLI or an embedding application.

    Parameters
    ----------
    verbosity : int, default=0
        Non-negative verbosity count (see ``_levels_for``).
    stream : IO[str] or None, default=None
        Target stream for the StreamHandler. Defaults to sys.stderr so JSON
        written to stdout stays clean.

    Returns
    -------
    logging.Logger
        The ``fhir_toolkit`` logger.

    Raises
    ------
    TypeError
        If verbosity is not an int, or stream has no write method.
    ValueError
        If verbosity is negative.
    """
    if isinstance(verbosity, bool) or not isinstance(verbosity, int):
        raise TypeError(f"verbosity must be int, got {type(verbosity).__name__}")
    if verbosity < 0:
        raise ValueError(f"verbosity must be non-negative, got {verbosity}")

    if stream is None:
        stream = sys.stderr
    elif not hasattr(stream, "write"):
        raise TypeError("stream must be file-like (support .write(...))")

    root_level, toolkit_level = _levels_for(verbosity)

    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter(_FORMAT))

    root = logging.getLogger()
    # swap only StreamHandlers; FileHandlers and the like stay attached
    root.handlers = [
        h
        for h in root.handlers
        if not isinstance(h, logging.StreamHandler)
        or isinstance(h, logging.FileHandler)
    ]
    root.addHandler(handler)
    root.setLevel(root_level)

    toolkit = logging.getLogger(TOOLKIT_LOGGER)
    toolkit.setLevel(toolkit_level)
    return toolkit
