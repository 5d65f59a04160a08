"""Logging helper for Pluma.

Wraps the standard library logging module so every logger lives under
the ``pluma`` namespace. The library never installs handlers; embedders
configure logging the usual way.

Example:
    >>> from pluma.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("parsed %d blocks", 3)
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance under the "pluma." prefix

    Example:
        >>> get_logger("sanitize").name
        'pluma.sanitize'
    """
    if not (name == "pluma" or name.startswith("pluma.")):
        name = f"pluma.{name}"
    return logging.getLogger(name)
