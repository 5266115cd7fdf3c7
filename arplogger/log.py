"""Centralised logging configuration for arplogger.

These are process diagnostics. ARP events themselves go to the sinks in
:mod:`arplogger.sink`.
"""
from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: int = logging.INFO) -> None:
    """Configure the root ``arplogger`` logger.

    Call once during application startup.  Subsequent calls only adjust the
    level; the handler is added if absent.
    """
    logger = logging.getLogger("arplogger")
    logger.setLevel(level)
    if logger.handlers:
        return
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(handler)
    logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    """Return a child logger under the ``arplogger`` namespace."""
    return logging.getLogger(f"arplogger.{name}")
