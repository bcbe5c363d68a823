"""Logging configuration for the engine and the demo CLI.

Diagnostics go through ``logging``; narrative text for players goes to the
narration ``EventLog`` instead and never shows up here.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

LOG_FORMAT = "%(asctime)s [%(levelname)-5s] %(name)-25s | %(message)s"


def setup_logging(level: str = "INFO", stream: TextIO | None = None) -> logging.Handler:
    """Install a single stream handler on the root logger and return it."""
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setLevel(numeric_level)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt="%H:%M:%S"))

    root = logging.getLogger()
    root.setLevel(numeric_level)
    root.handlers.clear()
    root.addHandler(handler)
    return handler
