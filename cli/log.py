"""Loguru sink setup for the CLI."""

import sys
from typing import Optional, TextIO

from loguru import logger


def configure_logging(level: str = "INFO", stream: Optional[TextIO] = None) -> None:
    """Send plain diagnostics to stdout so they interleave with the report."""
    logger.remove()
    logger.add(stream or sys.stdout, level=level, format="{message}", colorize=False)
