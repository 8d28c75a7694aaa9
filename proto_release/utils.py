"""
Utility Functions Module for Proto Release

This module provides helpers for logging setup and diagnostic output.

Functions:
    setup_logging: Configures application logging
    get_palette: Returns ANSI color codes, or empty strings when color is off
    format_error: Renders a validation error with the offending value highlighted
    print_error: Writes a diagnostic line to stderr with the error marker
"""

import logging
import sys
from dataclasses import dataclass
from typing import Optional, TextIO

from .config import ERROR_MARKER
from .models import TagError

logger = logging.getLogger(__name__)


def setup_logging(level: int = logging.INFO) -> None:
    """Configure logging for the application."""
    logging.basicConfig(
        level=level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


@dataclass(frozen=True)
class Palette:
    """ANSI escape codes used in diagnostics."""
    reset: str = ""
    red: str = ""
    green: str = ""


COLOR_PALETTE = Palette(reset="\033[0m", red="\033[0;31m", green="\033[0;32m")
PLAIN_PALETTE = Palette()


def get_palette(color: bool) -> Palette:
    """Return the palette matching the color setting."""
    return COLOR_PALETTE if color else PLAIN_PALETTE


def format_error(error: TagError, palette: Palette) -> str:
    """Render a validation error, highlighting the offending value."""
    return error.message.format(value=f"{palette.red}{error.value}{palette.reset}")


def print_error(message: str, stream: Optional[TextIO] = None) -> None:
    """Write a diagnostic line to stderr, prefixed with the error marker."""
    print(f"{ERROR_MARKER}{message}", file=stream or sys.stderr)
