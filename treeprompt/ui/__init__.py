#!/usr/bin/env python3
# treeprompt/ui/__init__.py
from __future__ import annotations
# Re-export convenient top-level API
from .ansi import ANSI, strip_ansi, visible_width, enable_windows_vt, colorize, clear_screen
from .console import PRINT_MUTEX, print_line
from .table import format_table
from .logging import LOGGER_NAME, init_logger, ColorizingStreamHandler, PlainFormatter

__all__ = [
    "ANSI",
    "strip_ansi",
    "visible_width",
    "enable_windows_vt",
    "colorize",
    "clear_screen",
    "PRINT_MUTEX",
    "print_line",
    "format_table",
    "LOGGER_NAME",
    "init_logger",
    "ColorizingStreamHandler",
    "PlainFormatter",
]
