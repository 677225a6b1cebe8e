#!/usr/bin/env python3
# treeprompt/ui/ansi.py
from __future__ import annotations

"""
ANSI escape helpers shared by the console printer, the logger and the prompt.

Prompt prefixes and suggestion labels may carry raw SGR sequences; these
helpers build them and strip them again for width calculation and log files.
"""

import ctypes
import os
import re
from typing import Optional

# Foreground colours and styles used across the shell.
ANSI = {
    "reset": "\x1b[0m",
    "bold": "\x1b[1m",
    "dim": "\x1b[2m",
    "underline": "\x1b[4m",

    "black": "\x1b[30m",
    "red": "\x1b[31m",
    "green": "\x1b[32m",
    "yellow": "\x1b[33m",
    "blue": "\x1b[34m",
    "magenta": "\x1b[35m",
    "cyan": "\x1b[36m",
    "white": "\x1b[37m",

    "bright_black": "\x1b[90m",
    "bright_red": "\x1b[91m",
    "bright_green": "\x1b[92m",
    "bright_yellow": "\x1b[93m",
    "bright_blue": "\x1b[94m",
    "bright_cyan": "\x1b[96m",
}

# CSI sequences (colours, cursor movement) and OSC sequences (titles, links)
ANSI_REGEX = re.compile(r"\x1b\[[0-9;?]*[A-Za-z]|\x1b\][^\x07\x1b]*(?:\x07|\x1b\\)")

_vt_enabled_cache: Optional[bool] = None


def strip_ansi(text: str) -> str:
    """Remove ANSI escape sequences from text."""
    return ANSI_REGEX.sub("", text)


def visible_width(text: str) -> int:
    """Length of `text` as rendered, ignoring escape sequences."""
    return len(strip_ansi(text))


def enable_windows_vt() -> bool:
    """
    Enable VT processing on Windows consoles when possible.
    Returns True if ANSI escapes should render in the current process;
    always True outside Windows.
    """
    global _vt_enabled_cache
    if _vt_enabled_cache is not None:
        return _vt_enabled_cache

    if os.name != "nt":
        _vt_enabled_cache = True
        return True

    if (
        os.environ.get("WT_SESSION")
        or os.environ.get("ANSICON")
        or os.environ.get("ConEmuANSI") == "ON"
        or os.environ.get("TERM", "").startswith(("xterm", "vt100"))
    ):
        _vt_enabled_cache = True
        return True

    try:
        kernel32 = ctypes.windll.kernel32  # type: ignore[attr-defined]
        enable_vt_processing = 0x0004
        handle = kernel32.GetStdHandle(-11)  # STD_OUTPUT_HANDLE
        mode = ctypes.c_uint()
        if handle in (0, -1) or not kernel32.GetConsoleMode(handle, ctypes.byref(mode)):
            _vt_enabled_cache = False
        else:
            _vt_enabled_cache = bool(kernel32.SetConsoleMode(
                handle, mode.value | enable_vt_processing))
    except (AttributeError, OSError):
        _vt_enabled_cache = False

    return _vt_enabled_cache


def colorize(text: str, *styles: str) -> str:
    """
    Wrap text with one or more styles from ANSI (e.g. 'red', 'bold').
    Unknown style names are ignored; the result always ends with a reset.
    """
    seq = "".join(ANSI[s] for s in styles if s in ANSI)
    return f"{seq}{text}{ANSI['reset']}" if seq else text


def clear_screen() -> None:
    """Clear the terminal screen on Windows and POSIX."""
    os.system("cls" if os.name == "nt" else "clear")
