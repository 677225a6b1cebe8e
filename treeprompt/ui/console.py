#!/usr/bin/env python3
# treeprompt/ui/console.py
from __future__ import annotations

import sys
import threading

# Shared by every writer (logger, dispatcher output, boot status lines).
PRINT_MUTEX = threading.Lock()


def print_line(text: str = "", *, file=None, flush: bool = False) -> None:
    """Write one line as-is, control sequences included."""
    stream = file if file is not None else sys.stdout
    with PRINT_MUTEX:
        stream.write(f"{text}\n")
        if flush:
            stream.flush()


