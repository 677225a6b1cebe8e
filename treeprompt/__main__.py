#!/usr/bin/env python3
# treeprompt/__main__.py
from __future__ import annotations

import sys

from treeprompt.boot import boot_sequence
from treeprompt.config import load_config
from treeprompt.interface import TreePrompt
from treeprompt.ui import colorize, print_line


def main() -> int:
    try:
        config = load_config()
    except ValueError as exc:
        print_line(colorize(f"[error] Invalid configuration: {exc}", "red"), file=sys.stderr)
        return 2

    state = boot_sequence(config)
    shell = TreePrompt.from_config(state.root, state.config, state.flag_value_completer)
    shell.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
