#!/usr/bin/env python3
# treeprompt/interface/handler.py
from __future__ import annotations

"""
Line dispatch against the command tree.

One tree serves every line of a session, so every flag in it is returned to
its declared default before each execution; a command then sees exactly the
flags given on its own line.
"""

import logging

from treeprompt.commands import Command, CommandResult
from treeprompt.interface.parser import tokenize
from treeprompt.ui import colorize, print_line

log = logging.getLogger("treeprompt.handler")


def reset_flag_values(command_obj: Command) -> None:
    """
    Reset the flags owned by `command_obj` and, recursively, by every
    descendant. Inherited flags are reset by the node that declares them.
    """
    command_obj.flags.reset_all()
    command_obj.persistent_flags.reset_all()
    for subcommand in command_obj.commands():
        reset_flag_values(subcommand)


def _render(result: object) -> tuple[str | None, bool]:
    """Normalize an action's return value to (printable text, success)."""
    if isinstance(result, CommandResult):
        return (str(result) if result.message else None), result.ok
    if result is None:
        return None, True
    return str(result), True


def execute_line(root: Command, input_line: str) -> bool:
    """
    Tokenize, reset, then execute `input_line` against `root`.

    Output is printed; failures are printed as '[error] ...' and reported by
    returning False. SystemExit and KeyboardInterrupt are not caught.
    """
    if not input_line.strip():
        return True

    words = tokenize(input_line)
    reset_flag_values(root)
    root.set_args(words)

    try:
        result = root.execute()
    except (SystemExit, KeyboardInterrupt):
        raise
    except Exception as exc:
        log.debug("Command failed: %r", input_line, exc_info=True)
        log.info("Command %r failed: %s", input_line, exc)
        print_line(colorize(f"[error] {exc}", "red"))
        return False

    text, ok = _render(result)
    if text is not None:
        print_line(colorize(f"[error] {text}", "red") if not ok else text)
    return ok
