# plugins/system/entrypoint.py
from __future__ import annotations

from treeprompt.commands import Command, command
from treeprompt.ui import clear_screen


@command(name="quit", short="Quit program", aliases=["exit"])
def quit_shell(cmd: Command, args: list[str]) -> None:
    raise SystemExit(0)


@command(name="clear", short="Clear the screen", aliases=["cls"])
def clear(cmd: Command, args: list[str]) -> None:
    clear_screen()


COMMANDS = [quit_shell, clear]
