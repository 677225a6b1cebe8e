#!/usr/bin/env python3
# treeprompt/commands/__init__.py
from __future__ import annotations

"""
Package for the command tree consumed by the completion engine.

Provides:
- Flags and flag sets (`Flag`, `FlagSet`).
- Tree nodes and results (`Command`, `CommandResult`, `CommandError`, `CommandCallback`).
- Builders (`command`, `group`, `flag`).

This package re-exports public APIs from:
- flags.py
- command_types.py
- commands.py
"""


# Re-export from submodules
from .flags import Flag, FlagSet, FLAG_TYPES
from .command_types import Command, CommandResult, CommandError, CommandCallback
from .commands import command, group, flag

__all__ = [
    "Flag",
    "FlagSet",
    "FLAG_TYPES",
    "Command",
    "CommandResult",
    "CommandError",
    "CommandCallback",
    "command",
    "group",
    "flag",
]
