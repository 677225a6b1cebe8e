#!/usr/bin/env python3
# treeprompt/commands/commands.py
from __future__ import annotations

"""
Tree building helpers.

This module provides:
- command: decorator turning a function into a Command node, optionally
  attaching it under a parent.
- group: a callback-less node that only holds subcommands.
- flag: declarative Flag constructor for the decorator's `flags=` lists.
"""

from typing import Any, Callable, Sequence

from treeprompt.commands.command_types import Command
from treeprompt.commands.flags import Flag


def flag(
    name: str,
    default: Any = "",
    usage: str = "",
    *,
    shorthand: str = "",
    hidden: bool = False,
    type_name: str = "",
) -> Flag:
    """Build a Flag for `command(flags=...)` / `command(persistent_flags=...)`."""
    return Flag(name=name, usage=usage, default=default, shorthand=shorthand,
                hidden=hidden, type_name=type_name)


def _attach(node: Command, flags: Sequence[Flag], persistent_flags: Sequence[Flag],
            parent: Command | None) -> Command:
    for item in flags:
        node.attach_flag(item)
    for item in persistent_flags:
        node.attach_flag(item, persistent=True)
    if parent is not None:
        parent.add_command(node)
    return node


def group(
    name: str,
    short: str = "",
    *,
    long: str = "",
    parent: Command | None = None,
    aliases: list[str] | None = None,
    hidden: bool = False,
    flags: Sequence[Flag] = (),
    persistent_flags: Sequence[Flag] = (),
) -> Command:
    """Create a node without an action; running it prints its help."""
    node = Command(name=name, short=short, long=long,
                   aliases=aliases or [], hidden=hidden)
    return _attach(node, flags, persistent_flags, parent)


def command(
    *,
    name: str | None = None,
    short: str | None = None,
    long: str | None = None,
    example: str | None = None,
    parent: Command | None = None,
    aliases: list[str] | None = None,
    hidden: bool = False,
    deprecated: str = "",
    flags: Sequence[Flag] = (),
    persistent_flags: Sequence[Flag] = (),
) -> Callable[[Callable[..., Any]], Command]:
    """
    Decorator to build a Command node from an action function.

    - Function name is transformed from snake_case to kebab-case for `name` if not provided.
    - `short` defaults to the first docstring line, `long` to the full docstring.
    - The decorated name is bound to the Command (callable via `.callback`).
    """

    def wrapper(func: Callable[..., Any]) -> Command:
        doc = (func.__doc__ or "").strip()
        node = Command(
            name=(name or func.__name__).replace("_", "-"),
            short=short if short is not None else (doc.splitlines()[0] if doc else ""),
            long=long if long is not None else doc,
            example=example or "",
            callback=func,
            aliases=aliases or [],
            hidden=hidden,
            deprecated=deprecated,
        )
        return _attach(node, flags, persistent_flags, parent)

    return wrapper
