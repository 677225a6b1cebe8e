# plugins/items/entrypoint.py
from __future__ import annotations

from treeprompt.commands import Command, command, flag, group
from treeprompt.interface import CompletionHint, Suggestion

ITEMS: list[str] = []


@command(name="show", short="Show items")
def show(cmd: Command, args: list[str]) -> str:
    lines = ["----- items start ---", *(f"* {item}" for item in ITEMS), "----- items end -----"]
    return "\n".join(lines)


add = group(
    "add",
    "Add an item",
    persistent_flags=[flag("count", 1, "Number of items to add", shorthand="n")],
)


@command(
    name="apple",
    short="Add apple",
    example="add apple --color green -n 2",
    parent=add,
    flags=[flag("color", "red", "Apple color", shorthand="c")],
)
def add_apple(cmd: Command, args: list[str]) -> None:
    color = cmd.value("color")
    ITEMS.extend(f"{color} apple" for _ in range(cmd.value("count")))


@command(
    name="melon",
    short="Add melon",
    parent=add,
    flags=[flag("size", 3, "Melon size in kilograms", shorthand="s")],
)
def add_melon(cmd: Command, args: list[str]) -> None:
    size = cmd.value("size")
    ITEMS.extend(f"{size}kg melon" for _ in range(cmd.value("count")))


def complete_flag_value(hint: CompletionHint) -> list[Suggestion] | None:
    """Known apple colours; other flags fall through to the default policy."""
    if hint.flag is not None and hint.flag.name == "color":
        return [
            Suggestion("green", "young apple"),
            Suggestion("red", "ripen apple"),
        ]
    return None


COMMANDS = [show, add]
FLAG_VALUE_COMPLETER = complete_flag_value
