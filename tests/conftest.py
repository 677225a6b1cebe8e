"""
Shared pytest fixtures for the treeprompt test suite.

`item_tree` mirrors the demo shell:

    <root>            --profile (hidden, persistent, string)
    ├── quit          exits
    ├── show
    ├── add           --count/-n (persistent, int 1), --trace (hidden bool)
    │   ├── apple     --color/-c (string 'red'), --verbose/-v (bool)
    │   └── melon     --size/-s (int 3)
    └── secret        hidden

Runnable nodes append (command path, visible flag values, args) to `calls`.
"""

import pytest

from treeprompt.commands import Command


@pytest.fixture
def calls():
    return []


@pytest.fixture
def item_tree(calls):
    def record(cmd, args):
        calls.append((cmd.command_path(), {f.name: f.value for f in cmd.visible_flags()}, list(args)))

    def quit_shell(cmd, args):
        raise SystemExit(0)

    root = Command(short="test shell")
    root.add_flag("profile", "dev", "Settings profile", hidden=True, persistent=True)

    add = Command(name="add", short="Add an item")
    add.add_flag("count", 1, "Number of items to add", shorthand="n", persistent=True)
    add.add_flag("trace", False, "Trace adding", hidden=True)

    apple = Command(name="apple", short="Add apple", callback=record)
    apple.add_flag("color", "red", "Apple color", shorthand="c")
    apple.add_flag("verbose", False, "Print what is added", shorthand="v")

    melon = Command(name="melon", short="Add melon", callback=record)
    melon.add_flag("size", 3, "Melon size in kilograms", shorthand="s")

    add.add_command(apple, melon)
    root.add_command(
        Command(name="quit", short="Quit program", callback=quit_shell),
        Command(name="show", short="Show items", callback=record),
        add,
        Command(name="secret", short="Hidden command", callback=record, hidden=True),
    )
    return root
