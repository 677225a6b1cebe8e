#!/usr/bin/env python3
# treeprompt/commands/flags.py
from __future__ import annotations

"""
Typed, defaulted flags and ordered flag sets.

A Flag keeps its declared default twice: the typed `default` and the string
form `def_value`. Resetting goes through `def_value` so that a reset behaves
exactly like the user typing the default on the command line.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Iterator

_BOOL_TRUE = {"1", "true", "yes", "y", "on"}
_BOOL_FALSE = {"0", "false", "no", "n", "off"}


def _parse_bool(text: str) -> bool:
    lowered = text.strip().lower()
    if lowered in _BOOL_TRUE:
        return True
    if lowered in _BOOL_FALSE:
        return False
    raise ValueError(f"expected boolean, got {text!r}")


# type name -> (python type, text parser)
FLAG_TYPES: dict[str, tuple[type, Callable[[str], Any]]] = {
    "bool": (bool, _parse_bool),
    "string": (str, str),
    "int": (int, int),
    "float": (float, float),
}


def infer_type_name(default: Any) -> str:
    """Map a default value to its flag type name (bool is checked before int)."""
    if isinstance(default, bool):
        return "bool"
    if isinstance(default, int):
        return "int"
    if isinstance(default, float):
        return "float"
    return "string"


def format_default(default: Any) -> str:
    """String form of a default, as it would be typed on the command line."""
    if isinstance(default, bool):
        return "true" if default else "false"
    if default is None:
        return ""
    return str(default)


@dataclass(slots=True, eq=False)
class Flag:
    """
    A named, typed configuration value attached to one command.

    Important fields:
        name: Long name, used as --name.
        usage: One-line help text, shown next to flag suggestions.
        default: Declared default; also decides the type when `type_name` is empty.
        shorthand: Single character used as -x, or "" for none.
        hidden: Hidden flags are accepted on the command line but never suggested.
        value: Current value; mutated by parsing and by reset().
        changed: True once the value was set from the command line.
    """

    name: str
    usage: str = ""
    default: Any = ""
    shorthand: str = ""
    hidden: bool = False
    type_name: str = ""
    value: Any = field(init=False, default=None)
    changed: bool = field(init=False, default=False)

    def __post_init__(self) -> None:
        if not self.name or self.name.startswith("-"):
            raise ValueError(f"Invalid flag name: {self.name!r}")
        if len(self.shorthand) > 1:
            raise ValueError(
                f"Flag shorthand must be a single character, got {self.shorthand!r}")
        if not self.type_name:
            self.type_name = infer_type_name(self.default)
        if self.type_name not in FLAG_TYPES:
            raise ValueError(
                f"Unknown flag type {self.type_name!r} for --{self.name}")
        self.reset()

    @property
    def def_value(self) -> str:
        return format_default(self.default)

    @property
    def is_bool(self) -> bool:
        return self.type_name == "bool"

    @property
    def long_form(self) -> str:
        return f"--{self.name}"

    @property
    def short_form(self) -> str:
        """'-x', or '' when the flag has no shorthand."""
        return f"-{self.shorthand}" if self.shorthand else ""

    def matches(self, token: str) -> bool:
        """True if `token` is exactly this flag's long or short form."""
        return token == self.long_form or (bool(self.shorthand) and token == self.short_form)

    def set(self, text: str) -> None:
        """Parse `text` with the flag's type and store it. Raises ValueError."""
        _, parser = FLAG_TYPES[self.type_name]
        self.value = parser(text)
        self.changed = True

    def reset(self) -> None:
        """Return to the declared default."""
        if self.type_name == "string":
            self.value = self.def_value
        else:
            _, parser = FLAG_TYPES[self.type_name]
            self.value = parser(self.def_value)
        self.changed = False


class FlagSet:
    """Flags in declaration order, addressable by long name and by shorthand."""

    def __init__(self) -> None:
        self._by_name: dict[str, Flag] = {}
        self._by_shorthand: dict[str, Flag] = {}

    def add(self, flag: Flag) -> Flag:
        """Add a flag, rejecting duplicate names and shorthands."""
        if flag.name in self._by_name:
            raise ValueError(f"Flag --{flag.name} already defined.")
        if flag.shorthand and flag.shorthand in self._by_shorthand:
            raise ValueError(
                f"Shorthand -{flag.shorthand} for --{flag.name} already used by "
                f"--{self._by_shorthand[flag.shorthand].name}.")
        self._by_name[flag.name] = flag
        if flag.shorthand:
            self._by_shorthand[flag.shorthand] = flag
        return flag

    def lookup(self, name: str) -> Flag | None:
        return self._by_name.get(name)

    def shorthand_lookup(self, char: str) -> Flag | None:
        return self._by_shorthand.get(char)

    def reset_all(self) -> None:
        for flag in self._by_name.values():
            flag.reset()

    def __iter__(self) -> Iterator[Flag]:
        return iter(list(self._by_name.values()))

    def __len__(self) -> int:
        return len(self._by_name)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __repr__(self) -> str:
        return f"FlagSet({', '.join(self._by_name)})"
