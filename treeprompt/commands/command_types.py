#!/usr/bin/env python3
# treeprompt/commands/command_types.py
from __future__ import annotations

"""
Command tree data structures.

This module defines:
- CommandCallback: the callable protocol for any command action.
- CommandResult: a normalized result container for command outputs.
- CommandError: raised by the tree when a line cannot be dispatched.
- Command: one node of the tree, owning its children and its flags, and the
  execution entry point that resolves a token vector to a node and runs it.

The tree is built once and reused for every line of a session; only flag
values change between executions.
"""

import difflib
import logging
from dataclasses import dataclass, field
from typing import Any, Iterator, Protocol

from treeprompt.commands.flags import Flag, FlagSet
from treeprompt.ui import format_table

log = logging.getLogger("treeprompt.commands")


class CommandCallback(Protocol):
    """Protocol for any command action: receives its node and the positional args."""

    def __call__(self, cmd: "Command", args: list[str]) -> Any:  # pragma: no cover - signature only
        ...


class CommandError(Exception):
    """A line could not be dispatched (unknown command, bad flag, missing value)."""


@dataclass(slots=True)
class CommandResult:
    """
    Normalized result container from command execution.

    Attributes:
        ok: True if the command completed successfully.
        message: Human-readable summary or primary output.
        data: Optional machine-readable payload (dict/list/primitive).
    """
    ok: bool = True
    message: str = ""
    data: Any = None

    def __str__(self) -> str:
        # Keep CLI printing predictable
        return self.message if self.message else ("ok" if self.ok else "error")


@dataclass(eq=False)
class Command:
    """
    A node of the command tree.

    Important fields:
        name: Unique among siblings; the root may leave it empty.
        short: One-line description, shown next to subcommand suggestions.
        long: Longer description for help output (falls back to `short`).
        example: Example usage shown in help (optional).
        callback: Action run for this node; nodes without one only group children.
        aliases: Extra names resolving to this node.
        hidden: Hidden nodes run normally but are never suggested or listed.
        deprecated: Non-empty message marks the node deprecated.
        flags: Flags local to this node.
        persistent_flags: Flags declared here and inherited by every descendant.
    """

    name: str = ""
    short: str = ""
    long: str = ""
    example: str = ""
    callback: CommandCallback | None = None
    aliases: list[str] = field(default_factory=list)
    hidden: bool = False
    deprecated: str = ""
    flags: FlagSet = field(default_factory=FlagSet, repr=False)
    persistent_flags: FlagSet = field(default_factory=FlagSet, repr=False)
    parent: Command | None = field(default=None, init=False, repr=False)
    _children: list[Command] = field(default_factory=list, init=False, repr=False)
    _args: list[str] = field(default_factory=list, init=False, repr=False)

    # ---------------- Tree structure ----------------

    def add_command(self, *commands: Command) -> None:
        """Attach children, keeping insertion order. Raises ValueError on collisions."""
        for child in commands:
            if not child.name or any(ch.isspace() for ch in child.name):
                raise ValueError(f"Invalid command name: {child.name!r}")
            if child.parent is not None:
                raise ValueError(
                    f"Command '{child.name}' already belongs to '{child.parent.command_path()}'.")
            taken = {n for c in self._children for n in (c.name, *c.aliases)}
            for new_name in (child.name, *child.aliases):
                if new_name in taken:
                    raise ValueError(
                        f"Command '{new_name}' already registered under '{self.command_path() or '<root>'}'.")
            inherited = [*self.persistent_flags, *self.inherited_flags()]
            for node in child.walk():
                for flag in node.local_flags():
                    _check_collision(flag, inherited, node)
            child.parent = self
            self._children.append(child)

    def commands(self) -> list[Command]:
        """Children in declaration order."""
        return list(self._children)

    def child(self, token: str) -> Command | None:
        """The child named (or aliased) exactly `token`, if any."""
        for candidate in self._children:
            if candidate.name == token or token in candidate.aliases:
                return candidate
        return None

    def walk(self) -> Iterator[Command]:
        """Depth-first, pre-order traversal of this subtree."""
        yield self
        for candidate in self._children:
            yield from candidate.walk()

    def root(self) -> Command:
        node = self
        while node.parent is not None:
            node = node.parent
        return node

    def command_path(self) -> str:
        """Space separated names from the root down to this node."""
        names: list[str] = []
        node: Command | None = self
        while node is not None:
            if node.name:
                names.append(node.name)
            node = node.parent
        return " ".join(reversed(names))

    # ---------------- Availability ----------------

    def is_runnable(self) -> bool:
        return self.callback is not None

    def has_available_subcommands(self) -> bool:
        return any(c.is_available() for c in self._children)

    def is_available(self) -> bool:
        """Visible in suggestions and help: not hidden, not deprecated, and useful."""
        if self.hidden or self.deprecated:
            return False
        return self.is_runnable() or self.has_available_subcommands()

    # ---------------- Flags ----------------

    def add_flag(
        self,
        name: str,
        default: Any = "",
        usage: str = "",
        *,
        shorthand: str = "",
        hidden: bool = False,
        type_name: str = "",
        persistent: bool = False,
    ) -> Flag:
        """Declare a flag on this node. Raises ValueError if the name or shorthand is taken."""
        flag = Flag(name=name, usage=usage, default=default, shorthand=shorthand,
                    hidden=hidden, type_name=type_name)
        return self.attach_flag(flag, persistent=persistent)

    def attach_flag(self, flag: Flag, *, persistent: bool = False) -> Flag:
        """Attach an already built Flag (see add_flag)."""
        _check_collision(flag, self.visible_flags(), self)
        if persistent:
            for node in self.walk():
                if node is not self:
                    _check_collision(flag, node.local_flags(), node)
        target = self.persistent_flags if persistent else self.flags
        return target.add(flag)

    def local_flags(self) -> list[Flag]:
        """Flags owned by this node: plain flags first, then persistent ones."""
        return [*self.flags, *self.persistent_flags]

    def inherited_flags(self) -> list[Flag]:
        """Persistent flags of strict ancestors, nearest ancestor first."""
        inherited: list[Flag] = []
        node = self.parent
        while node is not None:
            inherited.extend(node.persistent_flags)
            node = node.parent
        return inherited

    def visible_flags(self) -> list[Flag]:
        return [*self.local_flags(), *self.inherited_flags()]

    def lookup_flag(self, name: str) -> Flag | None:
        """Visible flag by long name."""
        return next((f for f in self.visible_flags() if f.name == name), None)

    def lookup_shorthand(self, char: str) -> Flag | None:
        """Visible flag by one-character shorthand."""
        if not char:
            return None
        return next((f for f in self.visible_flags() if f.shorthand == char), None)

    def value(self, name: str) -> Any:
        """Current value of a visible flag. Raises KeyError for unknown names."""
        flag = self.lookup_flag(name)
        if flag is None:
            raise KeyError(f"flag accessed but not defined: {name}")
        return flag.value

    # ---------------- Execution ----------------

    def set_args(self, args: list[str]) -> None:
        """Token vector used by the next execute()."""
        self._args = list(args)

    def find(self, args: list[str]) -> tuple[Command, list[str]]:
        """
        Walk down the tree following non-flag tokens.

        Flags (and the value token of a non-boolean flag) are skipped while
        looking for the next subcommand name. Returns the deepest node reached
        and the tokens left over for it.
        """
        node = self
        remaining = list(args)
        while True:
            positions = node._positional_indices(remaining)
            if not positions:
                return node, remaining
            first = positions[0]
            next_node = node.child(remaining[first])
            if next_node is None:
                return node, remaining
            del remaining[first]
            node = next_node

    def execute(self) -> Any:
        """
        Dispatch the tokens given to set_args().

        Returns whatever the action returns (or help text when the target
        node has no action or help was requested). Raises CommandError when
        the tokens do not fit the tree.
        """
        target, remaining = self.find(self._args)
        positionals = [remaining[i] for i in target._positional_indices(remaining)]
        if target is self and self._children and positionals:
            raise CommandError(
                f"unknown command {positionals[0]!r} for {self.command_path() or 'shell'!r}"
                f"{self._suggest_similar(positionals[0])}")

        if target._wants_help(remaining):
            return target.help_text()

        args = target._parse_flags(remaining)
        if target.deprecated:
            log.warning("Command %r is deprecated, %s", target.name, target.deprecated)
        if not target.is_runnable():
            return target.help_text()
        log.debug("Running %r with args %r", target.command_path(), args)
        return target.callback(target, args)  # type: ignore[misc]

    def _suggest_similar(self, token: str) -> str:
        universe = [c.name for c in self._children if c.is_available()]
        matches = difflib.get_close_matches(token, universe, n=3, cutoff=0.6)
        return f". Did you mean: {', '.join(matches)}?" if matches else ""

    def _takes_value(self, token: str) -> bool:
        """True for '--name' / '-x' naming a visible non-boolean flag."""
        if token.startswith("--"):
            flag = self.lookup_flag(token[2:])
        elif len(token) == 2:
            flag = self.lookup_shorthand(token[1])
        else:
            return False
        return flag is not None and not flag.is_bool

    def _positional_indices(self, args: list[str]) -> list[int]:
        positions: list[int] = []
        i = 0
        while i < len(args):
            token = args[i]
            if token == "--":
                positions.extend(range(i + 1, len(args)))
                break
            if token.startswith("-") and len(token) > 1:
                i += 2 if ("=" not in token and self._takes_value(token)) else 1
                continue
            positions.append(i)
            i += 1
        return positions

    def _wants_help(self, args: list[str]) -> bool:
        for token in args:
            if token == "--":
                return False
            if token == "--help" and self.lookup_flag("help") is None:
                return True
            if token == "-h" and self.lookup_shorthand("h") is None:
                return True
        return False

    def _parse_flags(self, args: list[str]) -> list[str]:
        """Assign flag values from `args` and return the positional tokens."""
        positionals: list[str] = []
        i = 0
        while i < len(args):
            token = args[i]
            i += 1
            if token == "--":
                positionals.extend(args[i:])
                break
            if token.startswith("--"):
                name, has_inline, inline = token[2:].partition("=")
                flag = self.lookup_flag(name)
                if flag is None:
                    raise CommandError(f"unknown flag: --{name}")
            elif token.startswith("-") and len(token) > 1:
                rest = token[2:]
                flag = self.lookup_shorthand(token[1])
                if flag is None:
                    raise CommandError(f"unknown shorthand flag: {token[1]!r} in {token}")
                has_inline = rest
                inline = rest[1:] if rest.startswith("=") else rest
                if flag.is_bool and rest and not rest.startswith("="):
                    raise CommandError(f"unexpected value {rest!r} for boolean flag -{flag.shorthand}")
            else:
                positionals.append(token)
                continue

            if has_inline:
                text = inline
            elif flag.is_bool:
                text = "true"
            elif i < len(args):
                text = args[i]
                i += 1
            else:
                raise CommandError(f"flag needs an argument: {token}")

            try:
                flag.set(text)
            except ValueError as exc:
                raise CommandError(
                    f"invalid argument {text!r} for {_flag_label(flag)!r} flag: {exc}") from exc
        return positionals

    # ---------------- Help ----------------

    def use_line(self) -> str:
        path = self.command_path() or "<command>"
        return f"{path} [flags]" if self.visible_flags() else path

    def help_text(self) -> str:
        """Usage, description, available subcommands and flags."""
        lines: list[str] = []
        description = (self.long or self.short).strip()
        if description:
            lines += [description, ""]

        lines.append("Usage:")
        if self.is_runnable():
            lines.append(f"  {self.use_line()}")
        if self.has_available_subcommands():
            lines.append(f"  {self.command_path() + ' ' if self.command_path() else ''}[command]")

        if self.aliases:
            lines += ["", "Aliases:", f"  {', '.join([self.name, *self.aliases])}"]
        if self.example:
            lines += ["", "Examples:", f"  {self.example}"]

        children = [[c.name, c.short] for c in self._children if c.is_available()]
        if children:
            lines += ["", "Available Commands:", format_table(children)]

        local_rows = [_flag_row(f) for f in self.local_flags() if not f.hidden]
        if local_rows:
            lines += ["", "Flags:", format_table(local_rows)]
        inherited_rows = [_flag_row(f) for f in self.inherited_flags() if not f.hidden]
        if inherited_rows:
            lines += ["", "Global Flags:", format_table(inherited_rows)]
        return "\n".join(lines)


def _check_collision(flag: Flag, existing: list[Flag], owner: Command) -> None:
    where = owner.command_path() or "<root>"
    for other in existing:
        if other is flag:
            continue
        if other.name == flag.name:
            raise ValueError(f"Flag --{flag.name} redefined on '{where}'.")
        if flag.shorthand and other.shorthand == flag.shorthand:
            raise ValueError(
                f"Shorthand -{flag.shorthand} of --{flag.name} on '{where}' is already used by --{other.name}.")


def _flag_label(flag: Flag) -> str:
    return f"{flag.short_form}, {flag.long_form}" if flag.shorthand else flag.long_form


def _flag_row(flag: Flag) -> list[str]:
    label = f"{flag.short_form + ', ' if flag.shorthand else '    '}{flag.long_form}"
    if not flag.is_bool:
        label += f" {flag.type_name}"
    usage = flag.usage
    if flag.def_value and not (flag.is_bool and flag.def_value == "false"):
        usage += f" (default {flag.def_value!r})" if flag.type_name == "string" else f" (default {flag.def_value})"
    return [label, usage.strip()]
