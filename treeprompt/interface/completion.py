#!/usr/bin/env python3
# treeprompt/interface/completion.py
from __future__ import annotations

"""
Command line completion over the command tree.

Suggestions come from three sources, computed independently and then
combined:
- flag values, when the previous token names a visible flag;
- subcommand names of the resolved node;
- flag names (long and shorthand) of the resolved node, only when no flag
  value was suggested.

Nothing here performs I/O: it runs on every keystroke.
"""

from dataclasses import dataclass, replace
from typing import Callable, Sequence

from treeprompt.commands import Command, Flag
from treeprompt.interface.parser import resolve


@dataclass(frozen=True, slots=True)
class Suggestion:
    """One completion candidate and the text shown beside it."""
    text: str
    description: str = ""


@dataclass(frozen=True, slots=True)
class CompletionHint:
    """
    Context for one completion request.

    Attributes:
        cmd: Node the committed tokens resolve to.
        flag: Flag whose value is being typed (only set for value policies).
        args: The whole tokenized line.
        prev: Token before the one under the cursor.
        curr: Partial token under the cursor ('' at a word boundary).
    """
    cmd: Command
    flag: Flag | None
    args: tuple[str, ...]
    prev: str
    curr: str


FlagValueCompleter = Callable[[CompletionHint], Sequence[Suggestion]]


def default_flag_value_completer(hint: CompletionHint) -> list[Suggestion]:
    """Booleans need no value; anything else is offered its declared default."""
    if hint.flag is None or hint.flag.is_bool:
        return []
    return [Suggestion(hint.flag.def_value, "default value")]


def chain_flag_value_completers(*completers: Callable[[CompletionHint], Sequence[Suggestion] | None]) -> FlagValueCompleter:
    """
    Combine value policies: the first one returning a list (even an empty
    one) wins; when all return None the default policy answers.
    """

    def _chained(hint: CompletionHint) -> list[Suggestion]:
        for completer in completers:
            items = completer(hint)
            if items is not None:
                return list(items)
        return default_flag_value_completer(hint)

    return _chained


def navigate(root: Command, tokens: Sequence[str]) -> Command:
    """
    Follow tokens down the tree by exact name (or alias) and return the
    deepest node reached; the root when the first token matches nothing.

    A partially typed last token fails the exact match and simply stops the
    walk one level early.
    """
    node = root
    for token in tokens:
        next_node = node.child(token)
        if next_node is None:
            break
        node = next_node
    return node


def _prefix_matches(text: str, prefix: str) -> bool:
    return text.startswith(prefix)


def _completion_flags(cmd: Command) -> list[Flag]:
    return [f for f in (*cmd.local_flags(), *cmd.inherited_flags()) if not f.hidden]


def suggest_flag_values(hint: CompletionHint, completer: FlagValueCompleter) -> list[Suggestion]:
    items: list[Suggestion] = []
    for candidate in _completion_flags(hint.cmd):
        if candidate.matches(hint.prev):
            items.extend(completer(replace(hint, flag=candidate)) or ())
    return items


def suggest_commands(hint: CompletionHint) -> list[Suggestion]:
    return [
        Suggestion(child.name, child.short)
        for child in hint.cmd.commands()
        if child.is_available() and _prefix_matches(child.name, hint.curr)
    ]


def suggest_flags(hint: CompletionHint) -> list[Suggestion]:
    items: list[Suggestion] = []
    for candidate in _completion_flags(hint.cmd):
        if _prefix_matches(candidate.long_form, hint.curr):
            items.append(Suggestion(candidate.long_form, candidate.usage))
        if candidate.shorthand and _prefix_matches(candidate.short_form, hint.curr):
            items.append(Suggestion(candidate.short_form, candidate.usage))
    return items


def suggest(hint: CompletionHint, completer: FlagValueCompleter | None = None) -> list[Suggestion]:
    """
    Produce the ordered suggestions for a hint.

    Order: flag values, then subcommands, then flag names. Flag names are
    dropped whenever at least one flag value was produced.
    """
    value_items = suggest_flag_values(hint, completer or default_flag_value_completer)
    command_items = suggest_commands(hint)
    flag_items = [] if value_items else suggest_flags(hint)
    return [*value_items, *command_items, *flag_items]


def build_hint(root: Command, full_text: str, word_before_cursor: str) -> CompletionHint:
    tokens, prev, curr = resolve(full_text, word_before_cursor)
    return CompletionHint(navigate(root, tokens), None, tuple(tokens), prev, curr)


def complete(
    root: Command,
    full_text: str,
    word_before_cursor: str,
    completer: FlagValueCompleter | None = None,
) -> list[Suggestion]:
    """Resolve the cursor, find the node and suggest, in one call per keystroke."""
    return suggest(build_hint(root, full_text, word_before_cursor), completer)
