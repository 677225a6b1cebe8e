#!/usr/bin/env python3
# treeprompt/interface/parser.py
from __future__ import annotations

"""
Line tokenization and cursor context.

Responsibilities:
- Tokenize a command line into shell-like tokens, never failing.
- Derive (tokens, previous token, current token) for the cursor position.
"""

import shlex
from typing import NamedTuple


class CursorContext(NamedTuple):
    tokens: list[str]
    prev: str
    curr: str


def tokenize(command_line: str) -> list[str]:
    """
    Split a raw command line into tokens using POSIX rules.

    Quotes group words and are stripped, escapes are unescaped. Malformed
    input (e.g. an unmatched quote) falls back to plain whitespace splitting,
    so 'info "John' gives ['info', '"John'].
    """
    try:
        return shlex.split(command_line, posix=True)
    except ValueError:
        return command_line.split()


def resolve(full_text: str, word_before_cursor: str) -> CursorContext:
    """
    Work out what the cursor is sitting on.

    1) cursor at whitespace:   [info --name ]      prev='--name' curr=''
    2) cursor inside a word:   [info --name abc]   prev='--name' curr='abc'
    """
    tokens = tokenize(full_text)
    prev = curr = ""
    if word_before_cursor == "":
        if tokens:
            prev = tokens[-1]
    else:
        if len(tokens) >= 2:
            prev = tokens[-2]
        if tokens:
            curr = tokens[-1]
    return CursorContext(tokens, prev, curr)
