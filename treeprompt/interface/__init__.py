#!/usr/bin/env python3
# treeprompt/interface/__init__.py
from __future__ import annotations

"""
Package for the interactive shell: completion engine, dispatch and frontends.

Provides:
- Tokenizer and cursor context resolution.
- Tree navigation and ordered suggestions.
- Flag reset and line dispatch.
- TreePrompt facade and terminal frontends (prompt_toolkit / readline / plain).
- Dynamic command loader for the plugins package.
"""


# Parser FIRST (completion and handler depend on it)
from .parser import tokenize, resolve, CursorContext

# Completion engine
from .completion import (
    Suggestion,
    CompletionHint,
    FlagValueCompleter,
    default_flag_value_completer,
    chain_flag_value_completers,
    navigate,
    suggest,
    complete,
)

# Dispatcher
from .handler import reset_flag_values, execute_line

# Loader
from .loader import load_commands, LoadResult

# CLI frontends and facade (after the engine is available)
from .cli import BaseCLI, PromptToolkitCLI, ReadlineCLI, make_cli, FRONTENDS
from .prompt import TreePrompt, DEFAULT_PROMPT_PREFIX

__all__ = [
    # parser
    "tokenize",
    "resolve",
    "CursorContext",
    # completion
    "Suggestion",
    "CompletionHint",
    "FlagValueCompleter",
    "default_flag_value_completer",
    "chain_flag_value_completers",
    "navigate",
    "suggest",
    "complete",
    # handler
    "reset_flag_values",
    "execute_line",
    # loader
    "load_commands",
    "LoadResult",
    # cli
    "BaseCLI",
    "PromptToolkitCLI",
    "ReadlineCLI",
    "make_cli",
    "FRONTENDS",
    "TreePrompt",
    "DEFAULT_PROMPT_PREFIX",
]
