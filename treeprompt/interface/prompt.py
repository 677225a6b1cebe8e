#!/usr/bin/env python3
# treeprompt/interface/prompt.py
from __future__ import annotations

"""
TreePrompt: an interactive shell over a command tree.

Wires the completion engine and the dispatcher to a terminal frontend and
holds the prompt prefix, which the frontend re-reads before every redraw.

Example:
    shell = TreePrompt(root)
    shell.set_prompt_prefix(">> ")
    shell.set_flag_value_completer(my_completer)
    shell.run()
"""

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from treeprompt.commands import Command
from treeprompt.interface.cli import make_cli
from treeprompt.interface.completion import FlagValueCompleter, Suggestion, complete, default_flag_value_completer
from treeprompt.interface.handler import execute_line

if TYPE_CHECKING:
    from treeprompt.config import AppConfig

log = logging.getLogger("treeprompt.prompt")

DEFAULT_PROMPT_PREFIX = "> "


class TreePrompt:
    """
    Interactive shell bound to one command tree.

    Args:
        root: Root of the command tree; reused for every line.
        prompt_prefix: Initial prompt string; may contain ANSI colour codes.
        history_path: File for line history (None keeps history in memory).
        complete_while_typing: Open the completion menu on every keystroke.
        show_completion_at_start: Show suggestions before anything is typed.
        flag_value_completer: Policy producing flag value suggestions.
        frontend: 'auto', 'prompt_toolkit', 'readline' or 'plain'.
    """

    def __init__(
        self,
        root: Command,
        *,
        prompt_prefix: str = DEFAULT_PROMPT_PREFIX,
        history_path: Path | None = None,
        complete_while_typing: bool = True,
        show_completion_at_start: bool = True,
        flag_value_completer: FlagValueCompleter | None = None,
        frontend: str = "auto",
    ) -> None:
        self.root = root
        self.prompt_prefix = prompt_prefix
        self.history_path = history_path
        self.complete_while_typing = complete_while_typing
        self.show_completion_at_start = show_completion_at_start
        self.flag_value_completer: FlagValueCompleter = flag_value_completer or default_flag_value_completer
        self.frontend = frontend

    @classmethod
    def from_config(
        cls,
        root: Command,
        config: "AppConfig",
        flag_value_completer: FlagValueCompleter | None = None,
    ) -> "TreePrompt":
        return cls(
            root,
            prompt_prefix=config.prompt,
            history_path=config.history_file_path,
            complete_while_typing=config.complete_while_typing,
            show_completion_at_start=config.show_completion_at_start,
            flag_value_completer=flag_value_completer,
            frontend=config.frontend,
        )

    # ---------------- Prompt prefix ----------------

    def set_prompt_prefix(self, prefix: str) -> None:
        """Set the prompt string; it is picked up at the next redraw."""
        self.prompt_prefix = prefix

    def get_prefix(self) -> tuple[str, bool]:
        """Return (prefix, live); live prefixes are re-read before each line."""
        return self.prompt_prefix, True

    # ---------------- Engine ----------------

    def set_flag_value_completer(self, completer: FlagValueCompleter | None) -> None:
        """Replace the flag value policy (None restores the default)."""
        self.flag_value_completer = completer or default_flag_value_completer

    def complete(self, text: str, word_before_cursor: str) -> list[Suggestion]:
        """Suggestions for a buffer and the word fragment left of the cursor."""
        return complete(self.root, text, word_before_cursor, self.flag_value_completer)

    def execute(self, line: str) -> bool:
        """Reset the tree and run one submitted line."""
        return execute_line(self.root, line)

    def run(self) -> None:
        """Read and execute lines until EOF or until a command exits the process."""
        cli = make_cli(self, self.frontend)
        log.debug("Using %s frontend", type(cli).__name__)
        with cli:
            while True:
                try:
                    line = cli.get_line()
                except KeyboardInterrupt:
                    continue
                except EOFError:
                    break
                self.execute(line)
