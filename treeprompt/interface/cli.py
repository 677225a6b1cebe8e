#!/usr/bin/env python3
# treeprompt/interface/cli.py
from __future__ import annotations

"""
Interactive input frontends.

Selection order for 'auto':
    1) prompt_toolkit (completion menu with descriptions + history)
    2) readline / pyreadline3 (basic completion + history)
    3) plain input (stdin is not a terminal, or nothing else is available)

Every frontend asks the same TreePrompt for suggestions, passing the whole
buffer and the word left of the cursor.
"""

import sys
from pathlib import Path
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from treeprompt.interface.prompt import TreePrompt

FRONTENDS = ("auto", "prompt_toolkit", "readline", "plain")


def _touch(path: Path | None) -> None:
    if path is None:
        return
    path.parent.mkdir(parents=True, exist_ok=True)
    path.touch(exist_ok=True)


class BaseCLI:
    """
    Base interface for CLI frontends; on its own it reads plain lines.

    Subclasses should implement:
        - setup()
        - get_line()
        - teardown()

    This base also provides context manager support to guarantee teardown.
    """

    def __init__(self, shell: "TreePrompt") -> None:
        self.shell = shell

    def setup(self) -> None:
        ...

    def get_line(self) -> str:
        prefix, _ = self.shell.get_prefix()
        return input(prefix)

    def teardown(self) -> None:
        ...

    # Context manager helpers
    def __enter__(self) -> "BaseCLI":
        self.setup()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.teardown()


# ===== Preferred: prompt_toolkit =====
class PromptToolkitCLI(BaseCLI):
    """Line editor with a live prefix, history and a completion menu."""

    def __init__(self, shell: "TreePrompt") -> None:
        super().__init__(shell)
        from prompt_toolkit import prompt
        from prompt_toolkit.application.current import get_app
        from prompt_toolkit.completion import Completer, Completion
        from prompt_toolkit.formatted_text import ANSI
        from prompt_toolkit.history import FileHistory, InMemoryHistory
        from prompt_toolkit.key_binding import KeyBindings

        self._prompt = prompt
        self._get_app = get_app
        self._ansi = ANSI
        history_path = shell.history_path
        self._history = FileHistory(str(history_path)) if history_path else InMemoryHistory()

        class _Completer(Completer):
            def get_completions(self, document, complete_event):
                word = document.get_word_before_cursor(WORD=True)
                for item in shell.complete(document.text, word):
                    # display through ANSI so coloured labels keep their escapes
                    yield Completion(
                        item.text,
                        start_position=-len(word),
                        display=ANSI(item.text),
                        display_meta=ANSI(item.description),
                    )

        self.completer = _Completer()

        kb = KeyBindings()

        @kb.add("down")
        def _(event):
            b = event.app.current_buffer
            if b.complete_state:
                b.complete_next()
            else:
                b.start_completion(select_first=False)

        @kb.add("backspace")
        def _(event):
            b = event.app.current_buffer
            if b.read_only():
                return
            if b.selection_state:
                b.cut_selection()
            else:
                b.delete_before_cursor(1)
            # show fresh suggestions after deletion
            b.start_completion(select_first=False)

        @kb.add("delete")
        def _(event):
            b = event.app.current_buffer
            if b.selection_state:
                b.cut_selection()
            else:
                b.delete(1)
            b.start_completion(select_first=False)

        self._key_bindings = kb

    def setup(self) -> None:
        _touch(self.shell.history_path)

    def _message(self):
        prefix, _ = self.shell.get_prefix()
        return self._ansi(prefix)

    def _show_completions(self) -> None:
        self._get_app().current_buffer.start_completion(select_first=False)

    def get_line(self) -> str:
        prefix, live = self.shell.get_prefix()
        return self._prompt(
            self._message if live else self._ansi(prefix),
            history=self._history,
            completer=self.completer,
            complete_while_typing=self.shell.complete_while_typing,
            key_bindings=self._key_bindings,
            pre_run=self._show_completions if self.shell.show_completion_at_start else None,
        )


# ===== Fallback: readline / pyreadline3 =====
class ReadlineCLI(BaseCLI):
    """Fallback editor with basic completion and history."""

    def __init__(self, shell: "TreePrompt") -> None:
        super().__init__(shell)
        import readline  # type: ignore[attr-defined]

        self.readline = readline

    def setup(self) -> None:
        history_path = self.shell.history_path
        if history_path is not None:
            _touch(history_path)
            try:
                self.readline.read_history_file(str(history_path))
            except OSError:
                pass

        # Whitespace only: '-' and '=' belong to flag tokens
        self.readline.set_completer_delims(" \t\n")

        def _complete(text_fragment: str, state_index: int) -> Optional[str]:
            buffer_text = self.readline.get_line_buffer()
            matches = [item.text for item in self.shell.complete(buffer_text, text_fragment)]
            return matches[state_index] if state_index < len(matches) else None

        self.readline.set_completer(_complete)
        self.readline.parse_and_bind("tab: complete")

    def teardown(self) -> None:
        history_path = self.shell.history_path
        if history_path is None:
            return
        try:
            self.readline.write_history_file(str(history_path))
        except OSError:
            pass


def make_cli(shell: "TreePrompt", frontend: str = "auto") -> BaseCLI:
    """
    Select the frontend. 'auto' degrades from prompt_toolkit to readline to
    plain input; naming a frontend explicitly lets its import errors surface.
    """
    if frontend not in FRONTENDS:
        raise ValueError(f"frontend must be one of {FRONTENDS}, got {frontend!r}")
    if frontend == "prompt_toolkit":
        return PromptToolkitCLI(shell)
    if frontend == "readline":
        return ReadlineCLI(shell)
    if frontend == "plain" or not sys.stdin.isatty():
        return BaseCLI(shell)

    try:
        return PromptToolkitCLI(shell)
    except ImportError:
        try:
            return ReadlineCLI(shell)
        except ImportError:
            return BaseCLI(shell)
