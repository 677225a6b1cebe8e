#!/usr/bin/env python3
# treeprompt/boot/boot.py
from __future__ import annotations
"""
Boot sequence for treeprompt.

Loads configuration, sets up logging, builds the command tree from the
plugins package and prepares the flag value policy. Each step can report a
Linux-style [  OK  ] / [FAILED] line.
"""

import logging
import platform
from dataclasses import dataclass
from typing import Any, Callable

from treeprompt.commands import Command
from treeprompt.config import AppConfig, load_config
from treeprompt.interface import (
    FlagValueCompleter,
    chain_flag_value_completers,
    load_commands,
    reset_flag_values,
)
from treeprompt.ui import colorize, enable_windows_vt, init_logger, print_line

ROOT_DESCRIPTION = "Interactive command shell. Press Tab or Down for suggestions."


@dataclass(slots=True)
class BootState:
    root: Command
    logger: logging.Logger
    config: AppConfig
    loaded_count: int
    flag_value_completer: FlagValueCompleter


def _step(label: str, fn: Callable[[], Any], *, verbose: bool) -> Any:
    """Run a boot step, optionally with status output."""
    try:
        out = fn()
    except Exception as exc:
        if verbose:
            print_line(
                colorize(f"[FAILED] {label} ({type(exc).__name__}: {exc})", "red")
            )
        raise
    if verbose:
        print_line(colorize(f"[  OK  ] {label}", "green"))
    return out


def boot_sequence(config: AppConfig | None = None) -> BootState:
    config = config or load_config()
    verbose = config.show_boot

    _step("Enable ANSI sequences", enable_windows_vt, verbose=verbose)
    _step(
        f"Detect environment: {platform.system()} {platform.release()} / Python {platform.python_version()}",
        lambda: None,
        verbose=verbose,
    )

    logger = _step(
        "Initialize logger",
        lambda: init_logger(
            level=config.log_level,
            logfile=str(config.log_file_path) if config.log_file_path else None),
        verbose=verbose,
    )

    root = Command(short=ROOT_DESCRIPTION)
    loaded = _step(
        f"Load commands package '{config.commands_package}'",
        lambda: load_commands(root, config.commands_package),
        verbose=verbose,
    )
    loaded_count = _step("Count command definitions",
                         lambda: sum(1 for _ in root.walk()) - 1, verbose=verbose)

    completer = _step(
        f"Collect flag value completers ({len(loaded.flag_value_completers)})",
        lambda: chain_flag_value_completers(*loaded.flag_value_completers),
        verbose=verbose,
    )
    _step("Reset flags to defaults", lambda: reset_flag_values(root), verbose=verbose)
    _step("Boot complete", lambda: None, verbose=verbose)

    logger.debug("Booted with %d commands from %d modules", loaded_count, loaded.modules)
    return BootState(
        root=root,
        logger=logger,
        config=config,
        loaded_count=loaded_count,
        flag_value_completer=completer,
    )
