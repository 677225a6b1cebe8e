#!/usr/bin/env python3
# treeprompt/interface/loader.py
from __future__ import annotations

"""
Dynamic command loader.

Features:
- Imports all public modules under a given package (default: 'plugins').
- Supports 'entrypoint.py' inside a subpackage exporting COMMAND/COMMANDS,
  which are attached to the root in discovery order.
- Collects optional FLAG_VALUE_COMPLETER callables from the same modules.
"""

import importlib
import logging
import pkgutil
from dataclasses import dataclass, field
from pathlib import Path
from types import ModuleType
from typing import Any, Callable

from treeprompt.commands import Command

log = logging.getLogger("treeprompt.loader")


@dataclass
class LoadResult:
    modules: int = 0
    commands: list[Command] = field(default_factory=list)
    flag_value_completers: list[Callable[..., Any]] = field(default_factory=list)


def _register_from_entry_module(root: Command, module: ModuleType, result: LoadResult) -> None:
    """Attach COMMAND/COMMANDS exported by an entry module, if present."""
    exported: list[Any] = []
    if hasattr(module, "COMMAND"):
        exported.append(getattr(module, "COMMAND"))
    exported.extend(getattr(module, "COMMANDS", ()))

    for item in exported:
        if not isinstance(item, Command):
            log.warning("%s exports a non-Command object: %r", module.__name__, item)
            continue
        root.add_command(item)
        result.commands.append(item)

    completer = getattr(module, "FLAG_VALUE_COMPLETER", None)
    if callable(completer):
        result.flag_value_completers.append(completer)


def load_commands(root: Command, commands_package: str = "plugins") -> LoadResult:
    """
    Import all modules under the given package and attach what they export.

    Supported layouts:
      1) Plain modules: plugins/foo.py -> import plugins.foo
      2) Packages with an entrypoint: plugins/bar/entrypoint.py
         -> import plugins.bar.entrypoint

    Works with regular and namespace packages.
    """
    package = importlib.import_module(commands_package)
    package_paths = [str(p) for p in getattr(package, "__path__", [])]

    if not package_paths:
        raise RuntimeError(
            f"'{commands_package}' must be a package (folder) with modules.")

    result = LoadResult()
    for base_path in package_paths:
        for modinfo in sorted(pkgutil.iter_modules([base_path]), key=lambda m: m.name):
            module_name = modinfo.name
            if module_name.startswith("_"):
                # Ignore private modules
                continue

            target = f"{commands_package}.{module_name}"
            if modinfo.ispkg and (Path(base_path) / module_name / "entrypoint.py").exists():
                target += ".entrypoint"
            module = importlib.import_module(target)
            result.modules += 1
            _register_from_entry_module(root, module, result)
            log.debug("Loaded %s", target)

    return result
