#!/usr/bin/env python3
# treeprompt/__init__.py
from __future__ import annotations
"""
treeprompt: an interactive shell over a tree of commands with flags.

Import the building blocks from the subpackages:
- treeprompt.commands: Command, Flag, command/group/flag builders.
- treeprompt.interface: TreePrompt, completion engine, dispatcher.
"""

__version__ = "0.1.0"
