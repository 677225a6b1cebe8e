#!/usr/bin/env python3
# treeprompt/boot/__init__.py
from __future__ import annotations
"""
Boot sequence package.

Exports:
- boot_sequence: startup pipeline with optional [  OK  ] / [FAILED] lines.
- BootState: root command, logger, config, command count and value policy.
"""


from .boot import BootState, boot_sequence

__all__ = ["boot_sequence", "BootState"]
