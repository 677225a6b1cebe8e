# plugins/items/__init__.py
from __future__ import annotations

"""
Item list demo:
- show: print the collected items
- add apple / add melon: append items, honouring --count
"""
