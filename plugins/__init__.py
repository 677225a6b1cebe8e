# plugins/__init__.py
"""Command plugins attached to the shell root at boot."""
