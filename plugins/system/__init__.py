# plugins/system/__init__.py
"""Shell housekeeping commands."""
