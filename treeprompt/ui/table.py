#!/usr/bin/env python3
# treeprompt/ui/table.py
from __future__ import annotations

from typing import List, Optional, Sequence

from treeprompt.ui.ansi import visible_width


def _column_widths(rows: Sequence[Sequence[str]]) -> List[int]:
    widths: List[int] = []
    for row in rows:
        for col_idx, cell in enumerate(row):
            cell_width = visible_width(cell)
            if col_idx >= len(widths):
                widths.append(cell_width)
            else:
                widths[col_idx] = max(widths[col_idx], cell_width)
    return widths


def format_table(
    rows: Sequence[Sequence[object]],
    headers: Optional[Sequence[object]] = None,
    *,
    indent: int = 2,
    gap: int = 3,
) -> str:
    """
    Return borderless, left-aligned columns (ANSI-safe width calculation).

    Trailing whitespace is trimmed from every line so the last column can
    hold free text of any length.
    """
    str_rows = [[str(cell) for cell in row] for row in rows]
    str_headers = [str(h) for h in headers] if headers is not None else None
    widths = _column_widths(([str_headers] if str_headers else []) + str_rows)

    def render_row(row: Sequence[str]) -> str:
        parts = []
        for i, cell in enumerate(row):
            padding = " " * (widths[i] - visible_width(cell))
            parts.append(cell + padding)
        return (" " * indent + (" " * gap).join(parts)).rstrip()

    lines: List[str] = []
    if str_headers:
        lines.append(render_row(str_headers))
    lines.extend(render_row(row) for row in str_rows)
    return "\n".join(lines)
