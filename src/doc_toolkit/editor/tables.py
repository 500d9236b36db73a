"""
Module: editor.tables

Purpose:
    Table markup for the editor's "insert table" action. Tables carry
    inline styles so they render the same on screen and in exports.

Key Functions:
    - build_table_html(): Markup for a rows x cols table
    - insert_table(): Splice a table into existing markup
"""

from __future__ import annotations

TABLE_STYLE = "width: 100%; border-collapse: collapse; margin: 10px 0;"
CELL_STYLE = "border: 1px solid black; padding: 8px;"


def build_table_html(rows: int, cols: int) -> str:
    """
    Build table markup with placeholder cell text.

    Args:
        rows: Number of rows (> 0)
        cols: Number of columns (> 0)

    Returns:
        Table markup, cells labelled "Row i Col j" (1-based)

    Raises:
        ValueError: If rows or cols is not positive
    """
    if rows <= 0 or cols <= 0:
        raise ValueError(f"Table size must be positive: {rows}x{cols}")

    body = "".join(
        "<tr>"
        + "".join(
            f'<td style="{CELL_STYLE}">Row {r} Col {c}</td>' for c in range(1, cols + 1)
        )
        + "</tr>"
        for r in range(1, rows + 1)
    )
    return f'<table style="{TABLE_STYLE}">{body}</table>'


def insert_table(content: str, position: int, rows: int, cols: int) -> str:
    """
    Insert a table into markup at a character position.

    Position is clamped to the markup bounds.
    """
    position = max(0, min(position, len(content)))
    return content[:position] + build_table_html(rows, cols) + content[position:]
