"""
Fixed-width Markdown tables.

Each column is padded to its widest cell and the separator row is made of
dashes of that width:

    | label  | abs 0    |
    | ------ | -------- |
    | setosa | 0.731059 |
"""

from typing import List, Sequence, TextIO


def column_widths(headers: Sequence[str], rows: Sequence[Sequence[str]]) -> List[int]:
    """Widest cell of each column, header included."""
    sizes = [len(h) for h in headers]
    for row in rows:
        if len(row) != len(headers):
            raise ValueError(f"row has {len(row)} cells, expected {len(headers)}")
        for j, item in enumerate(row):
            sizes[j] = max(sizes[j], len(item))
    return sizes


def format_row(cells: Sequence[str], sizes: Sequence[int]) -> str:
    return "| " + " | ".join(c.ljust(w) for c, w in zip(cells, sizes)) + " |"


def format_table(headers: Sequence[str], rows: Sequence[Sequence[str]]) -> str:
    """Render the table as a string ending in a newline."""
    sizes = column_widths(headers, rows)
    lines = [
        format_row(headers, sizes),
        format_row(["-" * w for w in sizes], sizes),
    ]
    lines.extend(format_row(row, sizes) for row in rows)
    return "\n".join(lines) + "\n"


def write_table(out: TextIO, headers: Sequence[str], rows: Sequence[Sequence[str]]):
    """Write the table to an open text stream."""
    out.write(format_table(headers, rows))
