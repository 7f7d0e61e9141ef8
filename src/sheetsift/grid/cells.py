"""Cell classification helpers shared by the resolvers and detectors."""

import math
import re
from typing import Optional, Sequence

NUMBER_PATTERN = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)


def is_blank(cell: Optional[str]) -> bool:
    """Return True when the cell holds nothing but whitespace."""
    return cell is None or cell.strip() == ""


def cell_at(row: Sequence[str], index: int) -> str:
    """Return the cell at ``index``, or an empty string past the end of a short row."""
    if 0 <= index < len(row):
        return row[index]
    return ""


def looks_like_number(cell: Optional[str]) -> bool:
    """
    Check whether a cell reads as a number.

    Grouping commas and spaces are stripped before parsing, so "1,234.5" and
    "1 000" both count. Only ASCII decimal or exponent notation is accepted;
    digit underscores, non-ASCII digits, NaN and infinities (spelled out or
    overflowing) are not numbers.
    """
    if cell is None:
        return False

    value = cell.strip()
    if not value:
        return False

    value = value.replace(",", "").replace(" ", "")
    if not NUMBER_PATTERN.fullmatch(value):
        return False

    return math.isfinite(float(value))


def count_non_empty(row: Sequence[str]) -> int:
    """Count cells with visible content."""
    return sum(1 for cell in row if not is_blank(cell))


def count_numeric(row: Sequence[str]) -> int:
    """Count cells that parse as numbers."""
    return sum(1 for cell in row if looks_like_number(cell))


def has_data(row: Sequence[str]) -> bool:
    return any(not is_blank(cell) for cell in row)


def clean_cell_data(text: str) -> str:
    """Replace line breaks with spaces and collapse repeated spaces."""
    text = text.replace("\r\n", " ").replace("\n", " ").replace("\r", " ")
    while "  " in text:
        text = text.replace("  ", " ")
    return text.strip()
