"""
Spreadsheet-style cell addressing.

Columns are labelled with bijective base-26 letters (A..Z, AA, AB, ...),
rows with 1-based numbers, so (row 0, column 0) is "A1".
"""

import re
from typing import List, Tuple

_REFERENCE_PATTERN = re.compile(r'^([A-Z]+)(\d+)$')


def column_name(index: int) -> str:
    """Return the letter label for a 0-based column index."""
    if index < 0:
        raise ValueError(f"Column index must be non-negative: {index}")

    letters = []
    while index >= 0:
        letters.append(chr(ord('A') + index % 26))
        index = index // 26 - 1
    return ''.join(reversed(letters))


def row_label(index: int) -> int:
    return index + 1


def reference_of(row: int, column: int) -> str:
    """Return the reference token for a cell, e.g. (1, 2) -> "C2"."""
    return f"{column_name(column)}{row_label(row)}"


def parse_reference(reference: str) -> Tuple[int, int]:
    """Parse a reference token back to 0-based (row, column)."""
    match = _REFERENCE_PATTERN.match(reference.strip().upper())
    if not match:
        raise ValueError(f"Invalid cell reference: {reference}")

    letters, row_str = match.groups()

    column = 0
    for char in letters:
        column = column * 26 + (ord(char) - ord('A') + 1)

    row = int(row_str) - 1
    if row < 0:
        raise ValueError(f"Row numbers start at 1: {reference}")

    return row, column - 1


def column_labels(count: int) -> List[str]:
    return [column_name(i) for i in range(count)]


def row_labels(count: int) -> List[int]:
    return [row_label(i) for i in range(count)]
