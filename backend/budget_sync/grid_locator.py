"""
Anchor lookup and address arithmetic over a grid of cell values.

A grid is the raw ``values`` payload of a sheet read: a list of rows, each a
list of cell values. Row 0 is spreadsheet row 1. Rows may be ragged.
"""

import re
from typing import Any, List, Optional, Sequence, Tuple

from .column_codec import decode, encode
from .errors import InvalidColumnLabelError

Grid = Sequence[Sequence[Any]]

_ADDRESS_PATTERN = re.compile(r"^([A-Za-z]+)(\d+)$")


def find_coordinates(target: str, grid: Grid) -> Optional[Tuple[int, int]]:
    """
    Find the first cell whose value equals ``target`` exactly.

    Rows are scanned top to bottom, columns left to right. No trimming or
    case folding is applied.

    Args:
        target: Text to look for
        grid: Rows of cell values

    Returns:
        (row_index, column_index) of the first match, or None
    """
    if not target:
        return None

    for row_index, columns in enumerate(grid):
        for column_index, value in enumerate(columns):
            if value == target:
                return row_index, column_index

    return None


def to_address(row_index: int, column_index: int) -> str:
    """Build an "AQ12" style address from zero-based coordinates."""
    return encode(column_index) + str(row_index + 1)


def split_address(address: str) -> Tuple[str, str]:
    """Split an address into its column letters and row digits."""
    match = _ADDRESS_PATTERN.match(address)
    if not match:
        raise InvalidColumnLabelError(f"Not a cell address: {address!r}")
    return match.group(1), match.group(2)


def column_of(address: str) -> str:
    return split_address(address)[0]


def offset_column(address: Optional[str], delta: int) -> Optional[str]:
    """
    Shift an address ``delta`` columns to the right, keeping its row.

    A zero delta or a missing address is returned unchanged.

    Raises:
        ColumnOutOfRangeError: If the shifted column leaves the A..ZZ range
    """
    if not delta or address is None:
        return address

    column, row = split_address(address)
    return encode(decode(column) + delta) + row


def find_and_offset_address(target: str, grid: Grid, delta: int) -> Optional[str]:
    """
    Locate ``target`` and return the address ``delta`` columns to its right.

    Used to go from a label cell (e.g. a month header) to the writable cell
    beside it. Returns None when the label is absent.
    """
    coordinates = find_coordinates(target, grid)
    if coordinates is None:
        return None

    return offset_column(to_address(*coordinates), delta)


def normalize_grid(values: Optional[List[List[Any]]]) -> List[List[Any]]:
    """Copy a sheet ``values`` payload into a list of lists."""
    return [list(row) for row in values or []]
