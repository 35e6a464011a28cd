"""
Join budget entries to ledger rows.

The ledger keeps one row per budget category, identified by a code in a
fixed column. Entries extracted from a report carry the same code, so the
code is the join key between report and ledger.
"""

import logging
from typing import Dict, Iterable, List, Optional

from .grid_locator import Grid
from .models import BudgetEntry, WriteInstruction

logger = logging.getLogger(__name__)

CodeRowMap = Dict[str, int]


def build_code_row_map(
    grid: Grid,
    code_column_index: int,
    expected_row_width: Optional[int] = None,
) -> CodeRowMap:
    """
    Map every row code in the grid to its 1-based row number.

    Args:
        grid: Rows of cell values
        code_column_index: Zero-based column holding the code
        expected_row_width: When given, only rows of exactly this length
            count and the code is read from their last cell. Sheet reads
            drop trailing empty cells, so this skips rows without a code.

    Returns:
        New dict of code -> row number

    A code found on several rows maps to the last of them.
    """
    code_rows: CodeRowMap = {}

    for row_index, columns in enumerate(grid):
        if expected_row_width is not None:
            if not columns or len(columns) != expected_row_width:
                continue
            code = columns[-1]
        else:
            if len(columns) <= code_column_index:
                continue
            code = columns[code_column_index]

        if code in (None, ""):
            continue

        code = str(code)
        if code in code_rows:
            logger.debug(
                "Code %s on row %d replaces row %d", code, row_index + 1, code_rows[code]
            )
        code_rows[code] = row_index + 1

    return code_rows


def reconcile(
    entries: Iterable[BudgetEntry],
    code_row_map: CodeRowMap,
    write_column: str,
) -> List[WriteInstruction]:
    """
    Turn entries into cell writes in ``write_column``.

    Entries whose code has no ledger row are skipped. Order follows the
    entries; two entries on the same row both produce a write.
    """
    writes: List[WriteInstruction] = []

    for entry in entries:
        row = code_row_map.get(entry.code)
        if row is None:
            logger.debug("No ledger row for %s (%r), skipping", entry.category, entry.code)
            continue

        address = f"{write_column}{row}"
        logger.info(
            "Will insert %s into %s for %s (%s)",
            entry.spent,
            address,
            entry.category,
            entry.code,
        )
        writes.append(WriteInstruction(address=address, value=entry.spent))

    return writes


def unmatched_codes(entries: Iterable[BudgetEntry], code_row_map: CodeRowMap) -> List[str]:
    return [entry.code for entry in entries if entry.code not in code_row_map]
