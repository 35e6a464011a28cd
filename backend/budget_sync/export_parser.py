"""
Budget report export parsing.

The export is an HTML report grouped by category. Each category ends with a
total row (a ``.total-label-cell`` and a ``.total-number-cell``); the row just
above it carries the category code in its sixth cell.
"""

import logging
import re
from pathlib import Path
from typing import List, Optional, Union

from bs4 import BeautifulSoup

from .errors import ExportParseError
from .models import BudgetEntry, ParsedExport

logger = logging.getLogger(__name__)

TOTAL_PREFIX = "Total For "
GRAND_TOTAL = "Grand Total"
CODE_CELL_INDEX = 5

_MONTH_PATTERN = re.compile(r"From (\d\d)")
_CODE_PATTERN = re.compile(r"^(\d*)")


class ExportReportParser:
    """
    Extracts per-category spend from a budget report export.

    The document is parsed once on construction; ``report_month`` and
    ``entries`` read from the parsed tree.
    """

    def __init__(self, html: Union[str, bytes]):
        """
        Args:
            html: Raw export document
        """
        self.soup = BeautifulSoup(html, "html.parser")

    def report_month(self) -> int:
        """
        Read the report month from the ``h3`` heading ("... From 05/01/2024 ...").

        Returns:
            Month number, 1-12

        Raises:
            ExportParseError: If no heading carries a month
        """
        for heading in self.soup.find_all("h3"):
            match = _MONTH_PATTERN.search(heading.get_text())
            if match:
                return int(match.group(1))

        raise ExportParseError("Could not find report month in export heading")

    def entries(self) -> List[BudgetEntry]:
        """
        Collect one entry per category total row, excluding the grand total.

        Returns:
            Entries in document order
        """
        entries = []

        for label_cell in self.soup.select(".total-label-cell"):
            row = label_cell.parent
            category = label_cell.get_text().replace(TOTAL_PREFIX, "")

            if category == GRAND_TOTAL:
                continue

            number_cell = row.select_one(".total-number-cell")
            spent = self._parse_amount(number_cell.get_text() if number_cell else "")
            if spent is None:
                logger.warning("Skipping %s: unreadable total", category)
                continue

            entries.append(
                BudgetEntry(category=category, code=self._row_code(row), spent=spent)
            )

        return entries

    def parse(self, month: Optional[int] = None) -> ParsedExport:
        """Parse the export; a given ``month`` replaces the heading lookup."""
        if month is None:
            month = self.report_month()
        return ParsedExport(month=month, entries=self.entries())

    def _row_code(self, total_row) -> str:
        """Leading digits of the code cell in the row above the total."""
        previous = total_row.find_previous_sibling("tr")
        if previous is None:
            return ""

        cells = previous.find_all("td")
        if len(cells) <= CODE_CELL_INDEX:
            return ""

        text = cells[CODE_CELL_INDEX].get_text().strip()
        return _CODE_PATTERN.match(text).group(1)

    def _parse_amount(self, value_str: str) -> Optional[float]:
        """
        Parse a total cell such as "$1,234.56" or "($20.00)".

        Returns:
            Absolute amount or None if invalid
        """
        value_str = value_str.strip()
        if value_str.startswith("(") and value_str.endswith(")"):
            value_str = value_str[1:-1]

        value_str = value_str.replace("$", "").replace(",", "").strip()
        if value_str in ("", "-", ".", "-."):
            return None

        try:
            return abs(float(value_str))
        except ValueError:
            return None


def parse_export_file(path: Union[str, Path], month: Optional[int] = None) -> ParsedExport:
    """Read and parse an export file from disk."""
    path = Path(path)
    try:
        html = path.read_bytes()
    except OSError as e:
        raise ExportParseError(f"Could not read export {path}: {e}") from e

    return ExportReportParser(html).parse(month)
