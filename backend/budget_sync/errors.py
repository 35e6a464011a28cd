"""Exceptions raised while planning and applying ledger updates."""


class BudgetSyncError(Exception):
    """Base class for every error raised by budget_sync."""


class ColumnOutOfRangeError(BudgetSyncError, ValueError):
    """Column index cannot be written with one or two letters."""


class InvalidColumnLabelError(BudgetSyncError, ValueError):
    """Column label or cell address is malformed."""


class AnchorNotFoundError(BudgetSyncError):
    """A label the ledger layout depends on is missing from the grid."""

    def __init__(self, label: str):
        super().__init__(f"Could not locate anchor cell: {label!r}")
        self.label = label


class MonthNotMappedError(BudgetSyncError):
    """Report month has no ledger header."""


class ExportParseError(BudgetSyncError):
    """Budget export could not be read."""


class GridFetchError(BudgetSyncError):
    """Spreadsheet read returned no values."""


class SheetsAuthError(BudgetSyncError):
    """Service account credentials could not be loaded or used."""
