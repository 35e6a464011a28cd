"""
One reconciliation run: read the ledger, plan the month's writes, apply them.

``plan_month_update`` is pure over a fetched grid. ``run_sync`` wraps it with
the sheet read and batch write and reports the outcome as a ``SyncResult``
rather than raising, so the caller decides how a failed run exits.
"""

import calendar
import logging
from datetime import date
from typing import List, Optional, Protocol, Sequence

from google.auth.exceptions import GoogleAuthError
from googleapiclient.errors import HttpError

from . import update_plan
from .column_codec import decode
from .config import Settings
from .errors import AnchorNotFoundError, BudgetSyncError, MonthNotMappedError
from .grid_locator import Grid, column_of, find_and_offset_address
from .langfuse_tracer import get_tracer
from .models import BudgetEntry, SyncResult, WriteInstruction
from .reconciler import build_code_row_map, reconcile

logger = logging.getLogger(__name__)


class LedgerStore(Protocol):
    def fetch_grid(self, sheet_range: str) -> List[List]: ...

    def batch_update(self, plan: Sequence[WriteInstruction], value_input_option: str = ...) -> dict: ...


def month_label(month: int, budget_year_start: date) -> str:
    """
    Header text of ``month`` in the ledger, e.g. "January 2025".

    Months before the budget year's first month fall in the next calendar year.
    """
    if not 1 <= month <= 12:
        raise MonthNotMappedError(f"No month string mapped for value: {month}")

    year = budget_year_start.year
    if month < budget_year_start.month:
        year += 1
    return f"{calendar.month_name[month]} {year}"


def day_of_year(today: date, budget_year_start: date) -> int:
    """Day number within the budget year, 1 on its first day."""
    return (today - budget_year_start).days + 1


def plan_month_update(
    grid: Grid,
    entries: Sequence[BudgetEntry],
    month: int,
    settings: Settings,
    today: Optional[date] = None,
) -> List[WriteInstruction]:
    """
    Build the writes for ``month`` against a fetched grid.

    Raises:
        MonthNotMappedError: If ``month`` is outside 1-12
        AnchorNotFoundError: If the month header or day-of-year label is missing
    """
    today = today or date.today()

    label = month_label(month, settings.budget_year_start)
    month_address = find_and_offset_address(label, grid, settings.month_offset)
    if month_address is None:
        raise AnchorNotFoundError(label)
    month_column = column_of(month_address)

    code_column_index = decode(settings.code_column)
    code_rows = build_code_row_map(grid, code_column_index, code_column_index + 1)
    entry_writes = reconcile(entries, code_rows, month_column)

    day_address = find_and_offset_address(settings.day_of_year_label, grid, 1)
    if day_address is None:
        raise AnchorNotFoundError(settings.day_of_year_label)

    day_number = day_of_year(today, settings.budget_year_start)
    logger.info("Will insert day of year %d into %s", day_number, day_address)

    return update_plan.build(
        entry_writes, [WriteInstruction(address=day_address, value=day_number)]
    )


def run_sync(
    entries: Sequence[BudgetEntry],
    month: int,
    settings: Settings,
    client: LedgerStore,
    today: Optional[date] = None,
    dry_run: bool = False,
) -> SyncResult:
    """Fetch, plan and write one month. Never raises for ledger or Sheets API errors."""
    logger.info("Updating spreadsheet with data for month #%d", month)

    tracer = get_tracer()
    trace = tracer.create_trace(
        "sync_month", metadata={"month": month, "entries": len(entries), "dry_run": dry_run}
    )
    step = "fetch_grid"
    plan: List[WriteInstruction] = []

    try:
        grid = client.fetch_grid(settings.sheet_range)
        tracer.add_span(trace, step, output_text=f"{len(grid)} rows")

        step = "plan"
        plan = plan_month_update(grid, entries, month, settings, today)
        tracer.add_span(trace, step, output_text=f"{len(plan)} writes")

        step = "write"
        if dry_run:
            logger.info("Dry run, skipping write of %d cells", len(plan))
        else:
            client.batch_update(plan, settings.value_input_option)
            tracer.add_span(trace, step, output_text="ok")
    except (BudgetSyncError, HttpError, GoogleAuthError) as e:
        logger.error("Sync failed during %s: %s", step, e)
        tracer.add_span(trace, step, output_text=str(e), metadata={"error": True})
        return SyncResult(
            ok=False, month=month, step=step, error=str(e), dry_run=dry_run, plan=plan
        )
    finally:
        tracer.end_trace(trace)

    logger.info("Done!")
    return SyncResult(ok=True, month=month, step="done", dry_run=dry_run, plan=plan)
