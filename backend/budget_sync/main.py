from datetime import date
from typing import Optional

from fastapi import Depends, FastAPI, File, HTTPException, UploadFile
from fastapi.middleware.cors import CORSMiddleware

from .column_codec import decode
from .config import Settings
from .errors import (
    AnchorNotFoundError,
    ColumnOutOfRangeError,
    ExportParseError,
    InvalidColumnLabelError,
    MonthNotMappedError,
)
from .export_parser import ExportReportParser
from .models import ParsedExport, PlanRequest, PlanResponse, SyncResult
from .reconciler import build_code_row_map, unmatched_codes
from .sheets_client import SheetsClient
from .sync import month_label, plan_month_update, run_sync

app = FastAPI(title="Budget Sync API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:13030"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_settings() -> Settings:
    return Settings.from_env()


def get_sheets_client(settings: Settings = Depends(get_settings)) -> SheetsClient:
    if not settings.spreadsheet_id:
        raise HTTPException(status_code=500, detail="GOOGLE_SPREADSHEET_ID is not set")
    return SheetsClient(settings.spreadsheet_id, settings.key_file)


@app.get("/")
def read_root():
    return {"message": "Budget Sync API"}


@app.get("/months")
def get_months(settings: Settings = Depends(get_settings)):
    """Ledger month headers for the configured budget year"""
    return {
        "budget_year_start": settings.budget_year_start.isoformat(),
        "months": {month: month_label(month, settings.budget_year_start) for month in range(1, 13)},
    }


async def _read_export(file: UploadFile, month: Optional[int] = None) -> ParsedExport:
    if not file.filename:
        raise HTTPException(status_code=400, detail="No file provided")

    if not file.filename.lower().endswith((".html", ".htm")):
        raise HTTPException(
            status_code=400,
            detail=f"File must be an HTML export with .html extension. Received: {file.filename}",
        )

    contents = await file.read()
    if not contents:
        raise HTTPException(status_code=400, detail="File is empty")

    try:
        return ExportReportParser(contents).parse(month)
    except ExportParseError as e:
        raise HTTPException(status_code=400, detail=str(e))


@app.post("/upload", response_model=ParsedExport)
async def upload_export(file: UploadFile = File(...)):
    """Parse an export and return its month and entries"""
    return await _read_export(file)


@app.post("/plan", response_model=PlanResponse)
def plan_update(request: PlanRequest, settings: Settings = Depends(get_settings)):
    """Plan the writes for a posted grid without touching the spreadsheet"""
    try:
        writes = plan_month_update(
            request.grid, request.entries, request.month, settings, request.today
        )
    except AnchorNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except (MonthNotMappedError, ColumnOutOfRangeError, InvalidColumnLabelError) as e:
        raise HTTPException(status_code=400, detail=str(e))

    code_column_index = decode(settings.code_column)
    code_rows = build_code_row_map(request.grid, code_column_index, code_column_index + 1)
    return PlanResponse(
        writes=writes,
        total_writes=len(writes),
        skipped_codes=unmatched_codes(request.entries, code_rows),
    )


@app.post("/sync", response_model=SyncResult)
async def sync_export(
    file: UploadFile = File(...),
    dry_run: bool = False,
    month: Optional[int] = None,
    today: Optional[date] = None,
    settings: Settings = Depends(get_settings),
    client: SheetsClient = Depends(get_sheets_client),
):
    """Parse an export and write its month into the ledger"""
    export = await _read_export(file, month)
    result = run_sync(
        export.entries,
        export.month,
        settings,
        client,
        today=today,
        dry_run=dry_run,
    )
    if not result.ok:
        # Planning failures come from the export or ledger layout, not the Sheets API
        status_code = 422 if result.step == "plan" else 502
        raise HTTPException(status_code=status_code, detail=result.model_dump(mode="json"))
    return result
