# Data models for the budget sync application
from datetime import date
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field

CellValue = Union[int, float, str]


class BudgetEntry(BaseModel):
    category: str
    code: str = ""
    spent: float = Field(ge=0)


class WriteInstruction(BaseModel):
    address: str
    value: CellValue

    def to_value_range(self) -> Dict[str, Any]:
        """Shape used by the Sheets ``values.batchUpdate`` data list."""
        return {"range": self.address, "values": [[self.value]]}


class ParsedExport(BaseModel):
    month: int
    entries: List[BudgetEntry]


class PlanRequest(BaseModel):
    grid: List[List[Any]]
    entries: List[BudgetEntry]
    month: int
    today: Optional[date] = None


class PlanResponse(BaseModel):
    writes: List[WriteInstruction]
    total_writes: int
    skipped_codes: List[str]


class SyncResult(BaseModel):
    """Outcome of one sync run; ``step`` names where a failure happened."""

    ok: bool
    month: int
    step: str
    error: Optional[str] = None
    dry_run: bool = False
    plan: List[WriteInstruction] = Field(default_factory=list)
