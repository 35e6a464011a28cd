"""
Google Sheets access for reading the ledger grid and writing the plan.
"""

import logging
from pathlib import Path
from typing import Any, Iterable, List, Optional

from google.auth.exceptions import GoogleAuthError
from google.oauth2 import service_account
from googleapiclient.discovery import build

from .errors import GridFetchError, SheetsAuthError
from .grid_locator import normalize_grid
from .models import WriteInstruction
from .update_plan import to_batch_data

logger = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]


class SheetsClient:
    """Client for the two Sheets calls a sync run makes."""

    def __init__(self, spreadsheet_id: str, key_file: Path, service: Optional[Any] = None):
        self.spreadsheet_id = spreadsheet_id
        self.key_file = Path(key_file)
        self._service = service

    def _get_service(self):
        """Get authenticated Sheets service (lazy initialization)."""
        if self._service is None:
            try:
                creds = service_account.Credentials.from_service_account_file(
                    str(self.key_file), scopes=SCOPES
                )
            except (OSError, ValueError, GoogleAuthError) as e:
                raise SheetsAuthError(f"Could not load key file {self.key_file}: {e}") from e
            self._service = build("sheets", "v4", credentials=creds, cache_discovery=False)
        return self._service

    def fetch_grid(self, sheet_range: str) -> List[List[Any]]:
        """
        Read ``sheet_range`` and return its rows of values.

        Raises:
            GridFetchError: If the range holds no values
        """
        result = (
            self._get_service()
            .spreadsheets()
            .values()
            .get(spreadsheetId=self.spreadsheet_id, range=sheet_range)
            .execute()
        )

        values = result.get("values")
        if not values:
            raise GridFetchError(f"No values found for range: {sheet_range}")

        logger.info("Fetched %d rows from %s", len(values), sheet_range)
        return normalize_grid(values)

    def batch_update(
        self,
        plan: Iterable[WriteInstruction],
        value_input_option: str = "USER_ENTERED",
    ) -> dict:
        """Write every instruction in one ``values.batchUpdate`` call."""
        data = to_batch_data(plan)
        response = (
            self._get_service()
            .spreadsheets()
            .values()
            .batchUpdate(
                spreadsheetId=self.spreadsheet_id,
                body={"valueInputOption": value_input_option, "data": data},
            )
            .execute()
        )
        logger.info("Updated %s cells", response.get("totalUpdatedCells", len(data)))
        return response
