"""
Runtime settings loaded from the environment (and a local ``.env`` file).
"""

import os
from datetime import date
from pathlib import Path
from typing import Optional

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel

DEFAULT_RANGE = "A:AQ"
DEFAULT_CODE_COLUMN = "AQ"
DEFAULT_DAY_OF_YEAR_LABEL = "Day of Year:"
# Budget year runs April to March
DEFAULT_BUDGET_YEAR_START = date(2024, 4, 1)


class Settings(BaseModel):
    spreadsheet_id: Optional[str] = None
    sheet_range: str = DEFAULT_RANGE
    code_column: str = DEFAULT_CODE_COLUMN
    key_file: Path = Path("./keyFile.json")
    budget_year_start: date = DEFAULT_BUDGET_YEAR_START
    day_of_year_label: str = DEFAULT_DAY_OF_YEAR_LABEL
    month_offset: int = 1
    value_input_option: str = "USER_ENTERED"
    log_dir: Path = Path("logs")

    @classmethod
    def from_env(cls, env_file: Optional[Path] = None) -> "Settings":
        """
        Build settings from environment variables.

        ``env_file`` defaults to the nearest ``.env`` at or above the working
        directory.
        """
        load_dotenv(env_file or find_dotenv(usecwd=True))

        values = {
            "spreadsheet_id": os.getenv("GOOGLE_SPREADSHEET_ID"),
            "sheet_range": os.getenv("BUDGET_SHEET_RANGE"),
            "code_column": os.getenv("BUDGET_CODE_COLUMN"),
            "key_file": os.getenv("GOOGLE_KEY_FILE"),
            "budget_year_start": os.getenv("BUDGET_YEAR_START"),
            "day_of_year_label": os.getenv("DAY_OF_YEAR_LABEL"),
            "value_input_option": os.getenv("BUDGET_VALUE_INPUT_OPTION"),
            "log_dir": os.getenv("BUDGET_SYNC_LOG_DIR"),
        }
        # Unset variables fall back to the model defaults
        return cls(**{key: value for key, value in values.items() if value})
