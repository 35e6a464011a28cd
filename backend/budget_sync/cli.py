"""Command line entry point: ``budget-sync export.html``."""

import argparse
import logging
import sys
from datetime import date
from typing import List, Optional

from .config import Settings
from .errors import ExportParseError
from .export_parser import parse_export_file
from .logging_config import configure_logging
from .sheets_client import SheetsClient
from .sync import run_sync

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="budget-sync",
        description="Write a budget export's category totals into the ledger spreadsheet.",
    )
    parser.add_argument("export", help="Path to the HTML budget export")
    parser.add_argument("--month", type=int, help="Override the report month (1-12)")
    parser.add_argument("--today", type=date.fromisoformat, help="Date used for the day counter")
    parser.add_argument("--dry-run", action="store_true", help="Plan the writes without sending them")
    parser.add_argument("--env-file", help="Read settings from this .env file")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = Settings.from_env(args.env_file)
    configure_logging(settings.log_dir)

    try:
        export = parse_export_file(args.export, args.month)
    except ExportParseError as e:
        logger.error("%s", e)
        return 1

    if not settings.spreadsheet_id:
        logger.error("GOOGLE_SPREADSHEET_ID is not set")
        return 1

    client = SheetsClient(settings.spreadsheet_id, settings.key_file)
    result = run_sync(
        export.entries,
        export.month,
        settings,
        client,
        today=args.today,
        dry_run=args.dry_run,
    )
    return 0 if result.ok else 1


if __name__ == "__main__":
    sys.exit(main())
