"""Tests for the budget-sync command."""
import pytest

import budget_sync.cli as cli_module
from ledger_fixtures import FakeLedgerStore


@pytest.fixture
def cli_env(monkeypatch, tmp_path, sample_grid):
    monkeypatch.setenv("GOOGLE_SPREADSHEET_ID", "sheet-123")
    monkeypatch.setenv("BUDGET_SYNC_LOG_DIR", str(tmp_path / "logs"))
    store = FakeLedgerStore(sample_grid)
    monkeypatch.setattr(cli_module, "SheetsClient", lambda spreadsheet_id, key_file: store)
    return store


def test_sync_from_export(cli_env, sample_export_file, tmp_path):
    exit_code = cli_module.main([str(sample_export_file), "--today", "2024-05-15", "--env-file", str(tmp_path / "none.env")])

    assert exit_code == 0
    written, _ = cli_env.updates[0]
    assert [w.address for w in written] == ["E3", "E6", "B2"]
    assert written[-1].value == 45


def test_dry_run(cli_env, sample_export_file, tmp_path):
    exit_code = cli_module.main([str(sample_export_file), "--dry-run", "--env-file", str(tmp_path / "none.env")])
    assert exit_code == 0
    assert cli_env.updates == []


def test_month_without_anchor_fails(cli_env, sample_export_file, tmp_path):
    exit_code = cli_module.main([str(sample_export_file), "--month", "6", "--env-file", str(tmp_path / "none.env")])
    assert exit_code == 1


def test_missing_export_fails(cli_env, tmp_path):
    assert cli_module.main([str(tmp_path / "missing.html"), "--env-file", str(tmp_path / "none.env")]) == 1


def test_missing_spreadsheet_id_fails(cli_env, sample_export_file, monkeypatch, tmp_path):
    monkeypatch.delenv("GOOGLE_SPREADSHEET_ID")
    assert cli_module.main([str(sample_export_file), "--env-file", str(tmp_path / "none.env")]) == 1


def test_month_zero_is_rejected(cli_env, sample_export_file, tmp_path):
    exit_code = cli_module.main([str(sample_export_file), "--month", "0", "--env-file", str(tmp_path / "none.env")])
    assert exit_code == 1
    assert cli_env.updates == []


def test_month_overrides_export_without_heading(cli_env, tmp_path):
    export = tmp_path / "export.html"
    export.write_text(
        '<table><tr><td></td><td></td><td></td><td></td><td></td><td>103</td></tr>'
        '<tr><td class="total-label-cell">Total For Fuel</td>'
        '<td class="total-number-cell">$5.50</td></tr></table>'
    )

    exit_code = cli_module.main(
        [str(export), "--month", "5", "--today", "2024-05-15", "--env-file", str(tmp_path / "none.env")]
    )

    assert exit_code == 0
    written, _ = cli_env.updates[0]
    assert [w.address for w in written] == ["E6", "B2"]
