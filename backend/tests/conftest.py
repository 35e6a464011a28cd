"""Pytest configuration and fixtures for testing budget_sync."""
from datetime import date

import pytest
from fastapi.testclient import TestClient

import budget_sync.langfuse_tracer as tracer_module
from budget_sync.config import Settings
from budget_sync.main import app, get_settings, get_sheets_client
from budget_sync.models import BudgetEntry
from ledger_fixtures import FakeLedgerStore, ledger_row


@pytest.fixture(autouse=True)
def no_tracing(monkeypatch):
    """Keep Langfuse out of every test."""
    monkeypatch.delenv("LANGFUSE_PUBLIC_KEY", raising=False)
    monkeypatch.setattr(tracer_module, "_tracer", None)


@pytest.fixture
def sample_grid():
    """Ledger layout: month headers, day counter label, coded category rows."""
    return [
        ["Category", "April 2024", "", "May 2024", "", "January 2025", ""],
        ["Day of Year:", ""],
        ledger_row("Groceries", "101"),
        ledger_row("Dining", "102"),
        ["Subtotal", "", "", "=SUM(E3:E4)"],
        ledger_row("Fuel", "103"),
    ]


@pytest.fixture
def settings(tmp_path):
    return Settings(spreadsheet_id="sheet-123", log_dir=tmp_path / "logs")


@pytest.fixture
def sample_entries():
    return [
        BudgetEntry(category="Groceries", code="101", spent=20),
        BudgetEntry(category="Mystery", code="999", spent=30),
        BudgetEntry(category="Fuel", code="103", spent=5.5),
    ]


@pytest.fixture
def today():
    return date(2024, 5, 15)


@pytest.fixture
def fake_store(sample_grid):
    return FakeLedgerStore(sample_grid)


@pytest.fixture
def sample_export_html():
    """Export for May with two coded categories, an uncoded one and the grand total."""
    return """<html><body>
<h3>Budget Report From 05/01/2024 To 05/31/2024</h3>
<table>
<tr><td>05/02</td><td>Market</td><td></td><td></td><td></td><td>101 - Groceries</td><td>-20.00</td></tr>
<tr><td class="total-label-cell">Total For Groceries</td><td class="total-number-cell">-$1,020.50</td></tr>
<tr><td>05/09</td><td>Station</td><td></td><td></td><td></td><td> 103 Fuel </td><td>-5.50</td></tr>
<tr><td class="total-label-cell">Total For Fuel</td><td class="total-number-cell">($5.50)</td></tr>
<tr><td>05/10</td><td>Gift</td><td></td><td></td><td></td><td>Misc</td><td>-7.00</td></tr>
<tr><td class="total-label-cell">Total For Misc</td><td class="total-number-cell">$7.00</td></tr>
<tr><td class="total-label-cell">Grand Total</td><td class="total-number-cell">$1,033.00</td></tr>
</table>
</body></html>"""


@pytest.fixture
def sample_export_file(sample_export_html, tmp_path):
    """Write the sample export to a temporary file."""
    export_file = tmp_path / "export.html"
    export_file.write_text(sample_export_html)
    return export_file


@pytest.fixture
def client(settings, fake_store):
    """Create a test client with settings and the sheet store overridden."""
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_sheets_client] = lambda: fake_store
    yield TestClient(app)
    app.dependency_overrides.clear()
