"""Tests for building the code-row map and reconciling entries."""
from budget_sync.models import BudgetEntry, WriteInstruction
from budget_sync.reconciler import build_code_row_map, reconcile, unmatched_codes
from ledger_fixtures import CODE_COLUMN_WIDTH, ledger_row


class TestBuildCodeRowMap:
    def test_width_gated_rows(self, sample_grid):
        code_rows = build_code_row_map(sample_grid, 42, CODE_COLUMN_WIDTH)
        assert code_rows == {"101": 3, "102": 4, "103": 6}

    def test_short_rows_are_skipped(self):
        grid = [["Groceries", "", "101"], ledger_row("Fuel", "103")]
        code_rows = build_code_row_map(grid, 42, CODE_COLUMN_WIDTH)
        assert code_rows == {"103": 2}

    def test_empty_codes_are_skipped(self):
        grid = [ledger_row("Heading", ""), ledger_row("Fuel", "103")]
        assert build_code_row_map(grid, 42, CODE_COLUMN_WIDTH) == {"103": 2}

    def test_last_duplicate_wins(self):
        grid = [["row"] for _ in range(12)]
        grid[2] = ["a", "7"]
        grid[9] = ["b", "7"]
        code_rows = build_code_row_map(grid, 1)
        assert code_rows["7"] == 10

    def test_without_width_gate_reads_code_column(self):
        grid = [["a", "1", "x"], ["b"], ["c", "2"]]
        assert build_code_row_map(grid, 1) == {"1": 1, "2": 3}

    def test_fresh_map_per_call(self, sample_grid):
        first = build_code_row_map(sample_grid, 42, CODE_COLUMN_WIDTH)
        first["999"] = 1
        second = build_code_row_map(sample_grid, 42, CODE_COLUMN_WIDTH)
        assert "999" not in second

    def test_zero_width_gate_skips_empty_rows(self):
        assert build_code_row_map([[], ["a", "1"]], 0, 0) == {}

    def test_non_string_codes_become_strings(self):
        assert build_code_row_map([["a", 101]], 1) == {"101": 1}


class TestReconcile:
    def test_skips_unknown_codes(self):
        entries = [
            BudgetEntry(category="Food", code="101", spent=20),
            BudgetEntry(category="Other", code="999", spent=30),
        ]
        writes = reconcile(entries, {"101": 5}, "E")
        assert writes == [WriteInstruction(address="E5", value=20)]

    def test_blank_code_is_skipped(self):
        entries = [BudgetEntry(category="Misc", code="", spent=7)]
        assert reconcile(entries, {"101": 5}, "E") == []

    def test_keeps_entry_order_and_duplicates(self):
        entries = [
            BudgetEntry(category="B", code="2", spent=2),
            BudgetEntry(category="A", code="1", spent=1),
            BudgetEntry(category="B again", code="2", spent=3),
        ]
        writes = reconcile(entries, {"1": 4, "2": 8}, "AB")
        assert [w.address for w in writes] == ["AB8", "AB4", "AB8"]
        assert [w.value for w in writes] == [2, 1, 3]

    def test_logs_planned_writes(self, caplog):
        caplog.set_level("INFO", logger="budget_sync.reconciler")
        reconcile([BudgetEntry(category="Food", code="101", spent=20)], {"101": 5}, "E")
        assert "Will insert 20.0 into E5 for Food (101)" in caplog.text


def test_unmatched_codes(sample_entries):
    assert unmatched_codes(sample_entries, {"101": 3, "103": 6}) == ["999"]
