"""Tests for the command line interface."""

import csv
from decimal import Decimal

from personal_finances.cli.main import cli


def test_income_statement_command(cli_runner, workbook_dir):
    """Test printing the income statement from a workbook directory."""
    result = cli_runner.invoke(cli, ["--data-dir", str(workbook_dir), "income-statement"])

    assert result.exit_code == 0
    assert "Income Statement:" in result.output
    assert "2024-01-01" in result.output
    assert "2024-02-01" in result.output
    assert "    sales" in result.output
    assert "TOTAL: revenue" in result.output
    assert "100.00" in result.output


def test_balance_sheet_command_writes_csv(cli_runner, workbook_dir, tmp_path):
    """Test exporting the balance sheet as CSV."""
    output = tmp_path / "out" / "balance.csv"
    output.parent.mkdir()

    result = cli_runner.invoke(
        cli,
        [
            "--data-dir",
            str(workbook_dir),
            "balance-sheet",
            "--output",
            str(output),
            "--indent",
            "\t\t",
        ],
    )

    assert result.exit_code == 0
    assert "Wrote Balance Sheet" in result.output
    with open(output, newline="", encoding="utf-8") as f:
        rows = list(csv.reader(f))
    assert rows[0] == ["", "USD", "EUR", "USD", "EUR"]
    assert rows[1] == ["", "2024-01-01", "2024-01-01", "2024-02-01", "2024-02-01"]
    totals = {row[0]: [Decimal(cell) for cell in row[1:]] for row in rows[2:]}
    assert totals["TOTAL: equity"] == [Decimal("1050"), 0, Decimal("900"), Decimal("90")]
    assert totals["\t\tNet Revenue"] == [Decimal("50"), 0, Decimal("-100"), Decimal("90")]


def test_budget_review_command(cli_runner, workbook_dir):
    result = cli_runner.invoke(cli, ["--data-dir", str(workbook_dir), "budget-review"])

    assert result.exit_code == 0
    assert "Budget Review:" in result.output
    assert "2024-03-01" in result.output
    assert "credit card" in result.output


def test_data_dir_from_environment(cli_runner, workbook_dir, monkeypatch):
    """Test the workbook directory can come from the environment."""
    monkeypatch.setenv("PERSONAL_FINANCES_DATA_DIR", str(workbook_dir))

    result = cli_runner.invoke(cli, ["accounts"])

    assert result.exit_code == 0
    assert "expenses (debit, income statement)" in result.output
    assert "    groceries" in result.output


def test_accounts_paths(cli_runner, workbook_dir):
    result = cli_runner.invoke(cli, ["--data-dir", str(workbook_dir), "accounts", "--paths"])

    assert result.exit_code == 0
    assert "expenses > food > groceries" in result.output.splitlines()


def test_postings_command(cli_runner, workbook_dir):
    """Test listing normalized postings for one account."""
    result = cli_runner.invoke(
        cli, ["--data-dir", str(workbook_dir), "postings", "--account", "fx", "-v"]
    )

    assert result.exit_code == 0
    assert "Found 2 posting(s):" in result.output
    assert "Description: convert" in result.output


def test_explicit_ledger_files(cli_runner, workbook_dir):
    """Test --ledger replaces the ledger files found in the directory."""
    result = cli_runner.invoke(
        cli,
        [
            "--data-dir",
            str(workbook_dir),
            "--ledger",
            str(workbook_dir / "ledger_1_general.csv"),
            "postings",
        ],
    )

    assert result.exit_code == 0
    assert "Found 8 posting(s):" in result.output


def test_missing_workbook_files(cli_runner, tmp_path):
    """Test a directory without ledgers fails cleanly."""
    result = cli_runner.invoke(cli, ["--data-dir", str(tmp_path), "income-statement"])

    assert result.exit_code == 1
    assert "Error:" in result.output
    assert "ledger" in result.output


def test_missing_root_account(cli_runner, workbook_dir):
    """Test a balance sheet without an exchange root reports the error."""
    rows = [
        ["assets", "Debit", "No"],
        ["liabilities", "Credit", "No"],
        ["equity", "Credit", "No"],
        ["revenue", "Credit", "Yes"],
        ["expenses", "Debit", "Yes"],
    ]
    with open(workbook_dir / "account_types.csv", "w", newline="", encoding="utf-8") as f:
        csv.writer(f).writerows(rows)

    result = cli_runner.invoke(cli, ["--data-dir", str(workbook_dir), "balance-sheet"])

    assert result.exit_code == 1
    assert "Root account 'exchange' not found" in result.output


def test_help_does_not_need_workbook(cli_runner, tmp_path):
    result = cli_runner.invoke(cli, ["--data-dir", str(tmp_path), "--help"])

    assert result.exit_code == 0
    assert "income-statement" in result.output
