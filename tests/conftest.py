"""Shared pytest fixtures for personal_finances tests."""

import csv
from pathlib import Path
import pytest

from personal_finances.domain.account_tree import AccountTree
from personal_finances.domain.ledger import LedgerReader
from personal_finances.domain.statements import StatementService
from personal_finances.logging_config import reset_logging


ACCOUNT_TYPES = [
    ["assets", "Debit", "No"],
    ["liabilities", "Credit", "No"],
    ["equity", "Credit", "No"],
    ["revenue", "Credit", "Yes"],
    ["expenses", "Debit", "Yes"],
    ["exchange", "Credit", "Yes"],
    ["", "", ""],
]

ACCOUNTS = [
    ["assets", "checking"],
    ["assets", "savings"],
    ["liabilities", "credit card"],
    ["equity", "capital"],
    ["revenue", "sales"],
    ["expenses", "food", "groceries"],
    ["expenses", "rent"],
    ["exchange", "fx"],
    ["", "ignored"],
]

CURRENCIES = [["USD"], ["EUR"], [""]]

GENERAL_LEDGER = [
    ["", "General Ledger", "", "USD"],
    ["Date", "Description", "Debit", "Credit", "Value"],
    ["2024-01-15", "sale", "checking", "sales", "100"],
    ["2024-01-20", "groceries", "groceries", "checking", "30"],
    ["2024-02-03", "rent", "rent", "checking", "50"],
    ["2024-02-10", "typo", "nowhere", "checking", "10"],
    ["2024-01-02", "opening capital", "checking", "capital", "1,000.00"],
]

LIABILITY_LEDGER = [
    ["", "Liability Ledger", "", "USD"],
    ["Date", "Description", "Debit", "Credit", "Value", "Term"],
    ["2024-01-25", "card purchase", "groceries", "credit card", "20", "2024-03-10"],
]

EXCHANGE_LEDGER = [
    ["", "Exchange Ledger", "", ""],
    [
        "Date",
        "Description",
        "Debit",
        "Credit",
        "Exchange",
        "Debit Currency",
        "Debit Value",
        "Credit Currency",
        "Credit Value",
    ],
    ["2024-02-15", "convert", "savings", "checking", "fx", "EUR", "90", "USD", "100"],
]


@pytest.fixture(autouse=True)
def clean_logging():
    """Undo handlers installed by CLI runs."""
    yield
    reset_logging()


@pytest.fixture
def account_types():
    return [list(row) for row in ACCOUNT_TYPES]


@pytest.fixture
def account_table():
    return [list(row) for row in ACCOUNTS]


@pytest.fixture
def currencies_table():
    return [list(row) for row in CURRENCIES]


@pytest.fixture
def ledger_tables():
    return [
        [list(row) for row in GENERAL_LEDGER],
        [list(row) for row in LIABILITY_LEDGER],
        [list(row) for row in EXCHANGE_LEDGER],
    ]


@pytest.fixture
def account_tree(account_types, account_table):
    """Create the sample chart of accounts."""
    return AccountTree.from_tables(account_types, account_table)


@pytest.fixture
def ledger(account_tree, ledger_tables):
    """Read the sample ledgers against the sample tree."""
    return LedgerReader(account_tree).read(ledger_tables)


@pytest.fixture
def statement_service(account_types, account_table, currencies_table, ledger_tables):
    """Create a StatementService over the sample tables."""
    return StatementService(
        account_types=account_types,
        account_table=account_table,
        currencies_table=currencies_table,
        ledger_tables=ledger_tables,
    )


def write_csv(path: Path, rows) -> Path:
    with open(path, "w", encoding="utf-8", newline="") as f:
        csv.writer(f).writerows(rows)
    return path


@pytest.fixture
def workbook_dir(tmp_path):
    """Write the sample tables as a CSV workbook directory."""
    write_csv(tmp_path / "account_types.csv", ACCOUNT_TYPES)
    write_csv(tmp_path / "accounts.csv", ACCOUNTS)
    write_csv(tmp_path / "currencies.csv", CURRENCIES)
    write_csv(tmp_path / "ledger_1_general.csv", GENERAL_LEDGER)
    write_csv(tmp_path / "ledger_2_liability.csv", LIABILITY_LEDGER)
    write_csv(tmp_path / "ledger_3_exchange.csv", EXCHANGE_LEDGER)
    return tmp_path


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
