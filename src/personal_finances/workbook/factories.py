"""Workbook factory functions."""

from pathlib import Path
from typing import Optional

from personal_finances.domain.errors import NotFoundError
from personal_finances.workbook.base import Workbook
from personal_finances.workbook.csv_tables import read_table

ACCOUNT_TYPES_FILE = "account_types.csv"
ACCOUNTS_FILE = "accounts.csv"
CURRENCIES_FILE = "currencies.csv"
LEDGER_PATTERN = "ledger*.csv"


def load_csv_workbook(
    data_dir: Optional[str] = None,
    ledger_paths: Optional[list[str]] = None,
) -> Workbook:
    """Load a workbook from a directory of CSV files.

    Args:
        data_dir: Directory holding account_types.csv, accounts.csv,
            currencies.csv and ledger*.csv. Defaults to the current directory.
        ledger_paths: Explicit ledger files; when given, ledger*.csv files in
            the directory are not used

    Returns:
        Workbook with all tables read

    Raises:
        NotFoundError: If the directory has no ledger files
        FileNotFoundError: If a required table file is missing
    """
    directory = Path(data_dir) if data_dir is not None else Path.cwd()

    if ledger_paths:
        ledger_files = [Path(path) for path in ledger_paths]
    else:
        ledger_files = sorted(directory.glob(LEDGER_PATTERN))
    if not ledger_files:
        raise NotFoundError(f"No {LEDGER_PATTERN} files found in {directory}")

    return Workbook(
        account_types=read_table(directory / ACCOUNT_TYPES_FILE),
        accounts=read_table(directory / ACCOUNTS_FILE),
        currencies=read_table(directory / CURRENCIES_FILE),
        ledgers=tuple(read_table(path) for path in ledger_files),
    )
