"""Reading and writing workbook tables as CSV files."""

import csv
from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import Sequence

from personal_finances.workbook.base import Table


def read_table(path: str | Path) -> Table:
    """Read a CSV file into a list of string rows.

    The delimiter is sniffed from the start of the file, falling back to a
    comma when the sample is inconclusive.

    Args:
        path: Path to CSV file

    Returns:
        Rows of cell strings, blank rows included

    Raises:
        FileNotFoundError: If the file doesn't exist
    """
    csv_path = Path(path)
    if not csv_path.exists():
        raise FileNotFoundError(f"CSV file not found: {path}")

    with open(csv_path, "r", encoding="utf-8-sig", newline="") as f:
        sample = f.read(1024)
        f.seek(0)
        try:
            dialect = csv.Sniffer().sniff(sample, delimiters=",;\t")
            delimiter = dialect.delimiter
        except csv.Error:
            delimiter = ","
        return [list(row) for row in csv.reader(f, delimiter=delimiter)]


def format_cell(cell: object) -> str:
    """Render an output cell as CSV text."""
    if isinstance(cell, date):
        return cell.isoformat()
    if isinstance(cell, Decimal):
        return f"{cell:f}"
    return str(cell)


def write_table(path: str | Path, rows: Sequence[Sequence[object]]) -> None:
    """Write output rows to a CSV file."""
    with open(Path(path), "w", encoding="utf-8", newline="") as f:
        writer = csv.writer(f)
        for row in rows:
            writer.writerow([format_cell(cell) for cell in row])
