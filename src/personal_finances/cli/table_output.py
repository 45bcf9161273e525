"""Terminal rendering of statement tables."""

from datetime import date
from decimal import Decimal
from typing import Sequence

import click

from personal_finances.utils.amount_parser import format_amount
from personal_finances.utils.date_parser import format_date


def format_display_cell(cell: object) -> str:
    if isinstance(cell, Decimal):
        return format_amount(cell) if cell != 0 else "-"
    if isinstance(cell, date):
        return format_date(cell)
    return str(cell)


def echo_table(rows: Sequence[Sequence[object]]) -> None:
    """Print rows as aligned columns, labels left and amounts right."""
    if not rows:
        return

    text_rows = [[format_display_cell(cell) for cell in row] for row in rows]
    column_count = max(len(row) for row in text_rows)
    widths = [0] * column_count
    for row in text_rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(cell))

    rule = "-" * (sum(widths) + 2 * (column_count - 1))
    for row_num, row in enumerate(text_rows):
        cells = [
            cell.ljust(widths[i]) if i == 0 else cell.rjust(widths[i])
            for i, cell in enumerate(row)
        ]
        click.echo("  ".join(cells).rstrip())
        # Two header rows precede the account rows
        if row_num == 1:
            click.echo(rule)
