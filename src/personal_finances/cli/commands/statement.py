"""Statement commands."""

from typing import Callable

import click

from personal_finances.cli.error_handling import handle_domain_error
from personal_finances.cli.table_output import echo_table
from personal_finances.domain.entities import ReportSettings
from personal_finances.domain.errors import DomainError
from personal_finances.domain.statements import Row, StatementService
from personal_finances.workbook.base import Workbook
from personal_finances.workbook.csv_tables import write_table

DEFAULT_CLI_INDENT = "    "


def build_service(workbook: Workbook, indent: str) -> StatementService:
    """Create a statement service over the loaded workbook tables."""
    return StatementService(
        account_types=workbook.account_types,
        account_table=workbook.accounts,
        currencies_table=workbook.currencies,
        ledger_tables=workbook.ledgers,
        settings=ReportSettings(indent=indent),
    )


def run_statement(
    ctx: click.Context,
    build: Callable[[StatementService], list[Row]],
    title: str,
    output: str | None,
    indent: str,
) -> None:
    """Build a statement and print it or write it to CSV."""
    service = build_service(ctx.obj["workbook"], indent)
    try:
        rows = build(service)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    if output:
        write_table(output, rows)
        click.echo(f"Wrote {title} ({len(rows) - 2} account rows) to {output}")
        return

    click.echo(f"\n{title}:")
    echo_table(rows)


def statement_options(command):
    """Options shared by every statement command."""
    command = click.option(
        "--indent",
        default=DEFAULT_CLI_INDENT,
        show_default=True,
        help="Text repeated once per level to indent nested accounts",
    )(command)
    command = click.option(
        "--output",
        "-o",
        type=click.Path(dir_okay=False, writable=True),
        help="Write the statement to this CSV file instead of printing it",
    )(command)
    return command


@click.command("income-statement")
@statement_options
@click.pass_context
def income_statement(ctx, output: str | None, indent: str):
    """Show monthly income statement.

    Each account row shows the account's own postings for the month; each
    TOTAL row adds everything below the account.
    """
    run_statement(
        ctx, StatementService.income_statement, "Income Statement", output, indent
    )


@click.command("balance-sheet")
@statement_options
@click.pass_context
def balance_sheet(ctx, output: str | None, indent: str):
    """Show month-end balance sheet.

    Balances accumulate every posting up to the end of each month. Net
    revenue so far is shown under the equity account.
    """
    run_statement(ctx, StatementService.balance_sheet, "Balance Sheet", output, indent)


@click.command("budget-review")
@statement_options
@click.pass_context
def budget_review(ctx, output: str | None, indent: str):
    """Show liability payments by month of payment term."""
    run_statement(ctx, StatementService.budget_review, "Budget Review", output, indent)


def register_commands(cli):
    """Register statement commands with main CLI."""
    cli.add_command(income_statement)
    cli.add_command(balance_sheet)
    cli.add_command(budget_review)
