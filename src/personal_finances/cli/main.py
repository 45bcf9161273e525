"""Main CLI entry point."""

import click

from personal_finances.cli.error_handling import handle_domain_error
from personal_finances.domain.errors import DomainError
from personal_finances.logging_config import configure_logging
from personal_finances.workbook.factories import load_csv_workbook

# Import and register all commands at module level
from personal_finances.cli.commands import accounts, postings, statement


@click.group()
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False),
    help="Workbook directory (overrides PERSONAL_FINANCES_DATA_DIR environment variable)",
    envvar="PERSONAL_FINANCES_DATA_DIR",
)
@click.option(
    "--ledger",
    "ledger_paths",
    multiple=True,
    type=click.Path(exists=True, dir_okay=False),
    help="Ledger CSV file; repeat for several (default: ledger*.csv in the workbook directory)",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    envvar="PERSONAL_FINANCES_LOG_LEVEL",
    help="Log level for diagnostics written to stderr",
)
@click.pass_context
def cli(ctx, data_dir: str | None, ledger_paths: tuple[str, ...], log_level: str):
    """Personal finances - statements from a chart of accounts and ledgers.

    Reads account_types.csv, accounts.csv, currencies.csv and ledger*.csv
    from the workbook directory and builds monthly income statements,
    balance sheets and budget reviews.
    """
    ctx.ensure_object(dict)
    configure_logging(log_level)

    # Load the workbook only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        try:
            ctx.obj["workbook"] = load_csv_workbook(
                data_dir=data_dir, ledger_paths=list(ledger_paths) or None
            )
        except (DomainError, FileNotFoundError) as e:
            handle_domain_error(ctx, e)


# Register all commands
statement.register_commands(cli)
accounts.register_commands(cli)
postings.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
