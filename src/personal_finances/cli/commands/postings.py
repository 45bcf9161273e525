"""Posting listing command."""

import click

from personal_finances.cli.commands.statement import build_service
from personal_finances.utils.amount_parser import format_amount


@click.command("postings")
@click.option("--account", help="Only show postings on this account name")
@click.option("--verbose", "-v", is_flag=True, help="Also show payment terms and descriptions")
@click.pass_context
def list_postings(ctx, account: str | None, verbose: bool):
    """List postings derived from the ledgers.

    Every general or liability ledger row gives a credit and a debit
    posting; every exchange ledger row gives four.
    """
    inputs = build_service(ctx.obj["workbook"], indent="").prepare()

    entries = inputs.entries
    if account is not None:
        entries = [entry for entry in entries if entry.account.name == account]

    for message in inputs.ledger.skipped:
        click.echo(f"Skipped: {message}", err=True)

    if not entries:
        click.echo("No postings found.")
        return

    click.echo(f"\nFound {len(entries)} posting(s):")
    click.echo("-" * 80)
    click.echo(f"{'Date':<12} {'Account':<24} {'Type':<7} {'Currency':<9} {'Value':>15}")
    click.echo("-" * 80)
    for entry in entries:
        click.echo(
            f"{entry.date.isoformat():<12} {entry.account.name:<24} "
            f"{entry.type.value:<7} {entry.currency:<9} {format_amount(entry.value):>15}"
        )
        if verbose:
            original = entry.metadata.original_entry
            if entry.term is not None:
                click.echo(f"    Term: {entry.term.isoformat()}")
            if original.description:
                click.echo(f"    Description: {original.description}")


def register_commands(cli):
    """Register postings command with main CLI."""
    cli.add_command(list_postings)
