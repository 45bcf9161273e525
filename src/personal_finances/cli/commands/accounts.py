"""Chart of accounts commands."""

import click

from personal_finances.domain.account_tree import AccountTree
from personal_finances.domain.entities import Account, AccountKind, StatementKind

KIND_LABELS = {
    AccountKind.NORMAL_CREDIT: "credit",
    AccountKind.NORMAL_DEBIT: "debit",
}

STATEMENT_LABELS = {
    StatementKind.BALANCE_SHEET: "balance sheet",
    StatementKind.INCOME_STATEMENT: "income statement",
}


def print_account_tree(accounts: list[Account], indent: int = 0) -> None:
    """Recursively print account tree."""
    for account in accounts:
        prefix = "  " * indent
        if indent == 0:
            info = account.info
            click.echo(
                f"{prefix}{account.name} "
                f"({KIND_LABELS[info.kind]}, {STATEMENT_LABELS[info.statement]})"
            )
        else:
            click.echo(f"{prefix}{account.name}")
        if account.children:
            print_account_tree(account.children, indent + 1)


@click.command("accounts")
@click.option("--paths", is_flag=True, help="Print one full account path per line")
@click.pass_context
def list_accounts(ctx, paths: bool):
    """List the chart of accounts in tree format."""
    workbook = ctx.obj["workbook"]
    tree = AccountTree.from_tables(workbook.account_types, workbook.accounts)

    if not tree.root_accounts:
        click.echo("No accounts found. Add root accounts to account_types.csv.")
        return

    if paths:
        for path, _ in tree.paths():
            click.echo(" > ".join(path))
        return

    click.echo("\nAccounts:")
    print_account_tree(tree.root_accounts)


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(list_accounts)
