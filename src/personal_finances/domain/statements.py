"""Financial statement domain service."""

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Callable, Optional, Sequence, Union

from personal_finances.domain.account_tree import (
    AccountTree,
    is_non_empty_row,
    pre_order_map,
)
from personal_finances.domain.aggregation import (
    PeriodAggregator,
    inject_totals,
    net_revenue,
)
from personal_finances.domain.entities import (
    Account,
    AccountInfo,
    AccountKind,
    AccountTotal,
    AccountTotals,
    Entry,
    Ledger,
    Period,
    ReportSettings,
    StatementKind,
)
from personal_finances.domain.errors import NotFoundError, root_account_not_found
from personal_finances.domain.ledger import LedgerReader, Table
from personal_finances.domain.periods import DateBasis, PeriodMode, periods_for_entries
from personal_finances.domain.postings import process_raw_entries

logger = logging.getLogger(__name__)

Cell = Union[str, date, Decimal]
Row = list[Cell]


def read_currencies(currencies_table: Table) -> list[str]:
    """Currency codes from the first cell of each non-blank row, in order."""
    return [str(row[0]).strip() for row in currencies_table if is_non_empty_row(row)]


@dataclass
class ReportInputs:
    """Everything a single report is computed from, built fresh per report."""

    account_tree: AccountTree
    ledger: Ledger
    entries: list[Entry]
    currencies: list[str]


class StatementFormatter:
    """Renders account totals as a row-major table.

    Columns are period-major and currency-minor: each period contributes one
    column per currency, in the order the currencies were declared.
    """

    def __init__(
        self,
        periods: Sequence[Period],
        currencies: Sequence[str],
        settings: ReportSettings = ReportSettings(),
    ):
        self.periods = list(periods)
        self.currencies = list(currencies)
        self.settings = settings

    @property
    def columns(self) -> list[tuple[Period, str]]:
        return [(period, currency) for period in self.periods for currency in self.currencies]

    def header_rows(self) -> list[Row]:
        """Currency row followed by the period start row."""
        currency_row: Row = [""]
        period_row: Row = [""]
        for period, currency in self.columns:
            currency_row.append(currency)
            period_row.append(period.begin)
        return [currency_row, period_row]

    def values(
        self,
        account: Account,
        totals: AccountTotals,
        pick: Callable[[AccountTotal], Decimal],
    ) -> list[Decimal]:
        account_totals = totals.get(account, {})
        return [
            pick(account_totals.get(period, {}).get(currency, AccountTotal()))
            for period, currency in self.columns
        ]

    def render(
        self,
        root_accounts: Sequence[Account],
        totals: AccountTotals,
        entry_value: Optional[Callable[[Account], Callable[[AccountTotal], Decimal]]] = None,
        emits_total: Optional[Callable[[Account], bool]] = None,
    ) -> list[Row]:
        """Render the header rows and one block of rows per root account.

        Args:
            root_accounts: Roots to render, in order
            totals: Totals per account
            entry_value: Chooses, per account, which total its own row shows;
                the account's own total by default
            emits_total: Decides whether an account gets a closing TOTAL row;
                every account with children by default

        Returns:
            Table rows, headers first
        """
        if entry_value is None:
            entry_value = lambda account: _own_total
        if emits_total is None:
            emits_total = lambda account: bool(account.children)

        rows = self.header_rows()
        indent = self.settings.indent

        def enter(account: Account, prefix: str) -> str:
            rows.append(
                [prefix + account.name]
                + self.values(account, totals, entry_value(account))
            )
            return prefix + indent

        def leave(account: Account, prefix: str) -> str:
            outer = prefix[: len(prefix) - len(indent)]
            if emits_total(account):
                rows.append(
                    [outer + self.settings.total_prefix + account.name]
                    + self.values(account, totals, _rolled_up)
                )
            return outer

        for root in root_accounts:
            pre_order_map(root, "", enter, leave)
        return rows


def _own_total(total: AccountTotal) -> Decimal:
    return total.total_account


def _rolled_up(total: AccountTotal) -> Decimal:
    return total.rolled_up


def has_balance_sheet_child(account: Account) -> bool:
    return any(
        child.info.statement is StatementKind.BALANCE_SHEET
        for child in account.children
    )


class StatementService:
    """Service for building statements from workbook tables."""

    def __init__(
        self,
        account_types: Table,
        account_table: Table,
        currencies_table: Table,
        ledger_tables: Sequence[Table],
        settings: ReportSettings = ReportSettings(),
    ):
        """Initialize statement service.

        Args:
            account_types: Root account rows (name, normality, income statement flag)
            account_table: Account path rows
            currencies_table: Currency rows, in column order
            ledger_tables: General, liability and exchange ledger tables
            settings: Naming and presentation settings
        """
        self.account_types = account_types
        self.account_table = account_table
        self.currencies_table = currencies_table
        self.ledger_tables = list(ledger_tables)
        self.settings = settings

    def prepare(self) -> ReportInputs:
        """Build the account tree, ledger and postings for one report."""
        account_tree = AccountTree.from_tables(self.account_types, self.account_table)
        ledger = LedgerReader(account_tree).read(self.ledger_tables)
        return ReportInputs(
            account_tree=account_tree,
            ledger=ledger,
            entries=process_raw_entries(ledger.entries),
            currencies=read_currencies(self.currencies_table),
        )

    def income_statement(self) -> list[Row]:
        """Monthly flows of every income statement account."""
        inputs = self.prepare()
        roots = self._roots_on(inputs.account_tree, StatementKind.INCOME_STATEMENT)
        periods = periods_for_entries(inputs.entries, report="income statement")

        aggregator = PeriodAggregator(
            inputs.entries, periods, inputs.currencies, mode=PeriodMode.WITHIN
        )
        totals = aggregator.aggregate(roots)
        rows = StatementFormatter(periods, inputs.currencies, self.settings).render(
            roots, totals
        )
        self._log_built("income_statement", roots, periods, rows)
        return rows

    def balance_sheet(self) -> list[Row]:
        """Month-end balances of every balance sheet account.

        Net revenue accumulated up to each month end is shown as a derived
        account under the equity root and counted in its totals.
        """
        inputs = self.prepare()
        tree = inputs.account_tree
        roots = self._roots_on(tree, StatementKind.BALANCE_SHEET)
        periods = periods_for_entries(inputs.entries, report="balance sheet")

        revenue = self._require_root(tree, self.settings.revenue_root)
        exchange = self._require_root(tree, self.settings.exchange_root)
        expenses = self._require_root(tree, self.settings.expenses_root)
        equity = self._require_root(tree, self.settings.equity_root)

        aggregator = PeriodAggregator(
            inputs.entries, periods, inputs.currencies, mode=PeriodMode.AS_OF
        )
        totals = aggregator.aggregate(roots)
        income_totals = aggregator.aggregate([revenue, exchange, expenses])

        net_revenue_account = tree.add_synthetic_account(
            equity,
            self.settings.net_revenue_name,
            AccountInfo(
                kind=AccountKind.NORMAL_CREDIT,
                statement=StatementKind.INCOME_STATEMENT,
            ),
        )
        inject_totals(
            totals,
            equity,
            net_revenue_account,
            net_revenue(
                income_totals, revenue, exchange, expenses, periods, inputs.currencies
            ),
        )

        def entry_value(account: Account):
            if account.children and not has_balance_sheet_child(account):
                return _rolled_up
            return _own_total

        def emits_total(account: Account) -> bool:
            return has_balance_sheet_child(account)

        rows = StatementFormatter(periods, inputs.currencies, self.settings).render(
            roots, totals, entry_value=entry_value, emits_total=emits_total
        )
        self._log_built("balance_sheet", roots, periods, rows)
        return rows

    def budget_review(self) -> list[Row]:
        """Promised payments of every account, by month of payment term.

        Only postings from liability ledgers carry a payment term, so only
        they are counted.
        """
        inputs = self.prepare()
        roots = list(inputs.account_tree.root_accounts)
        periods = periods_for_entries(
            inputs.entries, basis=DateBasis.TERM, report="budget review"
        )

        aggregator = PeriodAggregator(
            inputs.entries,
            periods,
            inputs.currencies,
            mode=PeriodMode.WITHIN,
            basis=DateBasis.TERM,
        )
        totals = aggregator.aggregate(roots)
        rows = StatementFormatter(periods, inputs.currencies, self.settings).render(
            roots, totals
        )
        self._log_built("budget_review", roots, periods, rows)
        return rows

    def _roots_on(self, tree: AccountTree, statement: StatementKind) -> list[Account]:
        return [root for root in tree.root_accounts if root.info.statement is statement]

    def _require_root(self, tree: AccountTree, name: str) -> Account:
        root = tree.get_root(name)
        if root is None:
            raise NotFoundError(root_account_not_found(name))
        return root

    def _log_built(
        self, report: str, roots: Sequence[Account], periods: Sequence[Period], rows: Sequence[Row]
    ) -> None:
        logger.info(
            "statement_built",
            extra={
                "report": report,
                "roots": [root.name for root in roots],
                "periods": len(periods),
                "rows": len(rows),
            },
        )
