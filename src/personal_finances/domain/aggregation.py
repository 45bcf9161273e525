"""Period aggregation of postings into per-account totals."""

import logging
from collections import defaultdict
from decimal import Decimal
from typing import Iterable, Sequence

from personal_finances.domain.account_tree import find_path, pre_order_reduce
from personal_finances.domain.entities import (
    Account,
    AccountKind,
    AccountTotal,
    AccountTotals,
    Entry,
    EntryType,
    Period,
    PeriodTotals,
)
from personal_finances.domain.periods import (
    DateBasis,
    PeriodMode,
    entry_date,
    period_matcher,
)

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


def signed_value(entry: Entry, kind: AccountKind) -> Decimal:
    """Return the posting value signed for an account of the given kind.

    Credits increase normal-credit accounts and debits increase normal-debit
    accounts; the opposite side decreases them.
    """
    increases = (
        EntryType.CREDIT if kind is AccountKind.NORMAL_CREDIT else EntryType.DEBIT
    )
    return entry.value if entry.type is increases else -entry.value


def _collect_name(account: Account, names: set[str]) -> set[str]:
    names.add(account.name)
    return names


def _collect_account(account: Account, accounts: list[Account]) -> list[Account]:
    accounts.append(account)
    return accounts


def descendant_names(account: Account) -> set[str]:
    """Names of all strict descendants of ``account``."""
    names: set[str] = set()
    for child in account.children:
        pre_order_reduce(child, names, _collect_name)
    return names


def zero_totals(periods: Sequence[Period], currencies: Sequence[str]) -> PeriodTotals:
    return {period: {currency: AccountTotal() for currency in currencies} for period in periods}


class PeriodAggregator:
    """Service computing account totals per period and currency.

    Postings are indexed by account identity and by account name once, so
    each account's selection is a dict lookup rather than a scan of the
    whole posting list.
    """

    def __init__(
        self,
        entries: Iterable[Entry],
        periods: Sequence[Period],
        currencies: Sequence[str],
        mode: PeriodMode = PeriodMode.WITHIN,
        basis: DateBasis = DateBasis.POSTING,
    ):
        """Initialize period aggregator.

        Args:
            entries: Postings to aggregate
            periods: Reporting periods, in column order
            currencies: Reported currencies, in column order
            mode: WITHIN for flows, AS_OF for balances
            basis: Which posting date places a posting in a period
        """
        self.periods = list(periods)
        self.currencies = list(currencies)
        self.mode = mode
        self.basis = basis
        self._matches = period_matcher(mode)

        self._by_account: dict[Account, list[Entry]] = defaultdict(list)
        self._by_name: dict[str, list[Entry]] = defaultdict(list)
        for entry in entries:
            if entry_date(entry, basis) is None:
                continue
            self._by_account[entry.account].append(entry)
            self._by_name[entry.account.name].append(entry)

    def direct_entries(self, account: Account) -> list[Entry]:
        """Postings made on ``account`` itself."""
        return self._by_account.get(account, [])

    def subaccount_entries(self, account: Account) -> list[Entry]:
        """Postings made on any account below ``account``.

        An account counts as below ``account`` when a descendant has its
        name, so same-named accounts elsewhere in the tree are included.
        """
        entries: list[Entry] = []
        for name in descendant_names(account):
            entries.extend(self._by_name.get(name, []))
        return entries

    def total(
        self,
        entries: Iterable[Entry],
        kind: AccountKind,
        period: Period,
        currency: str,
    ) -> Decimal:
        """Sum the signed values of the postings in a period and currency."""
        total = ZERO
        for entry in entries:
            if entry.currency != currency:
                continue
            if not self._matches(period, entry_date(entry, self.basis)):
                continue
            total += signed_value(entry, kind)
        return total

    def account_totals(self, account: Account) -> PeriodTotals:
        """Compute the totals of one account for every period and currency."""
        direct = self.direct_entries(account)
        below = self.subaccount_entries(account)
        kind = account.info.kind

        return {
            period: {
                currency: AccountTotal(
                    total_account=self.total(direct, kind, period, currency),
                    total_subaccount=self.total(below, kind, period, currency),
                )
                for currency in self.currencies
            }
            for period in self.periods
        }

    def aggregate(self, root_accounts: Iterable[Account]) -> AccountTotals:
        """Compute totals for every account in the given subtrees.

        Args:
            root_accounts: Roots of the subtrees to aggregate

        Returns:
            Mapping from each account to its per-period, per-currency totals
        """
        totals: AccountTotals = {}
        for root in root_accounts:
            accounts = pre_order_reduce(root, [], _collect_account)
            for account in accounts:
                totals[account] = self.account_totals(account)

        logger.debug(
            "accounts_aggregated",
            extra={
                "accounts": len(totals),
                "periods": len(self.periods),
                "currencies": len(self.currencies),
                "mode": self.mode.value,
            },
        )
        return totals


def net_revenue(
    totals: AccountTotals,
    revenue: Account,
    exchange: Account,
    expenses: Account,
    periods: Sequence[Period],
    currencies: Sequence[str],
) -> PeriodTotals:
    """Compute net revenue as revenue plus exchange minus expenses.

    Each side is the rolled-up total of the root account, own postings and
    subaccount postings together. The result is stored as the own total of
    a derived account, with no subaccount part.
    """
    result: PeriodTotals = {}
    for period in periods:
        result[period] = {}
        for currency in currencies:
            amount = (
                totals[revenue][period][currency].rolled_up
                + totals[exchange][period][currency].rolled_up
                - totals[expenses][period][currency].rolled_up
            )
            result[period][currency] = AccountTotal(total_account=amount)
    return result


def inject_totals(
    totals: AccountTotals,
    root: Account,
    account: Account,
    account_totals: PeriodTotals,
) -> None:
    """Store derived totals for ``account`` and roll them into its ancestors.

    Each ancestor between ``root`` and ``account`` gets the derived amount
    added to its subaccount total, negated when the ancestor's normal side
    differs from the derived account's.
    """
    totals[account] = account_totals
    path = find_path(root, account)
    for ancestor in path[:-1]:
        sign = 1 if ancestor.info.kind is account.info.kind else -1
        ancestor_totals = totals.setdefault(ancestor, {})
        for period, by_currency in account_totals.items():
            period_totals = ancestor_totals.setdefault(period, {})
            for currency, derived in by_currency.items():
                current = period_totals.get(currency, AccountTotal())
                period_totals[currency] = AccountTotal(
                    total_account=current.total_account,
                    total_subaccount=current.total_subaccount
                    + sign * derived.rolled_up,
                )
