"""Domain model entities for personal_finances.

These are plain data classes describing the chart of accounts, the ledger
transactions read from the workbook and the postings derived from them.
Nothing here knows about CSV files or the CLI.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional, Union


class AccountKind(Enum):
    """Normal balance side of an account."""

    NORMAL_CREDIT = "normalCredit"
    NORMAL_DEBIT = "normalDebit"


class StatementKind(Enum):
    """Statement an account is reported on."""

    BALANCE_SHEET = "balanceSheet"
    INCOME_STATEMENT = "incomeStatement"


class EntryType(Enum):
    """Side of a posting."""

    DEBIT = "debit"
    CREDIT = "credit"


class LedgerType(Enum):
    """Ledger table kinds, keyed by the title found in the table header."""

    GENERAL = "General Ledger"
    LIABILITY = "Liability Ledger"
    EXCHANGE = "Exchange Ledger"


@dataclass(frozen=True)
class AccountInfo:
    """Sign convention and statement classification of an account."""

    kind: AccountKind
    statement: StatementKind


@dataclass(eq=False)
class Account:
    """Node of the chart of accounts.

    Accounts compare and hash by identity: two accounts with the same name
    in different branches are different accounts.
    """

    name: str
    info: AccountInfo
    children: list["Account"] = field(default_factory=list)

    def find_child(self, name: str) -> Optional["Account"]:
        """Return the direct child called ``name``, if any."""
        for child in self.children:
            if child.name == name:
                return child
        return None


@dataclass(frozen=True)
class DefaultEntryData:
    """Single-currency transfer between two accounts."""

    debit_account: Account
    credit_account: Account
    currency: str
    value: Decimal


@dataclass(frozen=True)
class LiabilityEntryData:
    """Transfer that promises a payment at ``payment_term``."""

    debit_account: Account
    credit_account: Account
    currency: str
    value: Decimal
    payment_term: date


@dataclass(frozen=True)
class ExchangeEntryData:
    """Currency conversion routed through a clearing account."""

    debit_account: Account
    credit_account: Account
    exchange_account: Account
    debit_value: Decimal
    debit_currency: str
    credit_value: Decimal
    credit_currency: str


EntryData = Union[DefaultEntryData, LiabilityEntryData, ExchangeEntryData]


@dataclass(frozen=True)
class RawEntry:
    """Ledger transaction as read from a ledger table."""

    date: date
    description: str
    data: EntryData


@dataclass(frozen=True)
class EntryMetadata:
    """Back-reference from a posting to the transaction it came from."""

    original_entry: RawEntry


@dataclass(frozen=True)
class Entry:
    """Single posting against one account in one currency.

    ``value`` is never negative; the sign is decided when aggregating, from
    ``type`` and the normal side of the aggregated account.
    """

    account: Account
    date: date
    type: EntryType
    currency: str
    value: Decimal
    metadata: EntryMetadata
    term: Optional[date] = None


@dataclass(frozen=True)
class Ledger:
    """Transactions read from all ledger tables, sorted by date."""

    entries: tuple[RawEntry, ...]
    skipped: tuple[str, ...] = ()


@dataclass(frozen=True)
class Period:
    """Half-open accounting period ``[begin, end)``."""

    begin: date
    end: date

    def contains(self, day: date) -> bool:
        return self.begin <= day < self.end

    def precedes_end(self, day: date) -> bool:
        """True if ``day`` is before the end of the period, however early."""
        return day < self.end


@dataclass(frozen=True)
class AccountTotal:
    """Totals of one account for one period and currency."""

    total_account: Decimal = Decimal("0")
    total_subaccount: Decimal = Decimal("0")

    @property
    def rolled_up(self) -> Decimal:
        return self.total_account + self.total_subaccount


# account -> period -> currency -> totals
PeriodTotals = dict[Period, dict[str, AccountTotal]]
AccountTotals = dict[Account, PeriodTotals]


@dataclass(frozen=True)
class ReportSettings:
    """Presentation and naming settings shared by all statements."""

    indent: str = "\t\t"
    total_prefix: str = "TOTAL: "
    net_revenue_name: str = "Net Revenue"
    revenue_root: str = "revenue"
    expenses_root: str = "expenses"
    exchange_root: str = "exchange"
    equity_root: str = "equity"
