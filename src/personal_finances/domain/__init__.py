"""Domain layer for personal_finances application."""

from personal_finances.domain.account_tree import AccountTree
from personal_finances.domain.aggregation import PeriodAggregator
from personal_finances.domain.ledger import LedgerReader
from personal_finances.domain.postings import process_raw_entries
from personal_finances.domain.statements import StatementFormatter, StatementService

__all__ = [
    "AccountTree",
    "PeriodAggregator",
    "LedgerReader",
    "process_raw_entries",
    "StatementFormatter",
    "StatementService",
]
