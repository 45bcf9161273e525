"""Expansion of ledger transactions into account postings."""

from typing import Iterable

from personal_finances.domain.entities import (
    DefaultEntryData,
    Entry,
    EntryMetadata,
    EntryType,
    ExchangeEntryData,
    LiabilityEntryData,
    RawEntry,
)


def normalize(raw_entry: RawEntry) -> list[Entry]:
    """Expand one transaction into its postings.

    Default and liability transactions give a credit and a debit posting.
    Exchange transactions give four: the credit and debit legs, plus a debit
    on the exchange account in the credit currency and a credit on the
    exchange account in the debit currency.

    Args:
        raw_entry: Transaction read from a ledger table

    Returns:
        Postings in a fixed order; empty for an unrecognized kind
    """
    data = raw_entry.data
    metadata = EntryMetadata(original_entry=raw_entry)

    def posting(account, entry_type, currency, value, term=None) -> Entry:
        return Entry(
            account=account,
            date=raw_entry.date,
            term=term,
            type=entry_type,
            currency=currency,
            value=value,
            metadata=metadata,
        )

    if isinstance(data, DefaultEntryData):
        return [
            posting(data.credit_account, EntryType.CREDIT, data.currency, data.value),
            posting(data.debit_account, EntryType.DEBIT, data.currency, data.value),
        ]
    if isinstance(data, LiabilityEntryData):
        return [
            posting(data.credit_account, EntryType.CREDIT, data.currency, data.value, data.payment_term),
            posting(data.debit_account, EntryType.DEBIT, data.currency, data.value, data.payment_term),
        ]
    if isinstance(data, ExchangeEntryData):
        return [
            posting(data.credit_account, EntryType.CREDIT, data.credit_currency, data.credit_value),
            posting(data.debit_account, EntryType.DEBIT, data.debit_currency, data.debit_value),
            posting(data.exchange_account, EntryType.DEBIT, data.credit_currency, data.credit_value),
            posting(data.exchange_account, EntryType.CREDIT, data.debit_currency, data.debit_value),
        ]
    return []


def process_raw_entries(raw_entries: Iterable[RawEntry]) -> list[Entry]:
    """Normalize every transaction, keeping transaction order."""
    entries: list[Entry] = []
    for raw_entry in raw_entries:
        entries.extend(normalize(raw_entry))
    return entries
