"""Ledger table reading domain service."""

import logging
from typing import Optional, Sequence

from personal_finances.domain.account_tree import AccountTree, is_non_empty_cell, is_non_empty_row
from personal_finances.domain.entities import (
    Account,
    DefaultEntryData,
    ExchangeEntryData,
    Ledger,
    LedgerType,
    LiabilityEntryData,
    RawEntry,
)
from personal_finances.domain.errors import (
    account_not_found,
    ledger_row_skipped,
    negative_amount,
    unknown_ledger_type,
)
from personal_finances.utils.amount_parser import parse_amount
from personal_finances.utils.date_parser import parse_date

logger = logging.getLogger(__name__)

Table = Sequence[Sequence[str]]

# Number of header rows in front of the transaction rows of a ledger table
HEADER_ROWS = 2


class _SkipRow(Exception):
    """Raised while reading a row that cannot become a transaction."""


class LedgerReader:
    """Service for turning ledger tables into transactions."""

    def __init__(self, account_tree: AccountTree):
        """Initialize ledger reader.

        Args:
            account_tree: Tree used to resolve account names
        """
        self.account_tree = account_tree

    def read(self, ledger_tables: Sequence[Table]) -> Ledger:
        """Read every ledger table into a single date-sorted ledger.

        Rows naming an account missing from the tree are dropped. Rows with
        an unreadable date or value are dropped too and reported in
        ``Ledger.skipped``.

        Args:
            ledger_tables: Tables whose first row holds the ledger type in
                its second cell and the currency in its fourth

        Returns:
            Ledger with transactions sorted by date, ties kept in table order
        """
        entries: list[RawEntry] = []
        skipped: list[str] = []

        for table_num, table in enumerate(ledger_tables, start=1):
            entries.extend(self.read_table(table, table_num, skipped))

        entries.sort(key=lambda entry: entry.date)
        logger.info(
            "ledger_read",
            extra={
                "tables": len(ledger_tables),
                "entries": len(entries),
                "skipped": len(skipped),
            },
        )
        return Ledger(entries=tuple(entries), skipped=tuple(skipped))

    def read_table(
        self, table: Table, table_num: int = 1, skipped: Optional[list[str]] = None
    ) -> list[RawEntry]:
        """Read the transactions of a single ledger table."""
        if skipped is None:
            skipped = []

        rows = [list(row) for row in table]
        # Only leading blank rows are dropped; the header and column title rows
        # are then the next two rows, whatever their first cell holds
        while rows and not any(is_non_empty_cell(cell) for cell in rows[0]):
            rows.pop(0)
        if not rows:
            return []

        header = _pad(rows[0], 4)
        ledger_title = str(header[1]).strip()
        currency = str(header[3]).strip()
        try:
            ledger_type = LedgerType(ledger_title)
        except ValueError:
            logger.warning(
                "ledger_table_ignored",
                extra={"table": table_num, "reason": unknown_ledger_type(ledger_title)},
            )
            return []

        entries = []
        for row_num, row in enumerate(rows[HEADER_ROWS:], start=HEADER_ROWS + 1):
            if not is_non_empty_row(row):
                continue
            try:
                entry = self.read_row(ledger_type, row, currency)
            except _SkipRow as e:
                message = ledger_row_skipped(table_num, row_num, str(e))
                skipped.append(message)
                logger.warning("ledger_row_skipped", extra={"detail": message})
                continue
            if entry is None:
                logger.debug(
                    "ledger_row_unresolved",
                    extra={"table": table_num, "row": row_num},
                )
                continue
            entries.append(entry)
        return entries

    def read_row(
        self, ledger_type: LedgerType, row: Sequence[str], currency: str
    ) -> Optional[RawEntry]:
        """Read one transaction row.

        Returns:
            RawEntry, or None when an account name does not resolve
        """
        if ledger_type is LedgerType.EXCHANGE:
            return self._read_exchange_row(row)

        (
            date_cell,
            description,
            debit_name,
            credit_name,
            value_cell,
            term_cell,
        ) = _pad(row, 6)[:6]
        debit_account = self._resolve(debit_name)
        credit_account = self._resolve(credit_name)
        if debit_account is None or credit_account is None:
            return None

        entry_date = _parse_date_cell(date_cell)
        value = _parse_amount_cell(value_cell)

        if ledger_type is LedgerType.LIABILITY:
            data = LiabilityEntryData(
                debit_account=debit_account,
                credit_account=credit_account,
                currency=currency,
                value=value,
                payment_term=_parse_date_cell(term_cell),
            )
        else:
            data = DefaultEntryData(
                debit_account=debit_account,
                credit_account=credit_account,
                currency=currency,
                value=value,
            )
        return RawEntry(date=entry_date, description=str(description), data=data)

    def _read_exchange_row(self, row: Sequence[str]) -> Optional[RawEntry]:
        (
            date_cell,
            description,
            debit_name,
            credit_name,
            exchange_name,
            debit_currency,
            debit_value,
            credit_currency,
            credit_value,
        ) = _pad(row, 9)[:9]
        debit_account = self._resolve(debit_name)
        credit_account = self._resolve(credit_name)
        exchange_account = self._resolve(exchange_name)
        if debit_account is None or credit_account is None or exchange_account is None:
            return None

        return RawEntry(
            date=_parse_date_cell(date_cell),
            description=str(description),
            data=ExchangeEntryData(
                debit_account=debit_account,
                credit_account=credit_account,
                exchange_account=exchange_account,
                debit_value=_parse_amount_cell(debit_value),
                debit_currency=str(debit_currency).strip(),
                credit_value=_parse_amount_cell(credit_value),
                credit_currency=str(credit_currency).strip(),
            ),
        )

    def _resolve(self, name: str) -> Optional[Account]:
        account = self.account_tree.find_by_name(str(name).strip())
        if account is None:
            logger.debug("account_unresolved", extra={"detail": account_not_found(name)})
        return account


def _pad(row: Sequence[str], width: int) -> list[str]:
    cells = list(row)
    return cells + [""] * (width - len(cells))


def _parse_date_cell(cell: str):
    try:
        return parse_date(cell)
    except ValueError as e:
        raise _SkipRow(str(e))


def _parse_amount_cell(cell: str):
    try:
        value = parse_amount(cell)
    except ValueError as e:
        raise _SkipRow(str(e))
    if value < 0:
        raise _SkipRow(negative_amount(cell))
    return value
