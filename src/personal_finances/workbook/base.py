"""Workbook of input tables."""

from dataclasses import dataclass, field

# Table cells are kept as strings, exactly as read
Table = list[list[str]]


@dataclass(frozen=True)
class Workbook:
    """Input tables for one report run."""

    account_types: Table
    accounts: Table
    currencies: Table
    ledgers: tuple[Table, ...] = field(default_factory=tuple)
