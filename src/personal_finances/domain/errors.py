"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested account or workbook table does not exist."""


def account_not_found(name: str) -> str:
    """Return message for a missing account name."""
    return f"Account '{name}' not found"


def root_account_not_found(name: str) -> str:
    """Return message for a well-known root missing from the account types."""
    return (
        f"Root account '{name}' not found. "
        "Declare it in the account types table."
    )


def no_postings(report: str) -> str:
    """Return message when a report has nothing to derive periods from."""
    return f"Cannot build {report}: there are no dated postings to report on"


def unknown_ledger_type(ledger_type: str) -> str:
    """Return message for a ledger table with an unrecognized title."""
    return f"Unknown ledger type '{ledger_type}'"


def ledger_row_skipped(table: int, row: int, reason: str) -> str:
    """Return message for a ledger row that was dropped while reading."""
    return f"Ledger {table}, row {row}: {reason}"


def negative_amount(cell: str) -> str:
    """Return message for a ledger value written as a negative amount."""
    return f"Negative amount '{cell}'; swap the debit and credit accounts instead"
