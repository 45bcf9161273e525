"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
import re

_CURRENCY_MARKS = re.compile(r"[$€£¥]|\b[A-Z]{3}\b")


def parse_amount(amount: str | int | float | Decimal) -> Decimal:
    """Parse a ledger value cell into a Decimal.

    Handles:
    - "123.45", "1,234.56"
    - "$123.45", "USD 123.45", "123.45 EUR"
    - "-123.45" and "(123.45)" for negatives

    Args:
        amount: Cell value

    Returns:
        Decimal amount

    Raises:
        ValueError: If the value cannot be parsed
    """
    if isinstance(amount, Decimal):
        return amount
    if isinstance(amount, (int, float)):
        return Decimal(str(amount))

    text = (amount or "").strip()
    if not text:
        raise ValueError("Empty amount")

    is_negative = text.startswith("(") and text.endswith(")")
    if is_negative:
        text = text[1:-1]

    text = _CURRENCY_MARKS.sub("", text).replace(",", "").replace(" ", "")

    try:
        value = Decimal(text)
    except InvalidOperation:
        raise ValueError(f"Could not parse amount '{amount}'")
    if not value.is_finite():
        raise ValueError(f"Could not parse amount '{amount}'")
    return -value if is_negative else value


def format_amount(value: Decimal) -> str:
    """Render an amount with two decimals and thousands separators."""
    return f"{value:,.2f}"
