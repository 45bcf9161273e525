"""Date parsing utilities for workbook cells."""

from datetime import date, datetime
from dateutil import parser as date_parser


def parse_date(value: str | date | datetime) -> date:
    """Parse a workbook cell into a date.

    Supports:
    - ISO dates: "2024-01-15"
    - Spreadsheet exports: "1/15/2024", "15 Jan 2024", "2024-01-15 00:00:00"
    - Values that are already dates or datetimes

    Args:
        value: Cell value

    Returns:
        Date object

    Raises:
        ValueError: If the value cannot be parsed
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    text = (value or "").strip()
    if not text:
        raise ValueError("Empty date")

    try:
        return date_parser.parse(text).date()
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{text}': {e}")


def format_date(value: date) -> str:
    """Render a date the way report headers show it."""
    return value.isoformat()
