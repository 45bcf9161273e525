"""Utility functions for personal_finances."""

from personal_finances.utils.date_parser import parse_date
from personal_finances.utils.amount_parser import parse_amount

__all__ = ["parse_date", "parse_amount"]
