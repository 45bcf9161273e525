"""Workbook layer for personal_finances application."""

from personal_finances.workbook.base import Workbook
from personal_finances.workbook.factories import load_csv_workbook

__all__ = ["Workbook", "load_csv_workbook"]
