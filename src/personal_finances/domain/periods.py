"""Monthly accounting periods."""

from datetime import date
from enum import Enum
from typing import Callable, Iterable, Optional

from dateutil.relativedelta import relativedelta

from personal_finances.domain.entities import Entry, Period
from personal_finances.domain.errors import ValidationError, no_postings


class PeriodMode(Enum):
    """How a posting date is matched against a period."""

    # begin <= date < end, for flow statements
    WITHIN = "within"
    # date < end, for balances as of the end of the period
    AS_OF = "as_of"


class DateBasis(Enum):
    """Which date of a posting places it in a period."""

    POSTING = "posting"
    TERM = "term"


def month_start(day: date) -> date:
    return day.replace(day=1)


def generate_monthly_periods(begin: date, end: date) -> list[Period]:
    """Generate consecutive one-month periods covering ``begin`` to ``end``.

    Args:
        begin: First day to cover
        end: Last day to cover (inclusive)

    Returns:
        Ordered list of contiguous calendar-month periods; the first starts
        on the first of ``begin``'s month and the last contains ``end``

    Raises:
        ValidationError: If end is before begin
    """
    if end < begin:
        raise ValidationError(f"Period end {end} is before period begin {begin}")

    periods = []
    current = month_start(begin)
    while current <= end:
        following = current + relativedelta(months=1)
        periods.append(Period(begin=current, end=following))
        current = following
    return periods


def entry_date(entry: Entry, basis: DateBasis) -> Optional[date]:
    """Return the date that places ``entry`` in a period, or None."""
    if basis is DateBasis.TERM:
        return entry.term
    return entry.date


def periods_for_entries(
    entries: Iterable[Entry],
    basis: DateBasis = DateBasis.POSTING,
    report: str = "report",
) -> list[Period]:
    """Generate the periods spanning every dated entry.

    Raises:
        ValidationError: If no entry has a date under ``basis``
    """
    dates = [d for d in (entry_date(entry, basis) for entry in entries) if d is not None]
    if not dates:
        raise ValidationError(no_postings(report))
    return generate_monthly_periods(min(dates), max(dates))


def period_matcher(mode: PeriodMode) -> Callable[[Period, date], bool]:
    """Return the predicate deciding whether a date counts for a period."""
    if mode is PeriodMode.AS_OF:
        return lambda period, day: period.precedes_end(day)
    return lambda period, day: period.contains(day)
