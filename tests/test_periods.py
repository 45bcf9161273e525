"""Tests for monthly accounting periods."""

from datetime import date
from decimal import Decimal

import pytest

from personal_finances.domain.entities import (
    Account,
    AccountInfo,
    AccountKind,
    Entry,
    EntryMetadata,
    EntryType,
    Period,
    StatementKind,
)
from personal_finances.domain.errors import ValidationError
from personal_finances.domain.periods import (
    DateBasis,
    PeriodMode,
    generate_monthly_periods,
    period_matcher,
    periods_for_entries,
)

INFO = AccountInfo(AccountKind.NORMAL_DEBIT, StatementKind.BALANCE_SHEET)


def _entry(day, term=None):
    return Entry(
        account=Account(name="checking", info=INFO),
        date=day,
        term=term,
        type=EntryType.DEBIT,
        currency="USD",
        value=Decimal("1"),
        metadata=EntryMetadata(original_entry=None),
    )


def test_generate_monthly_periods_covers_range():
    """Test periods start on the first month and contain the last day."""
    periods = generate_monthly_periods(date(2024, 1, 15), date(2024, 3, 2))

    assert periods == [
        Period(date(2024, 1, 1), date(2024, 2, 1)),
        Period(date(2024, 2, 1), date(2024, 3, 1)),
        Period(date(2024, 3, 1), date(2024, 4, 1)),
    ]


def test_generate_monthly_periods_rolls_over_year():
    """Test December is followed by January of the next year."""
    periods = generate_monthly_periods(date(2023, 11, 30), date(2024, 1, 1))

    assert [p.begin for p in periods] == [
        date(2023, 11, 1),
        date(2023, 12, 1),
        date(2024, 1, 1),
    ]
    assert periods[-1].end == date(2024, 2, 1)


def test_generate_monthly_periods_are_contiguous():
    """Test each period ends where the next begins."""
    periods = generate_monthly_periods(date(2024, 1, 31), date(2024, 12, 31))

    assert len(periods) == 12
    for current, following in zip(periods, periods[1:]):
        assert current.end == following.begin


def test_generate_monthly_periods_single_day():
    assert generate_monthly_periods(date(2024, 2, 29), date(2024, 2, 29)) == [
        Period(date(2024, 2, 1), date(2024, 3, 1))
    ]


def test_generate_monthly_periods_rejects_reversed_range():
    with pytest.raises(ValidationError):
        generate_monthly_periods(date(2024, 3, 1), date(2024, 1, 1))


def test_period_contains_is_half_open():
    """Test the end of a period belongs to the next period."""
    period = Period(date(2024, 1, 1), date(2024, 2, 1))

    assert period.contains(date(2024, 1, 1))
    assert period.contains(date(2024, 1, 31))
    assert not period.contains(date(2024, 2, 1))
    assert not period.contains(date(2023, 12, 31))


def test_period_matchers():
    """Test WITHIN is bounded below and AS_OF is not."""
    period = Period(date(2024, 2, 1), date(2024, 3, 1))
    within = period_matcher(PeriodMode.WITHIN)
    as_of = period_matcher(PeriodMode.AS_OF)

    assert not within(period, date(2024, 1, 15))
    assert as_of(period, date(2024, 1, 15))
    assert within(period, date(2024, 2, 15))
    assert as_of(period, date(2024, 2, 15))
    assert not within(period, date(2024, 3, 1))
    assert not as_of(period, date(2024, 3, 1))


def test_periods_for_entries_uses_first_and_last_posting():
    periods = periods_for_entries(
        [_entry(date(2024, 3, 5)), _entry(date(2024, 1, 20)), _entry(date(2024, 2, 1))]
    )

    assert [p.begin for p in periods] == [
        date(2024, 1, 1),
        date(2024, 2, 1),
        date(2024, 3, 1),
    ]


def test_periods_for_entries_term_basis_ignores_entries_without_term():
    periods = periods_for_entries(
        [_entry(date(2024, 1, 5)), _entry(date(2024, 1, 6), term=date(2024, 4, 10))],
        basis=DateBasis.TERM,
    )

    assert periods == [Period(date(2024, 4, 1), date(2024, 5, 1))]


def test_periods_for_entries_requires_a_posting():
    """Test an empty posting set cannot produce a period range."""
    with pytest.raises(ValidationError, match="no dated postings"):
        periods_for_entries([], report="income statement")

    with pytest.raises(ValidationError):
        periods_for_entries([_entry(date(2024, 1, 5))], basis=DateBasis.TERM)
