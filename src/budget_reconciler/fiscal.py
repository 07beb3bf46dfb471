# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

"""
Fiscal calendar helpers.

Fiscal years run twelve whole months from a configurable start month
(October by default, so FY25-26 covers October 2025 through September 2026).
``fiscal_months`` yields the month keys used to slice BudgetCalculation
snapshots; the remaining helpers describe the fiscal years present in a set
of budgets.
"""

from __future__ import annotations

import calendar
from collections.abc import Iterable, Iterator
from datetime import date, datetime, timedelta
from typing import Union

from pydantic import BaseModel

from budget_reconciler.config import DEFAULT_CONFIG
from budget_reconciler.errors import ConfigurationError
from budget_reconciler.types import Budget

MONTHS_PER_YEAR = 12

DateLike = Union[date, datetime, str]


class FiscalMonth(BaseModel, frozen=True):
    """One month of a fiscal year: ``key`` is ``YYYY-MM``, ``label`` e.g. ``October 2025``."""

    key: str
    label: str
    year: int
    month: int


class FiscalYear(BaseModel, frozen=True):
    """A fiscal-year window as found on budgets."""

    start_date: date
    end_date: date
    name: str
    is_active: bool = False

    @property
    def key(self) -> str:
        """Selector identifier, ``<start>_<end>`` in ISO format."""
        return f"{self.start_date.isoformat()}_{self.end_date.isoformat()}"


def to_date(value: DateLike) -> date:
    """Coerce a date, datetime or ISO string (time part ignored) to a date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(value.strip()[:10])


def shift_months(start: date, offset: int) -> date:
    """First day of the month ``offset`` months after ``start``'s month."""
    index = start.month - 1 + offset
    return date(start.year + index // MONTHS_PER_YEAR, index % MONTHS_PER_YEAR + 1, 1)


def _check_start_month(start_month: int) -> None:
    if not 1 <= start_month <= MONTHS_PER_YEAR:
        raise ConfigurationError(
            f"fiscal year start month must be between 1 and 12; got {start_month}."
        )


def current_fiscal_year_start(
    today: date | None = None,
    start_month: int = DEFAULT_CONFIG.fiscal_year_start_month,
) -> date:
    """
    First day of the fiscal year containing ``today``.

    On or after the start month the fiscal year began this calendar year,
    otherwise it began the previous one.

    Raises:
        ConfigurationError: If ``start_month`` is not a calendar month.
    """
    _check_start_month(start_month)
    if today is None:
        today = date.today()
    year = today.year if today.month >= start_month else today.year - 1
    return date(year, start_month, 1)


class FiscalMonthSeries:
    """
    The twelve months of a fiscal year, in sequence order.

    Iteration is lazy and can be repeated; every pass starts again from the
    first month.
    """

    __slots__ = ("_start",)

    def __init__(self, start: date) -> None:
        self._start = start.replace(day=1)

    @property
    def start(self) -> date:
        return self._start

    def __iter__(self) -> Iterator[FiscalMonth]:
        for offset in range(MONTHS_PER_YEAR):
            month_start = shift_months(self._start, offset)
            yield FiscalMonth(
                key=f"{month_start.year:04d}-{month_start.month:02d}",
                label=f"{calendar.month_name[month_start.month]} {month_start.year}",
                year=month_start.year,
                month=month_start.month,
            )

    def __len__(self) -> int:
        return MONTHS_PER_YEAR

    def keys(self) -> list[str]:
        return [month.key for month in self]

    def __repr__(self) -> str:
        return f"FiscalMonthSeries(start={self._start.isoformat()!r})"


def fiscal_months(
    start: DateLike | None = None,
    *,
    today: date | None = None,
    start_month: int = DEFAULT_CONFIG.fiscal_year_start_month,
) -> FiscalMonthSeries:
    """
    Month series for the fiscal year beginning at ``start``.

    ``start`` is usually a budget's ``fiscal_year_start``. When it is missing
    the series covers the current fiscal year as of ``today``.

    Example::

        >>> fiscal_months("2025-10-01").keys()[2:5]
        ['2025-12', '2026-01', '2026-02']
    """
    if start is None:
        return FiscalMonthSeries(current_fiscal_year_start(today, start_month))
    return FiscalMonthSeries(to_date(start))


def fiscal_year_name(start: date, end: date) -> str:
    """Short display name, e.g. ``FY25-26``."""
    return f"FY{start.year % 100:02d}-{end.year % 100:02d}"


def next_fiscal_year(
    today: date | None = None,
    start_month: int = DEFAULT_CONFIG.fiscal_year_start_month,
) -> FiscalYear:
    """
    The fiscal year a user would plan next.

    Before the start month that is the year opening this calendar year; from
    the start month onwards the current fiscal year is already running, so
    the next one opens a year later.
    """
    _check_start_month(start_month)
    if today is None:
        today = date.today()
    year = today.year + 1 if today.month >= start_month else today.year
    start = date(year, start_month, 1)
    end = shift_months(start, MONTHS_PER_YEAR) - timedelta(days=1)
    return FiscalYear(start_date=start, end_date=end, name=fiscal_year_name(start, end))


def fiscal_year_catalog(
    budgets: Iterable[Budget],
    today: date | None = None,
) -> list[FiscalYear]:
    """
    Distinct fiscal-year windows used by ``budgets``, newest first.

    Budgets without both fiscal dates are skipped. A window is active when
    ``today`` falls inside it, bounds included.
    """
    if today is None:
        today = date.today()

    windows: dict[tuple[date, date], FiscalYear] = {}
    for budget in budgets:
        start, end = budget.fiscal_year_start, budget.fiscal_year_end
        if start is None or end is None or (start, end) in windows:
            continue
        windows[(start, end)] = FiscalYear(
            start_date=start,
            end_date=end,
            name=fiscal_year_name(start, end),
            is_active=start <= today <= end,
        )

    return sorted(windows.values(), key=lambda year: year.start_date, reverse=True)
