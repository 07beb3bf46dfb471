# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

"""
Month-by-month spending across a set of budgets.

Reads the precomputed BudgetCalculation snapshots for each month of a fiscal
year and compares them with an even monthly share (one twelfth) of the
combined budget total.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import date

from pydantic import BaseModel, Field

from budget_reconciler.config import DEFAULT_CONFIG
from budget_reconciler.fiscal import MONTHS_PER_YEAR, DateLike, fiscal_months
from budget_reconciler.normalize import sum_amounts
from budget_reconciler.types import Budget, BudgetCalculation


class SpendTotals(BaseModel, frozen=True):
    """Spending components summed over one or more snapshots."""

    total_wages: float = 0.0
    fringe: float = 0.0
    wages_with_fringe: float = 0.0
    expenses: float = 0.0
    indirect: float = 0.0

    @property
    def spent(self) -> float:
        return self.wages_with_fringe + self.expenses + self.indirect

    def plus(self, other: SpendTotals) -> SpendTotals:
        return SpendTotals(
            total_wages=self.total_wages + other.total_wages,
            fringe=self.fringe + other.fringe,
            wages_with_fringe=self.wages_with_fringe + other.wages_with_fringe,
            expenses=self.expenses + other.expenses,
            indirect=self.indirect + other.indirect,
        )


class MonthTotals(BaseModel, frozen=True):
    month: str
    label: str
    totals: SpendTotals
    monthly_budget: float
    remaining: float


class MonthBreakdown(BaseModel, frozen=True):
    months: list[MonthTotals] = Field(default_factory=list)
    year_to_date: SpendTotals = Field(default_factory=SpendTotals)
    total_budget: float = 0.0
    ytd_remaining: float = 0.0


def _snapshot_totals(calc: BudgetCalculation) -> SpendTotals:
    return SpendTotals(
        total_wages=calc.total_wages,
        fringe=calc.fringe_amount,
        wages_with_fringe=calc.total_wages_with_fringe,
        expenses=calc.total_expenses,
        indirect=calc.indirect_amount,
    )


def month_breakdown(
    budgets: Sequence[Budget],
    calculations: Iterable[BudgetCalculation],
    start: DateLike | None = None,
    *,
    today: date | None = None,
    start_month: int = DEFAULT_CONFIG.fiscal_year_start_month,
) -> MonthBreakdown:
    """
    Spend per fiscal month across ``budgets``, plus year-to-date totals.

    The fiscal year starts at ``start``; failing that, at the first budget's
    ``fiscal_year_start``; failing that, at the current fiscal year. For each
    budget only its first snapshot in a given month is counted.
    """
    if start is None and budgets and budgets[0].fiscal_year_start is not None:
        start = budgets[0].fiscal_year_start

    budget_ids = {budget.id for budget in budgets}
    first_snapshot: dict[tuple[str, str], BudgetCalculation] = {}
    for calc in calculations:
        if calc.budget_id in budget_ids:
            first_snapshot.setdefault((calc.budget_id, calc.month_key), calc)

    total_budget = sum_amounts(budget.total_budget for budget in budgets)
    monthly_budget = total_budget / MONTHS_PER_YEAR

    months: list[MonthTotals] = []
    year_to_date = SpendTotals()
    for month in fiscal_months(start, today=today, start_month=start_month):
        totals = SpendTotals()
        for budget in budgets:
            calc = first_snapshot.get((budget.id, month.key))
            if calc is not None:
                totals = totals.plus(_snapshot_totals(calc))
        months.append(
            MonthTotals(
                month=month.key,
                label=month.label,
                totals=totals,
                monthly_budget=monthly_budget,
                remaining=monthly_budget - totals.spent,
            )
        )
        year_to_date = year_to_date.plus(totals)

    return MonthBreakdown(
        months=months,
        year_to_date=year_to_date,
        total_budget=total_budget,
        ytd_remaining=total_budget - year_to_date.spent,
    )
