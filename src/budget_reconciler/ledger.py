# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

"""
Ledger aggregation: combines allocations, fringe, expenses and indirect cost
into the financial status of a budget.

Every function here is pure. Inputs are never validated beyond their model
types; negative or unusual amounts are summed as given.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from pydantic import BaseModel

from budget_reconciler.normalize import sum_amounts, truncate_currency
from budget_reconciler.types import (
    Allocation,
    Budget,
    BudgetCalculation,
    BudgetStatus,
    Expense,
)

ALL_MONTHS = "all"


def allocated_total(budget_id: str, allocations: Iterable[Allocation]) -> float:
    """Sum of allocated amounts charged to one budget."""
    return sum_amounts(
        allocation.allocated_amount
        for allocation in allocations
        if allocation.budget_id == budget_id
    )


def expense_total(budget_id: str, expenses: Iterable[Expense]) -> float:
    """Sum of expenses charged to one budget."""
    return sum_amounts(expense.amount for expense in expenses if expense.budget_id == budget_id)


def aggregate_budget_status(
    budget: Budget,
    allocations: Iterable[Allocation],
    expenses: Iterable[Expense],
) -> BudgetStatus:
    """
    Derive the BudgetStatus for one budget from the full record collections.

    ``spent`` is allocations + fringe + expenses + indirect cost, truncated to
    cents as a whole. ``available`` is the truncated budget total and
    ``remaining`` their signed difference; it is not clamped at zero.
    """
    allocated = allocated_total(budget.id, allocations)
    expenses_sum = expense_total(budget.id, expenses)

    spent_raw = allocated + budget.fringe_benefits_amount + expenses_sum + budget.indirect_cost
    spent = truncate_currency(spent_raw)
    available = truncate_currency(budget.total_budget)
    remaining = available - spent

    return BudgetStatus(
        budget_id=budget.id,
        allocated=allocated,
        fringe=budget.fringe_benefits_amount,
        expenses=expenses_sum,
        indirect=budget.indirect_cost,
        spent=spent,
        remaining=remaining,
        available=available,
        is_overspent=remaining < 0,
    )


def aggregate_all(
    budgets: Iterable[Budget],
    allocations: Sequence[Allocation],
    expenses: Sequence[Expense],
) -> list[BudgetStatus]:
    """BudgetStatus for every budget, in input order."""
    return [aggregate_budget_status(budget, allocations, expenses) for budget in budgets]


# ─── Report summaries ─────────────────────────────────────────────────────────


class BudgetSummary(BaseModel, frozen=True):
    """Totals read from the monthly calculation snapshots of one budget."""

    budget_id: str
    month: str
    total_wages: float = 0.0
    fringe: float = 0.0
    total_wages_with_fringe: float = 0.0
    indirect: float = 0.0
    total_expenses: float = 0.0
    remaining: float


def summarize_budget(
    budget: Budget,
    calculations: Iterable[BudgetCalculation],
    month: str = ALL_MONTHS,
) -> BudgetSummary:
    """
    Summarize a budget from its BudgetCalculation snapshots.

    With ``month="all"`` every snapshot of the budget is summed and
    ``remaining`` is recomputed from the total budget. With a concrete
    ``YYYY-MM`` the matching snapshot is reported as stored, including its own
    ``remaining_budget``; when no snapshot exists for that month nothing has
    been spent and the whole budget remains.
    """
    own = [calc for calc in calculations if calc.budget_id == budget.id]

    if month == ALL_MONTHS:
        wages_with_fringe = sum_amounts(calc.total_wages_with_fringe for calc in own)
        indirect = sum_amounts(calc.indirect_amount for calc in own)
        total_expenses = sum_amounts(calc.total_expenses for calc in own)
        return BudgetSummary(
            budget_id=budget.id,
            month=month,
            total_wages=sum_amounts(calc.total_wages for calc in own),
            fringe=sum_amounts(calc.fringe_amount for calc in own),
            total_wages_with_fringe=wages_with_fringe,
            indirect=indirect,
            total_expenses=total_expenses,
            remaining=budget.total_budget - (wages_with_fringe + total_expenses + indirect),
        )

    snapshot = next((calc for calc in own if calc.calculation_month.startswith(month)), None)
    if snapshot is None:
        return BudgetSummary(budget_id=budget.id, month=month, remaining=budget.total_budget)

    return BudgetSummary(
        budget_id=budget.id,
        month=month,
        total_wages=snapshot.total_wages,
        fringe=snapshot.fringe_amount,
        total_wages_with_fringe=snapshot.total_wages_with_fringe,
        indirect=snapshot.indirect_amount,
        total_expenses=snapshot.total_expenses,
        remaining=snapshot.remaining_budget,
    )
