# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

"""
Staffing support for "to be hired" (TBH) positions.

Ranks budgets by spare capacity so planners can see which programs could
absorb a new hire, and pairs each planned position with the budget it names.
Ranking uses a static threshold from EngineConfig; there is no forecasting.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from typing import Optional

from pydantic import BaseModel, Field

from budget_reconciler.config import DEFAULT_CONFIG, EngineConfig
from budget_reconciler.ledger import aggregate_budget_status
from budget_reconciler.types import Allocation, Budget, BudgetStatus, Employee, Expense


class TbhCandidate(BaseModel, frozen=True):
    """A budget with enough remaining capacity to fund a new hire."""

    budget: Budget
    status: BudgetStatus
    hire_capacity: int = Field(..., ge=0, description="Whole hires the remaining amount covers.")


class TbhPlacement(BaseModel, frozen=True):
    """A planned position and the budget expected to pay for it."""

    employee: Employee
    budget: Optional[Budget] = None
    status: Optional[BudgetStatus] = None
    can_fund: bool = False
    alternatives: list[TbhCandidate] = Field(default_factory=list)


def is_tbh(employee: Employee) -> bool:
    """
    True for planned positions.

    Older records predate the ``tbh`` status and are only recognisable by a
    "TBH" placeholder in the name.
    """
    if employee.status == "tbh":
        return True
    first_name = employee.first_name or ""
    return (
        first_name.startswith("TBH -")
        or first_name.startswith("TBH-")
        or "TBH" in employee.display_name
    )


def tbh_employees(employees: Iterable[Employee]) -> list[Employee]:
    return [employee for employee in employees if is_tbh(employee)]


def rank_tbh_candidates(
    budgets: Iterable[Budget],
    allocations: Sequence[Allocation],
    expenses: Sequence[Expense],
    threshold: float | None = None,
    config: EngineConfig = DEFAULT_CONFIG,
) -> list[TbhCandidate]:
    """
    Budgets able to absorb a hire, most remaining capacity first.

    A budget qualifies when its remaining amount is positive and strictly
    greater than ``threshold`` (``config.tbh_threshold`` when omitted), so a
    budget with exactly the threshold left is excluded. Ties keep input order.
    """
    if threshold is None:
        threshold = config.tbh_threshold

    candidates: list[TbhCandidate] = []
    for budget in budgets:
        status = aggregate_budget_status(budget, allocations, expenses)
        if status.remaining > 0 and status.remaining > threshold:
            candidates.append(
                TbhCandidate(
                    budget=budget,
                    status=status,
                    hire_capacity=math.floor(status.remaining / config.assumed_hire_cost),
                )
            )

    return sorted(candidates, key=lambda candidate: candidate.status.remaining, reverse=True)


def resolve_tbh_budget(employee: Employee, budgets: Iterable[Budget]) -> Budget | None:
    """The budget named by ``employee.tbh_budget_id``, or None if unset or unknown."""
    if not employee.tbh_budget_id:
        return None
    return next((budget for budget in budgets if budget.id == employee.tbh_budget_id), None)


def match_tbh_positions(
    employees: Iterable[Employee],
    budgets: Sequence[Budget],
    allocations: Sequence[Allocation],
    expenses: Sequence[Expense],
    threshold: float | None = None,
    config: EngineConfig = DEFAULT_CONFIG,
) -> list[TbhPlacement]:
    """
    Pair every TBH position with its named budget.

    A named budget can fund the hire while it has money left. Positions whose
    budget cannot (or who name none) are offered the ranked candidates from
    ``rank_tbh_candidates``, excluding their own budget.
    """
    ranked: list[TbhCandidate] | None = None
    placements: list[TbhPlacement] = []

    for employee in tbh_employees(employees):
        budget = resolve_tbh_budget(employee, budgets)
        status = (
            aggregate_budget_status(budget, allocations, expenses) if budget is not None else None
        )
        can_fund = status is not None and status.remaining > 0

        alternatives: list[TbhCandidate] = []
        if not can_fund:
            if ranked is None:
                ranked = rank_tbh_candidates(budgets, allocations, expenses, threshold, config)
            alternatives = [
                candidate
                for candidate in ranked
                if budget is None or candidate.budget.id != budget.id
            ]

        placements.append(
            TbhPlacement(
                employee=employee,
                budget=budget,
                status=status,
                can_fund=can_fund,
                alternatives=alternatives,
            )
        )

    return placements
