# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

"""
Filter and sort declarations for the budget, employee and allocation lists.

Each ``*_predicates`` function turns the current filter selections into
predicates for ``filter_and_sort``; each ``*_sort_keys`` function returns the
sortable columns of that list, including derived ones (allocated, remaining,
utilization) computed from the current collections.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Literal, Optional

from budget_reconciler.config import DEFAULT_CONFIG, EngineConfig
from budget_reconciler.ledger import aggregate_budget_status
from budget_reconciler.query import (
    CategoryPredicate,
    Predicate,
    RecordPredicate,
    SearchPredicate,
    SortKey,
)
from budget_reconciler.types import Allocation, Budget, Employee, Expense
from budget_reconciler.utilization import compute_utilization

EmployeeView = Literal["all", "tbh"]

# ─── Budgets ──────────────────────────────────────────────────────────────────


def budget_predicates(
    *,
    name: Optional[str] = None,
    number: Optional[str] = None,
    funder: Optional[str] = None,
    location: Optional[str] = None,
    config: EngineConfig = DEFAULT_CONFIG,
) -> list[RecordPredicate[Budget]]:
    """Exact-match filters; None, empty or the wildcard leave a filter off."""
    wildcard = config.wildcard
    return [
        CategoryPredicate(name, lambda budget: budget.name, wildcard=wildcard),
        CategoryPredicate(number, lambda budget: budget.budget_number, wildcard=wildcard),
        CategoryPredicate(funder, lambda budget: budget.funder_id, wildcard=wildcard),
        CategoryPredicate(location, lambda budget: budget.location_id, wildcard=wildcard),
    ]


def budget_sort_keys(
    allocations: Sequence[Allocation],
    expenses: Sequence[Expense],
) -> dict[str, SortKey[Budget]]:
    def spent(budget: Budget) -> float:
        return aggregate_budget_status(budget, allocations, expenses).spent

    def remaining(budget: Budget) -> float:
        return aggregate_budget_status(budget, allocations, expenses).remaining

    return {
        "budget_number": SortKey("budget_number", lambda budget: budget.budget_number),
        "name": SortKey("name", lambda budget: budget.name),
        "total_budget": SortKey("total_budget", lambda budget: budget.total_budget, "numeric"),
        "allocated": SortKey("allocated", spent, "numeric"),
        "remaining": SortKey("remaining", remaining, "numeric"),
    }


# ─── Employees ────────────────────────────────────────────────────────────────


def employee_predicates(
    *,
    search: str = "",
    status: Optional[str] = None,
    location: Optional[str] = None,
    view: Optional[EmployeeView] = None,
    config: EngineConfig = DEFAULT_CONFIG,
) -> list[RecordPredicate[Employee]]:
    """
    Filters for the employee list.

    Employees with no location work at every location: they appear under any
    concrete location filter and are the only ones shown for the
    ``"admin"`` selection. The ``"all"`` view hides TBH positions, the
    ``"tbh"`` view shows only them.
    """
    predicates: list[RecordPredicate[Employee]] = [
        SearchPredicate(search, lambda employee: employee.display_name),
        CategoryPredicate(status, lambda employee: employee.status, wildcard=config.wildcard),
        CategoryPredicate(
            location,
            lambda employee: employee.location_id,
            null_sentinel=config.null_location_sentinel,
            null_inclusive=True,
            wildcard=config.wildcard,
        ),
    ]
    if view == "all":
        predicates.append(Predicate(lambda employee: employee.status != "tbh"))
    elif view == "tbh":
        predicates.append(Predicate(lambda employee: employee.status == "tbh"))
    return predicates


def location_label(employee: Employee) -> str:
    """Location shown in lists: its code, ``N/A`` if unresolved, ``Admin`` if none."""
    if employee.location_code:
        return employee.location_code
    return "N/A" if employee.location_id else "Admin"


def employee_sort_keys(
    allocations: Sequence[Allocation],
    budgets: Iterable[Budget] = (),
) -> dict[str, SortKey[Employee]]:
    budget_numbers = {budget.id: budget.budget_number for budget in budgets}

    def allocated(employee: Employee) -> float:
        return compute_utilization(employee, allocations).total_allocated

    def utilization(employee: Employee) -> float:
        return compute_utilization(employee, allocations).utilization_percent

    def program_number(employee: Employee) -> str:
        if not employee.tbh_budget_id:
            return ""
        return budget_numbers.get(employee.tbh_budget_id, "")

    return {
        "name": SortKey("name", lambda employee: employee.display_name),
        "salary": SortKey("salary", lambda employee: employee.annual_salary, "numeric"),
        "hourly_rate": SortKey("hourly_rate", lambda employee: employee.hourly_rate, "numeric"),
        "allocated": SortKey("allocated", allocated, "numeric"),
        "utilization": SortKey("utilization", utilization, "numeric"),
        "location": SortKey("location", location_label),
        "title": SortKey("title", lambda employee: employee.title),
        "proposed_salary": SortKey(
            "proposed_salary", lambda employee: employee.annual_salary, "numeric"
        ),
        "needed_for_program": SortKey("needed_for_program", program_number),
    }


# ─── Allocations ──────────────────────────────────────────────────────────────


def fiscal_year_span(allocation: Allocation) -> str:
    """``YYYY-YYYY`` span of an allocation's own fiscal window, or empty."""
    if allocation.fiscal_year_start is None or allocation.fiscal_year_end is None:
        return ""
    return f"{allocation.fiscal_year_start.year}-{allocation.fiscal_year_end.year}"


def allocation_predicates(
    employees: Iterable[Employee],
    budgets: Iterable[Budget],
    *,
    employee_name: str = "",
    budget_number: str = "",
    budget_name: str = "",
    fiscal_year: str = "",
) -> list[RecordPredicate[Allocation]]:
    """Substring filters over the employee and budget each allocation links."""
    names = {employee.id: employee.display_name for employee in employees}
    budgets_by_id = {budget.id: budget for budget in budgets}

    def linked_number(allocation: Allocation) -> Optional[str]:
        budget = budgets_by_id.get(allocation.budget_id)
        return budget.budget_number if budget is not None else None

    def linked_name(allocation: Allocation) -> Optional[str]:
        budget = budgets_by_id.get(allocation.budget_id)
        return budget.name if budget is not None else None

    return [
        SearchPredicate(employee_name, lambda allocation: names.get(allocation.employee_id)),
        SearchPredicate(budget_number, linked_number),
        SearchPredicate(budget_name, linked_name),
        SearchPredicate(fiscal_year, fiscal_year_span),
    ]


def allocation_sort_keys() -> dict[str, SortKey[Allocation]]:
    return {
        "amount": SortKey("amount", lambda allocation: allocation.allocated_amount, "numeric"),
    }
