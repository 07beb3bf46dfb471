# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

from __future__ import annotations

from collections.abc import Iterable, Sequence

from pydantic import BaseModel, Field

from budget_reconciler.normalize import sum_amounts
from budget_reconciler.types import Allocation, Employee, UtilizationResult

ADMIN_BUCKET = "admin"


def compute_utilization(
    employee: Employee,
    allocations: Iterable[Allocation],
) -> UtilizationResult:
    """
    Compare an employee's allocations to their annual salary.

    Allocations belonging to other employees are ignored, so the full
    allocation collection may be passed. Utilization is not capped at 100;
    values above it signal over-allocation. A zero salary yields 0.0.
    """
    total_allocated = sum_amounts(
        allocation.allocated_amount
        for allocation in allocations
        if allocation.employee_id == employee.id
    )
    salary = employee.annual_salary
    utilization = (total_allocated / salary) * 100.0 if salary > 0 else 0.0

    return UtilizationResult(
        employee_id=employee.id,
        total_allocated=total_allocated,
        utilization_percent=utilization,
        deficit=max(0.0, salary - total_allocated),
        surplus=max(0.0, total_allocated - salary),
    )


def compute_all_utilizations(
    employees: Iterable[Employee],
    allocations: Sequence[Allocation],
) -> list[UtilizationResult]:
    """UtilizationResult for every employee, in input order."""
    return [compute_utilization(employee, allocations) for employee in employees]


class SalaryTotals(BaseModel, frozen=True):
    """Annual salary sums per location code plus the grand total."""

    by_location: dict[str, float] = Field(default_factory=dict)
    total: float = 0.0


def salary_totals_by_location(employees: Iterable[Employee]) -> SalaryTotals:
    """
    Sum stored annual salaries per lower-cased location code.

    Employees without a location code are counted under ``"admin"``. Stored
    salaries are summed as-is; nothing is rederived from hourly rates.
    """
    buckets: dict[str, float] = {}
    total = 0.0
    for employee in employees:
        code = (employee.location_code or "").lower() or ADMIN_BUCKET
        buckets[code] = buckets.get(code, 0.0) + employee.annual_salary
        total += employee.annual_salary
    return SalaryTotals(by_location=buckets, total=total)
