# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

from __future__ import annotations

from datetime import date, datetime
from typing import Annotated, Any, Literal, Optional

from pydantic import BaseModel, BeforeValidator, Field, model_validator

from budget_reconciler.normalize import Amount, coerce_amount


def _coerce_date(value: Any) -> Any:
    """Accept dates, datetimes and ISO strings with or without a time part."""
    if isinstance(value, datetime):
        return value.date()
    if value is None or isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        return text[:10]
    return value


def _coerce_month(value: Any) -> Any:
    if isinstance(value, (date, datetime)):
        return value.strftime("%Y-%m-%d")
    return value


RecordDate = Annotated[Optional[date], BeforeValidator(_coerce_date)]

# ─── Records ──────────────────────────────────────────────────────────────────

EmployeeStatus = Literal["active", "inactive", "laid_off", "tbh"]


class Budget(BaseModel, frozen=True):
    """A funded budget (program/grant) and its fixed add-on costs."""

    id: str
    budget_number: str = ""
    name: Optional[str] = None
    total_budget: Amount = 0.0
    fringe_benefits_amount: Amount = 0.0
    indirect_cost: Amount = 0.0
    fiscal_year_start: RecordDate = None
    fiscal_year_end: RecordDate = None
    location_id: Optional[str] = None
    funder_id: Optional[str] = None

    @model_validator(mode="after")
    def fiscal_window_must_be_ordered(self) -> Budget:
        if (
            self.fiscal_year_start is not None
            and self.fiscal_year_end is not None
            and self.fiscal_year_end <= self.fiscal_year_start
        ):
            raise ValueError("fiscal_year_end must be after fiscal_year_start")
        return self


class Employee(BaseModel, frozen=True):
    """
    A staff member or planned position.

    ``location_id`` of None means the employee works across all locations.
    For ``status == "tbh"`` records, ``tbh_budget_id`` names the budget that
    is expected to fund the hire.
    """

    id: str
    first_name: str = ""
    last_name: str = ""
    title: Optional[str] = None
    annual_salary: Amount = 0.0
    hourly_rate: Amount = 0.0
    status: EmployeeStatus = "active"
    location_id: Optional[str] = None
    location_code: Optional[str] = None
    tbh_budget_id: Optional[str] = None
    tbh_notes: Optional[str] = None

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class Allocation(BaseModel, frozen=True):
    """Portion of one budget assigned to fund one employee."""

    id: str
    employee_id: str
    budget_id: str
    allocated_amount: Amount = 0.0
    fiscal_year_start: RecordDate = None
    fiscal_year_end: RecordDate = None


class Expense(BaseModel, frozen=True):
    """A non-salary charge against one budget."""

    id: str
    budget_id: str
    amount: Amount = 0.0
    category: Optional[str] = None
    month: Optional[str] = Field(default=None, description="Calendar month, YYYY-MM.")


class BudgetCalculation(BaseModel, frozen=True):
    """Precomputed per-budget, per-month snapshot. Read-only to this engine."""

    budget_id: str
    calculation_month: Annotated[str, BeforeValidator(_coerce_month)]
    total_wages: Amount = 0.0
    fringe_amount: Amount = 0.0
    total_wages_with_fringe: Amount = 0.0
    indirect_amount: Amount = 0.0
    total_expenses: Amount = 0.0
    remaining_budget: Amount = 0.0

    @model_validator(mode="before")
    @classmethod
    def default_wages_with_fringe(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("total_wages_with_fringe") is None:
            data = dict(data)
            wages = float(coerce_amount(data.get("total_wages")))
            fringe = float(coerce_amount(data.get("fringe_amount")))
            data["total_wages_with_fringe"] = wages + fringe
        return data

    @property
    def month_key(self) -> str:
        """The ``YYYY-MM`` month this snapshot covers."""
        return self.calculation_month[:7]


# ─── Derived results ──────────────────────────────────────────────────────────


class BudgetStatus(BaseModel, frozen=True):
    """
    Spent vs. remaining picture for one budget.

    ``spent`` and ``available`` are truncated to cents; ``remaining`` is their
    signed difference and goes negative when the budget is overspent.
    """

    budget_id: str
    allocated: float
    fringe: float
    expenses: float
    indirect: float
    spent: float
    remaining: float
    available: float
    is_overspent: bool


class UtilizationResult(BaseModel, frozen=True):
    """How much of one employee's salary is covered by allocations."""

    employee_id: str
    total_allocated: float
    utilization_percent: float
    deficit: float
    surplus: float
