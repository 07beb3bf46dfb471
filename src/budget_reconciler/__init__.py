# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

"""
budget-reconciler — spent vs. remaining, salary coverage and hiring capacity
for program budgets.

Quick start::

    from budget_reconciler import Allocation, Budget, aggregate_budget_status

    budget = Budget(id="b-1", budget_number="VA-100", total_budget=100_000,
                    fringe_benefits_amount=5_000, indirect_cost=2_000)
    allocations = [Allocation(id="a-1", employee_id="e-1", budget_id="b-1",
                              allocated_amount=40_000)]

    status = aggregate_budget_status(budget, allocations, expenses=[])
    print(status.spent, status.remaining, status.is_overspent)
"""

from budget_reconciler.board import BudgetBoard
from budget_reconciler.breakdown import MonthBreakdown, MonthTotals, SpendTotals, month_breakdown
from budget_reconciler.config import DEFAULT_CONFIG, EngineConfig
from budget_reconciler.errors import (
    BudgetReconcilerError,
    ConfigurationError,
    UnknownSortKeyError,
)
from budget_reconciler.events import EntityChanged, EventBus, Subscription
from budget_reconciler.fiscal import (
    FiscalMonth,
    FiscalMonthSeries,
    FiscalYear,
    current_fiscal_year_start,
    fiscal_months,
    fiscal_year_catalog,
    fiscal_year_name,
    next_fiscal_year,
)
from budget_reconciler.ledger import (
    BudgetSummary,
    aggregate_all,
    aggregate_budget_status,
    summarize_budget,
)
from budget_reconciler.normalize import Amount, coerce_amount, truncate_currency
from budget_reconciler.query import (
    CategoryPredicate,
    Predicate,
    SearchPredicate,
    SortKey,
    SortState,
    filter_and_sort,
)
from budget_reconciler.storage import MemoryRecordStore, RecordSource
from budget_reconciler.tbh import (
    TbhCandidate,
    TbhPlacement,
    is_tbh,
    match_tbh_positions,
    rank_tbh_candidates,
    resolve_tbh_budget,
)
from budget_reconciler.types import (
    Allocation,
    Budget,
    BudgetCalculation,
    BudgetStatus,
    Employee,
    EmployeeStatus,
    Expense,
    UtilizationResult,
)
from budget_reconciler.utilization import (
    SalaryTotals,
    compute_all_utilizations,
    compute_utilization,
    salary_totals_by_location,
)

__all__ = [
    # Consumer
    "BudgetBoard",
    # Records
    "Budget",
    "Employee",
    "EmployeeStatus",
    "Allocation",
    "Expense",
    "BudgetCalculation",
    # Derived results
    "BudgetStatus",
    "UtilizationResult",
    "BudgetSummary",
    "SalaryTotals",
    "FiscalMonth",
    "FiscalMonthSeries",
    "FiscalYear",
    "MonthBreakdown",
    "MonthTotals",
    "SpendTotals",
    "TbhCandidate",
    "TbhPlacement",
    # Config and errors
    "EngineConfig",
    "DEFAULT_CONFIG",
    "BudgetReconcilerError",
    "UnknownSortKeyError",
    "ConfigurationError",
    # Events and storage
    "EventBus",
    "EntityChanged",
    "Subscription",
    "RecordSource",
    "MemoryRecordStore",
    # Engine functions
    "Amount",
    "coerce_amount",
    "truncate_currency",
    "aggregate_budget_status",
    "aggregate_all",
    "summarize_budget",
    "compute_utilization",
    "compute_all_utilizations",
    "salary_totals_by_location",
    "fiscal_months",
    "current_fiscal_year_start",
    "next_fiscal_year",
    "fiscal_year_name",
    "fiscal_year_catalog",
    "month_breakdown",
    "rank_tbh_candidates",
    "resolve_tbh_budget",
    "match_tbh_positions",
    "is_tbh",
    # Filter/sort
    "SearchPredicate",
    "CategoryPredicate",
    "Predicate",
    "SortKey",
    "SortState",
    "filter_and_sort",
]
