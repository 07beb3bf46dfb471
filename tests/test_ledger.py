# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation
"""Tests for normalization, the ledger aggregator and budget summaries."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from budget_reconciler.ledger import (
    aggregate_all,
    aggregate_budget_status,
    summarize_budget,
)
from budget_reconciler.normalize import coerce_amount, truncate_currency
from budget_reconciler.types import Allocation, Budget, BudgetCalculation, Expense


# ---------------------------------------------------------------------------
# TestNormalize
# ---------------------------------------------------------------------------


class TestNormalize:
    def test_none_becomes_zero(self) -> None:
        assert coerce_amount(None) == 0.0

    def test_blank_string_becomes_zero(self) -> None:
        assert coerce_amount("  ") == 0.0

    def test_truncate_drops_fractional_cents_without_rounding(self) -> None:
        assert truncate_currency(10.006) == 10.0
        assert truncate_currency(99.999) == 99.99

    def test_truncate_floors_negative_values(self) -> None:
        assert truncate_currency(-1.005) == -1.01

    @pytest.mark.parametrize("amount", [1.15, 4.35, 0.29, 100_000.29, 0.07])
    def test_truncate_keeps_whole_cents(self, amount: float) -> None:
        assert truncate_currency(amount) == amount

    def test_null_currency_fields_are_zero_on_ingestion(self) -> None:
        budget = Budget(
            id="b-1",
            total_budget=None,
            fringe_benefits_amount=None,
            indirect_cost=None,
        )
        assert budget.total_budget == 0.0
        assert budget.fringe_benefits_amount == 0.0
        assert budget.indirect_cost == 0.0

    def test_numeric_strings_are_coerced(self) -> None:
        allocation = Allocation(
            id="a-1", employee_id="e-1", budget_id="b-1", allocated_amount="1500.50"
        )
        assert allocation.allocated_amount == 1500.5

    def test_fiscal_end_must_follow_start(self) -> None:
        with pytest.raises(ValidationError):
            Budget(id="b-1", fiscal_year_start="2025-10-01", fiscal_year_end="2025-10-01")

    def test_fiscal_dates_accept_timestamps(self) -> None:
        budget = Budget(
            id="b-1",
            fiscal_year_start="2025-10-01T00:00:00+00:00",
            fiscal_year_end="2026-09-30T00:00:00+00:00",
        )
        assert budget.fiscal_year_start.isoformat() == "2025-10-01"

    def test_calculation_defaults_wages_with_fringe(self) -> None:
        calc = BudgetCalculation(
            budget_id="b-1", calculation_month="2025-10-01", total_wages=5000, fringe_amount=1000
        )
        assert calc.total_wages_with_fringe == 6000.0
        assert calc.month_key == "2025-10"


# ---------------------------------------------------------------------------
# TestAggregateBudgetStatus
# ---------------------------------------------------------------------------


class TestAggregateBudgetStatus:
    def test_combines_allocations_fringe_expenses_and_indirect(
        self, program_budget, program_allocations, program_expenses
    ) -> None:
        status = aggregate_budget_status(program_budget, program_allocations, program_expenses)
        assert status.allocated == 40_000.0
        assert status.expenses == 10_000.0
        assert status.spent == 57_000.0
        assert status.remaining == 43_000.0
        assert status.available == 100_000.0
        assert status.is_overspent is False

    def test_overspent_budget_has_negative_remaining(self) -> None:
        budget = Budget(id="b-1", total_budget=50_000, fringe_benefits_amount=2_000)
        allocations = [
            Allocation(id="a-1", employee_id="e-1", budget_id="b-1", allocated_amount=50_000)
        ]
        status = aggregate_budget_status(budget, allocations, [])
        assert status.spent == 52_000.0
        assert status.remaining == -2_000.0
        assert status.is_overspent is True

    def test_budget_without_activity_keeps_full_total(self) -> None:
        budget = Budget(id="b-1", total_budget=75_000.25)
        status = aggregate_budget_status(budget, [], [])
        assert status.spent == 0.0
        assert status.remaining == 75_000.25

    def test_spent_and_total_are_truncated_before_subtraction(self) -> None:
        budget = Budget(id="b-1", total_budget=100.999)
        allocations = [
            Allocation(id="a-1", employee_id="e-1", budget_id="b-1", allocated_amount=10.005),
            Allocation(id="a-2", employee_id="e-2", budget_id="b-1", allocated_amount=0.001),
        ]
        status = aggregate_budget_status(budget, allocations, [])
        assert status.spent == 10.0
        assert status.available == 100.99
        assert status.spent + status.remaining == pytest.approx(status.available)

    @pytest.mark.parametrize("total", [1.15, 4.35, 0.29, 100_000.29])
    def test_idle_budget_with_cents_keeps_full_total(self, total: float) -> None:
        status = aggregate_budget_status(Budget(id="b-1", total_budget=total), [], [])
        assert status.available == total
        assert status.remaining == total

    def test_allocation_with_cents_is_not_shaved(self) -> None:
        budget = Budget(id="b-1", total_budget=1_000)
        allocations = [
            Allocation(id="a-1", employee_id="e-1", budget_id="b-1", allocated_amount=0.29)
        ]
        status = aggregate_budget_status(budget, allocations, [])
        assert status.spent == 0.29
        assert status.remaining == pytest.approx(999.71)

    def test_negative_amounts_are_summed_not_rejected(self) -> None:
        budget = Budget(id="b-1", total_budget=1_000)
        expenses = [Expense(id="x-1", budget_id="b-1", amount=-200)]
        status = aggregate_budget_status(budget, [], expenses)
        assert status.spent == -200.0
        assert status.remaining == 1_200.0

    def test_exactly_balanced_budget_is_not_overspent(self) -> None:
        budget = Budget(id="b-1", total_budget=1_000, indirect_cost=1_000)
        status = aggregate_budget_status(budget, [], [])
        assert status.remaining == 0.0
        assert status.is_overspent is False

    def test_repeated_calls_give_identical_results(
        self, program_budget, program_allocations, program_expenses
    ) -> None:
        first = aggregate_budget_status(program_budget, program_allocations, program_expenses)
        second = aggregate_budget_status(program_budget, program_allocations, program_expenses)
        assert first == second

    def test_aggregate_all_preserves_input_order(self, program_allocations, program_expenses) -> None:
        budgets = [Budget(id="b-200", total_budget=20_000), Budget(id="b-100", total_budget=100_000)]
        statuses = aggregate_all(budgets, program_allocations, program_expenses)
        assert [s.budget_id for s in statuses] == ["b-200", "b-100"]
        assert statuses[0].spent == 11_233.0


# ---------------------------------------------------------------------------
# TestSummarizeBudget
# ---------------------------------------------------------------------------


class TestSummarizeBudget:
    @pytest.fixture
    def calculations(self) -> list[BudgetCalculation]:
        return [
            BudgetCalculation(
                budget_id="b-100", calculation_month="2025-10-01", total_wages=8_000,
                fringe_amount=2_000, indirect_amount=500, total_expenses=1_500,
                remaining_budget=88_000,
            ),
            BudgetCalculation(
                budget_id="b-100", calculation_month="2025-11-01", total_wages=8_000,
                fringe_amount=2_000, indirect_amount=500, total_expenses=500,
                remaining_budget=77_000,
            ),
            BudgetCalculation(
                budget_id="b-999", calculation_month="2025-10-01", total_wages=99_999,
            ),
        ]

    def test_all_months_sums_every_snapshot(self, program_budget, calculations) -> None:
        summary = summarize_budget(program_budget, calculations)
        assert summary.total_wages == 16_000.0
        assert summary.total_wages_with_fringe == 20_000.0
        assert summary.total_expenses == 2_000.0
        assert summary.indirect == 1_000.0
        assert summary.remaining == 77_000.0

    def test_single_month_reports_stored_snapshot(self, program_budget, calculations) -> None:
        summary = summarize_budget(program_budget, calculations, month="2025-11")
        assert summary.total_expenses == 500.0
        assert summary.remaining == 77_000.0

    def test_month_without_snapshot_leaves_whole_budget(self, program_budget, calculations) -> None:
        summary = summarize_budget(program_budget, calculations, month="2026-03")
        assert summary.total_wages == 0.0
        assert summary.remaining == 100_000.0
