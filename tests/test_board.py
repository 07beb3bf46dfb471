# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation
"""Tests for BudgetBoard refresh-on-write behaviour and derived views."""

from __future__ import annotations

from datetime import date

import pytest

from budget_reconciler.board import BudgetBoard
from budget_reconciler.config import EngineConfig
from budget_reconciler.events import EventBus
from budget_reconciler.storage.memory import MemoryRecordStore
from budget_reconciler.types import Allocation, Budget, BudgetCalculation, Employee, Expense


@pytest.fixture
def seeded(store: MemoryRecordStore, program_budget, staff) -> MemoryRecordStore:
    store.save_budget(program_budget)
    store.save_budget(Budget(id="b-200", budget_number="MD-200", total_budget=20_000))
    for employee in staff:
        store.save_employee(employee)
    store.save_allocation(
        Allocation(id="a-1", employee_id="e-1", budget_id="b-100", allocated_amount=25_000)
    )
    return store


@pytest.fixture
def board(seeded: MemoryRecordStore, bus: EventBus) -> BudgetBoard:
    board = BudgetBoard(seeded, bus=bus)
    yield board
    board.close()


class TestBudgetBoardRefresh:
    def test_initial_fetch(self, board: BudgetBoard) -> None:
        assert board.refresh_count == 1
        assert [b.id for b in board.budgets] == ["b-100", "b-200"]
        assert len(board.employees) == 3
        assert len(board.allocations) == 1

    def test_allocation_write_updates_status(self, board: BudgetBoard, seeded: MemoryRecordStore) -> None:
        assert board.status("b-100").remaining == 68_000.0
        seeded.save_allocation(
            Allocation(id="a-2", employee_id="e-2", budget_id="b-100", allocated_amount=15_000)
        )
        assert board.refresh_count == 2
        assert board.status("b-100").remaining == 53_000.0

    def test_expense_delete_updates_status(self, board: BudgetBoard, seeded: MemoryRecordStore) -> None:
        seeded.save_expense(Expense(id="x-1", budget_id="b-100", amount=3_000))
        assert board.status("b-100").expenses == 3_000.0
        seeded.delete_expense("x-1")
        assert board.status("b-100").expenses == 0.0

    def test_close_stops_refreshing(self, board: BudgetBoard, seeded: MemoryRecordStore) -> None:
        board.close()
        seeded.save_expense(Expense(id="x-1", budget_id="b-100", amount=3_000))
        assert board.refresh_count == 1
        assert board.expenses == []
        board.refresh()
        assert len(board.expenses) == 1

    def test_board_without_bus_only_refreshes_on_demand(self, seeded: MemoryRecordStore) -> None:
        board = BudgetBoard(seeded)
        seeded.save_expense(Expense(id="x-1", budget_id="b-100", amount=3_000))
        assert board.expenses == []
        board.refresh()
        assert board.refresh_count == 2

    def test_collections_are_copies(self, board: BudgetBoard) -> None:
        board.budgets.clear()
        assert len(board.budgets) == 2


class TestBudgetBoardViews:
    def test_unknown_budget_raises_key_error(self, board: BudgetBoard) -> None:
        with pytest.raises(KeyError):
            board.status("b-404")

    def test_statuses_follow_budget_order(self, board: BudgetBoard) -> None:
        assert [s.budget_id for s in board.statuses()] == ["b-100", "b-200"]

    def test_utilizations_track_new_allocations(self, board: BudgetBoard, seeded: MemoryRecordStore) -> None:
        before = {u.employee_id: u for u in board.utilizations()}
        assert before["e-1"].total_allocated == 25_000.0
        seeded.save_allocation(
            Allocation(id="a-9", employee_id="e-1", budget_id="b-200", allocated_amount=35_000)
        )
        after = {u.employee_id: u for u in board.utilizations()}
        assert after["e-1"].utilization_percent == 100.0

    def test_tbh_candidates_and_placements(self, board: BudgetBoard, seeded: MemoryRecordStore) -> None:
        assert [c.budget.id for c in board.tbh_candidates()] == ["b-100"]
        assert board.tbh_candidates(threshold=70_000) == []

        seeded.save_employee(
            Employee(id="e-9", first_name="TBH - Analyst", status="tbh", tbh_budget_id="b-200")
        )
        [placement] = board.tbh_placements()
        assert placement.can_fund is True
        assert placement.budget.id == "b-200"

    def test_config_threshold_is_used(self, seeded: MemoryRecordStore) -> None:
        board = BudgetBoard(seeded, config=EngineConfig(tbh_threshold=10_000))
        assert [c.budget.id for c in board.tbh_candidates()] == ["b-100", "b-200"]

    def test_fiscal_views(self, board: BudgetBoard, seeded: MemoryRecordStore) -> None:
        today = date(2026, 1, 15)
        assert board.fiscal_months(today).keys()[0] == "2025-10"
        assert [y.name for y in board.fiscal_years(today)] == ["FY25-26"]

        seeded.add_calculation(
            BudgetCalculation(budget_id="b-100", calculation_month="2025-10-01",
                              total_wages=4_000, fringe_amount=1_000)
        )
        board.refresh()
        breakdown = board.month_breakdown(today)
        assert breakdown.months[0].totals.spent == 5_000.0
        assert [s.total_wages for s in board.summaries("2025-10")] == [4_000.0, 0.0]
