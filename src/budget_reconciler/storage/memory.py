# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

from __future__ import annotations

from collections.abc import Iterable
from typing import Optional, TypeVar

from pydantic import BaseModel

from budget_reconciler.events import ChangeAction, EntityChanged, EntityKind, EventBus
from budget_reconciler.storage.interface import RecordSource
from budget_reconciler.types import Allocation, Budget, BudgetCalculation, Employee, Expense

M = TypeVar("M", bound=BaseModel)


class MemoryRecordStore(RecordSource):
    """
    In-process record store, suitable for tests and single-process demos.

    Every successful save or delete publishes an EntityChanged event on the
    optional bus. Saving a record whose id already exists is an update.
    Reads return copies, so callers cannot mutate stored state.
    """

    def __init__(self, bus: Optional[EventBus] = None) -> None:
        self._bus = bus
        self._budgets: dict[str, Budget] = {}
        self._employees: dict[str, Employee] = {}
        self._allocations: dict[str, Allocation] = {}
        self._expenses: dict[str, Expense] = {}
        self._calculations: list[BudgetCalculation] = []

    # ─── Reads ────────────────────────────────────────────────────────────────

    def list_budgets(self) -> list[Budget]:
        return _copies(self._budgets.values())

    def list_employees(self) -> list[Employee]:
        return _copies(self._employees.values())

    def list_allocations(self) -> list[Allocation]:
        return _copies(self._allocations.values())

    def list_expenses(self) -> list[Expense]:
        return _copies(self._expenses.values())

    def list_calculations(self) -> list[BudgetCalculation]:
        return _copies(self._calculations)

    # ─── Writes ───────────────────────────────────────────────────────────────

    def save_budget(self, budget: Budget) -> None:
        self._save(self._budgets, "budget", budget.id, budget)

    def save_employee(self, employee: Employee) -> None:
        self._save(self._employees, "employee", employee.id, employee)

    def save_allocation(self, allocation: Allocation) -> None:
        self._save(self._allocations, "allocation", allocation.id, allocation)

    def save_expense(self, expense: Expense) -> None:
        self._save(self._expenses, "expense", expense.id, expense)

    def delete_budget(self, budget_id: str) -> bool:
        """
        Remove a budget together with its allocations, expenses and snapshots.

        Returns:
            True if the budget existed and was removed.
        """
        if budget_id not in self._budgets:
            return False
        for allocation_id in [a.id for a in self._allocations.values() if a.budget_id == budget_id]:
            self._delete(self._allocations, "allocation", allocation_id)
        for expense_id in [e.id for e in self._expenses.values() if e.budget_id == budget_id]:
            self._delete(self._expenses, "expense", expense_id)
        self._calculations = [c for c in self._calculations if c.budget_id != budget_id]
        return self._delete(self._budgets, "budget", budget_id)

    def delete_employee(self, employee_id: str) -> bool:
        return self._delete(self._employees, "employee", employee_id)

    def delete_allocation(self, allocation_id: str) -> bool:
        return self._delete(self._allocations, "allocation", allocation_id)

    def delete_expense(self, expense_id: str) -> bool:
        return self._delete(self._expenses, "expense", expense_id)

    def add_calculation(self, calculation: BudgetCalculation) -> None:
        """Store a monthly snapshot. Snapshots are derived data and publish nothing."""
        self._calculations.append(calculation.model_copy(deep=True))

    # ─── Private helpers ──────────────────────────────────────────────────────

    def _save(self, table: dict[str, M], entity: EntityKind, record_id: str, record: M) -> None:
        action: ChangeAction = "updated" if record_id in table else "created"
        table[record_id] = record.model_copy(deep=True)
        self._publish(entity, action, record_id)

    def _delete(self, table: dict[str, M], entity: EntityKind, record_id: str) -> bool:
        if table.pop(record_id, None) is None:
            return False
        self._publish(entity, "deleted", record_id)
        return True

    def _publish(self, entity: EntityKind, action: ChangeAction, record_id: str) -> None:
        if self._bus is not None:
            self._bus.publish(EntityChanged(entity=entity, action=action, entity_id=record_id))


def _copies(records: Iterable[M]) -> list[M]:
    return [record.model_copy(deep=True) for record in records]
