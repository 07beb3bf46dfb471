# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

from __future__ import annotations

from abc import ABC, abstractmethod

from budget_reconciler.types import Allocation, Budget, BudgetCalculation, Employee, Expense


class RecordSource(ABC):
    """
    Read contract the engine expects from the record store.

    Implementors wrap whatever holds the persisted records (a hosted Postgres
    API, an ORM session, fixtures). Every method returns the complete current
    collection; filtering and aggregation happen in the engine. Writers are
    expected to publish an EntityChanged event after each successful write so
    consumers know to read again.
    """

    @abstractmethod
    def list_budgets(self) -> list[Budget]:
        ...

    @abstractmethod
    def list_employees(self) -> list[Employee]:
        ...

    @abstractmethod
    def list_allocations(self) -> list[Allocation]:
        ...

    @abstractmethod
    def list_expenses(self) -> list[Expense]:
        ...

    @abstractmethod
    def list_calculations(self) -> list[BudgetCalculation]:
        ...
