# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from budget_reconciler.breakdown import MonthBreakdown, month_breakdown
from budget_reconciler.config import DEFAULT_CONFIG, EngineConfig
from budget_reconciler.events import EntityChanged, EventBus, Subscription
from budget_reconciler.fiscal import FiscalMonthSeries, FiscalYear, fiscal_months, fiscal_year_catalog
from budget_reconciler.ledger import ALL_MONTHS, BudgetSummary, aggregate_all, aggregate_budget_status, summarize_budget
from budget_reconciler.storage.interface import RecordSource
from budget_reconciler.tbh import TbhCandidate, TbhPlacement, match_tbh_positions, rank_tbh_candidates
from budget_reconciler.types import (
    Allocation,
    Budget,
    BudgetCalculation,
    BudgetStatus,
    Employee,
    Expense,
    UtilizationResult,
)
from budget_reconciler.utilization import compute_all_utilizations

logger = logging.getLogger("budget_reconciler.board")


class BudgetBoard:
    """
    Current collections plus the derived views computed from them.

    Design contract
    ---------------
    - Collections are read from the RecordSource at construction and again
      whenever the bus reports a change. There is no polling.
    - Derived values are never cached. Every query method recomputes from
      the collections held at the time of the call.
    - ``close()`` cancels the bus subscription; the board keeps its last
      collections but no longer refreshes.

    Usage
    -----
    ::

        bus = EventBus()
        store = MemoryRecordStore(bus=bus)
        board = BudgetBoard(store, bus=bus)

        store.save_allocation(Allocation(id="a-1", employee_id="e-1",
                                         budget_id="b-1", allocated_amount=40_000))
        board.status("b-1").remaining   # reflects the new allocation
    """

    def __init__(
        self,
        source: RecordSource,
        bus: Optional[EventBus] = None,
        config: Optional[EngineConfig] = None,
    ) -> None:
        self._source = source
        self._config = config if config is not None else DEFAULT_CONFIG

        self._budgets: list[Budget] = []
        self._employees: list[Employee] = []
        self._allocations: list[Allocation] = []
        self._expenses: list[Expense] = []
        self._calculations: list[BudgetCalculation] = []
        self._refresh_count = 0

        self.refresh()
        self._subscription: Optional[Subscription] = (
            bus.subscribe(self._on_change) if bus is not None else None
        )

    # ─── Refresh ──────────────────────────────────────────────────────────────

    def refresh(self) -> None:
        """Refetch every collection from the source."""
        self._budgets = self._source.list_budgets()
        self._employees = self._source.list_employees()
        self._allocations = self._source.list_allocations()
        self._expenses = self._source.list_expenses()
        self._calculations = self._source.list_calculations()
        self._refresh_count += 1
        logger.debug(
            "board_refreshed",
            extra={
                "budgets": len(self._budgets),
                "employees": len(self._employees),
                "allocations": len(self._allocations),
                "expenses": len(self._expenses),
            },
        )

    @property
    def refresh_count(self) -> int:
        return self._refresh_count

    def close(self) -> None:
        if self._subscription is not None:
            self._subscription.cancel()
            self._subscription = None

    def _on_change(self, event: EntityChanged) -> None:
        logger.info(
            "board_refresh_on_change",
            extra={"entity": event.entity, "action": event.action, "entity_id": event.entity_id},
        )
        self.refresh()

    # ─── Collections ──────────────────────────────────────────────────────────

    @property
    def budgets(self) -> list[Budget]:
        return list(self._budgets)

    @property
    def employees(self) -> list[Employee]:
        return list(self._employees)

    @property
    def allocations(self) -> list[Allocation]:
        return list(self._allocations)

    @property
    def expenses(self) -> list[Expense]:
        return list(self._expenses)

    # ─── Derived views ────────────────────────────────────────────────────────

    def statuses(self) -> list[BudgetStatus]:
        return aggregate_all(self._budgets, self._allocations, self._expenses)

    def status(self, budget_id: str) -> BudgetStatus:
        """
        Status of one budget.

        Raises KeyError if the budget is not in the current collection.
        """
        budget = next((b for b in self._budgets if b.id == budget_id), None)
        if budget is None:
            raise KeyError(f"No budget with id {budget_id!r} in the current collection.")
        return aggregate_budget_status(budget, self._allocations, self._expenses)

    def utilizations(self) -> list[UtilizationResult]:
        return compute_all_utilizations(self._employees, self._allocations)

    def tbh_candidates(self, threshold: float | None = None) -> list[TbhCandidate]:
        return rank_tbh_candidates(
            self._budgets, self._allocations, self._expenses, threshold, self._config
        )

    def tbh_placements(self, threshold: float | None = None) -> list[TbhPlacement]:
        return match_tbh_positions(
            self._employees,
            self._budgets,
            self._allocations,
            self._expenses,
            threshold,
            self._config,
        )

    def summaries(self, month: str = ALL_MONTHS) -> list[BudgetSummary]:
        return [summarize_budget(budget, self._calculations, month) for budget in self._budgets]

    def fiscal_months(self, today: date | None = None) -> FiscalMonthSeries:
        """Months of the fiscal year of the first budget, else the current fiscal year."""
        start = self._budgets[0].fiscal_year_start if self._budgets else None
        return fiscal_months(start, today=today, start_month=self._config.fiscal_year_start_month)

    def month_breakdown(self, today: date | None = None) -> MonthBreakdown:
        return month_breakdown(
            self._budgets,
            self._calculations,
            today=today,
            start_month=self._config.fiscal_year_start_month,
        )

    def fiscal_years(self, today: date | None = None) -> list[FiscalYear]:
        return fiscal_year_catalog(self._budgets, today)
