# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

"""
basic_reconciliation.py

Demonstrates the refresh-on-write loop:
  1. Seed an in-memory store wired to an event bus.
  2. Build a board over it.
  3. Write allocations and expenses; the board refreshes on each write.
  4. Print budget status, staff utilization and TBH capacity.

Run with:  python examples/basic_reconciliation.py
(from the repository root with budget-reconciler installed)
"""

import logging

from budget_reconciler import (
    Allocation,
    Budget,
    BudgetBoard,
    Employee,
    EventBus,
    Expense,
    MemoryRecordStore,
)

logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s %(message)s")

# ─── Setup ────────────────────────────────────────────────────────────────────

bus = EventBus()
store = MemoryRecordStore(bus=bus)

store.save_budget(Budget(id="b-1", budget_number="VA-100", name="Youth Services",
                         total_budget=180_000, fringe_benefits_amount=9_000,
                         indirect_cost=4_000, fiscal_year_start="2025-10-01",
                         fiscal_year_end="2026-09-30"))
store.save_budget(Budget(id="b-2", budget_number="MD-200", name="Family Support",
                         total_budget=60_000))
store.save_employee(Employee(id="e-1", first_name="Ana", last_name="Ruiz",
                             annual_salary=62_000, location_code="VA"))
store.save_employee(Employee(id="e-2", first_name="TBH - Case Manager",
                             annual_salary=55_000, status="tbh", tbh_budget_id="b-2"))

board = BudgetBoard(store, bus=bus)

# ─── Writes trigger refreshes ─────────────────────────────────────────────────

store.save_allocation(Allocation(id="a-1", employee_id="e-1", budget_id="b-1",
                                 allocated_amount=40_000))
store.save_allocation(Allocation(id="a-2", employee_id="e-1", budget_id="b-2",
                                 allocated_amount=30_000))
store.save_expense(Expense(id="x-1", budget_id="b-2", amount=35_000, category="RENT"))

# ─── Budget status ────────────────────────────────────────────────────────────

print("\n── Budgets ───────────────────────────────────────────")
for budget in board.budgets:
    status = board.status(budget.id)
    flag = "OVERSPENT" if status.is_overspent else ""
    print(f"  {budget.budget_number:<8} spent=${status.spent:>11,.2f}  "
          f"remaining=${status.remaining:>11,.2f}  {flag}")

# ─── Utilization ──────────────────────────────────────────────────────────────

print("\n── Utilization ───────────────────────────────────────")
for result in board.utilizations():
    print(f"  {result.employee_id}: {result.utilization_percent:6.1f}%  "
          f"deficit=${result.deficit:,.2f}  surplus=${result.surplus:,.2f}")

# ─── TBH placement ────────────────────────────────────────────────────────────

print("\n── TBH positions ─────────────────────────────────────")
for placement in board.tbh_placements():
    named = placement.budget.budget_number if placement.budget else "(none)"
    print(f"  {placement.employee.display_name}: budget={named}  can_fund={placement.can_fund}")
    for candidate in placement.alternatives:
        print(f"    alternative {candidate.budget.budget_number}  "
              f"remaining=${candidate.status.remaining:,.2f}  "
              f"hires={candidate.hire_capacity}")

board.close()
