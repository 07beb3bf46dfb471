# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation
"""Shared fixtures for budget-reconciler tests."""

from __future__ import annotations

from datetime import date

import pytest

from budget_reconciler.events import EventBus
from budget_reconciler.storage.memory import MemoryRecordStore
from budget_reconciler.types import Allocation, Budget, Employee, Expense


@pytest.fixture
def program_budget() -> Budget:
    """$100k budget with $5k fringe and $2k indirect cost for FY25-26."""
    return Budget(
        id="b-100",
        budget_number="VA-100",
        name="Youth Services",
        total_budget=100_000,
        fringe_benefits_amount=5_000,
        indirect_cost=2_000,
        fiscal_year_start=date(2025, 10, 1),
        fiscal_year_end=date(2026, 9, 30),
        location_id="loc-va",
    )


@pytest.fixture
def program_allocations() -> list[Allocation]:
    """$40k allocated to b-100 across two employees, plus noise on another budget."""
    return [
        Allocation(id="a-1", employee_id="e-1", budget_id="b-100", allocated_amount=25_000),
        Allocation(id="a-2", employee_id="e-2", budget_id="b-100", allocated_amount=15_000),
        Allocation(id="a-3", employee_id="e-1", budget_id="b-200", allocated_amount=9_999),
    ]


@pytest.fixture
def program_expenses() -> list[Expense]:
    """$10k of expenses on b-100, plus noise on another budget."""
    return [
        Expense(id="x-1", budget_id="b-100", amount=6_000, category="SUPPLIES", month="2025-11"),
        Expense(id="x-2", budget_id="b-100", amount=4_000, category="TRAVEL", month="2025-12"),
        Expense(id="x-3", budget_id="b-200", amount=1_234, category="TRAVEL", month="2025-12"),
    ]


@pytest.fixture
def staff() -> list[Employee]:
    return [
        Employee(id="e-1", first_name="Ana", last_name="Ruiz", annual_salary=60_000,
                 location_id="loc-va", location_code="VA", title="Coordinator"),
        Employee(id="e-2", first_name="Ben", last_name="Okafor", annual_salary=50_000,
                 location_id="loc-md", location_code="MD", title="Analyst"),
        Employee(id="e-3", first_name="Cleo", last_name="Park", annual_salary=80_000,
                 location_id=None, title="Director"),
    ]


@pytest.fixture
def bus() -> EventBus:
    return EventBus()


@pytest.fixture
def store(bus: EventBus) -> MemoryRecordStore:
    """An empty in-memory store publishing on ``bus``."""
    return MemoryRecordStore(bus=bus)
