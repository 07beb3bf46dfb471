# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation
from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, Field


class EngineConfig(BaseModel, frozen=True):
    """
    Configuration shared by the reconciliation functions and BudgetBoard.

    All fields are optional. The defaults reproduce the behaviour of the
    budget dashboard: a $50k hiring threshold, a $100k assumed cost per hire
    and a fiscal year that opens on October 1.

    Attributes:
        tbh_threshold: A budget is a TBH candidate only when its remaining
            amount is strictly greater than this value.
        assumed_hire_cost: Average loaded cost of one new hire, used to
            estimate how many positions a budget could still fund.
        fiscal_year_start_month: Calendar month (1-12) on which fiscal years
            begin.
        wildcard: Filter value meaning "no filter".
        null_location_sentinel: Location filter value that selects records
            with no location (staff who work across every location).

    Example::

        config = EngineConfig(tbh_threshold=75_000.0)
        board = BudgetBoard(store, bus=bus, config=config)
    """

    tbh_threshold: float = 50_000.0
    assumed_hire_cost: Annotated[float, Field(gt=0)] = 100_000.0
    fiscal_year_start_month: Annotated[int, Field(ge=1, le=12)] = 10
    wildcard: Annotated[str, Field(min_length=1)] = "all"
    null_location_sentinel: Annotated[str, Field(min_length=1)] = "admin"


DEFAULT_CONFIG = EngineConfig()
