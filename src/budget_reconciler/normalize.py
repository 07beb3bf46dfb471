# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

"""
Canonical handling of currency values.

Stored amounts may arrive absent or null from the record store; those are
read as zero. Computed totals are truncated (never rounded) to whole cents so
that ``spent + remaining`` reproduces the truncated budget total exactly.
"""

from __future__ import annotations

import math
from typing import Annotated, Any

from pydantic import BeforeValidator


def coerce_amount(value: Any) -> Any:
    """Read a stored currency field, substituting 0.0 when it is absent."""
    if value is None:
        return 0.0
    if isinstance(value, str) and not value.strip():
        return 0.0
    return value


def truncate_currency(value: float) -> float:
    """
    Truncate to two decimal places, rounding down.

    ``value * 100`` is rounded to six places before flooring so that amounts
    already holding whole cents (``1.15 * 100 == 114.99999999999999``) keep
    them. Only aggregated totals and ``total_budget`` go through this;
    individual line items are summed untouched.
    """
    return math.floor(round(value * 100, 6)) / 100


def sum_amounts(values: Any) -> float:
    """Sum an iterable of already-normalized amounts, starting from 0.0."""
    total = 0.0
    for value in values:
        total += value
    return total


# Currency field type: absent/None/blank become 0.0 before float validation.
Amount = Annotated[float, BeforeValidator(coerce_amount)]
