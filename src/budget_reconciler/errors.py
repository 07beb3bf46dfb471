# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation
from __future__ import annotations


class BudgetReconcilerError(Exception):
    """Base class for all budget-reconciler errors."""

    def __init__(self, message: str, code: str = "RECONCILER_ERROR") -> None:
        super().__init__(message)
        self.code = code
        self.message = message

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"


class UnknownSortKeyError(BudgetReconcilerError):
    """
    Raised when a view is asked to sort by a key it does not declare.

    Attributes:
        key: The sort key that was requested.
        available: The sort keys the view does declare.
    """

    def __init__(self, key: str, available: list[str]) -> None:
        super().__init__(
            f"Unknown sort key '{key}'. Valid keys: {sorted(available)}.",
            code="UNKNOWN_SORT_KEY",
        )
        self.key = key
        self.available = available


class ConfigurationError(BudgetReconcilerError):
    """Raised when the engine is misconfigured."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code="CONFIGURATION_ERROR")
