# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

"""
Generic filter and sort engine for reporting views.

A view declares predicates (all AND-ed) and a registry of sort keys. Records
are filtered, then stably sorted on the single active key. Text keys compare
with a locale-style collation key; numeric keys compare as floats.
"""

from __future__ import annotations

import unicodedata
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Generic, Literal, Optional, Protocol, TypeVar

from pydantic import BaseModel

from budget_reconciler.config import DEFAULT_CONFIG
from budget_reconciler.errors import UnknownSortKeyError

R = TypeVar("R")
R_contra = TypeVar("R_contra", contravariant=True)

SortDirection = Literal["asc", "desc"]
SortKind = Literal["text", "numeric"]


# ─── Predicates ───────────────────────────────────────────────────────────────


class RecordPredicate(Protocol[R_contra]):
    def matches(self, record: R_contra) -> bool:
        ...


@dataclass(frozen=True)
class SearchPredicate(Generic[R]):
    """Case-insensitive substring match on a display string. Empty query matches all."""

    query: str
    text: Callable[[R], Optional[str]]

    def matches(self, record: R) -> bool:
        if not self.query:
            return True
        return self.query.casefold() in (self.text(record) or "").casefold()


@dataclass(frozen=True)
class CategoryPredicate(Generic[R]):
    """
    Exact match on a categorical field.

    ``wildcard`` (``"all"``) disables the filter. ``null_sentinel`` selects
    records whose field is null. With ``null_inclusive`` a null field means
    "applies to every category", so such records also match any concrete
    value.
    """

    value: Optional[str]
    field: Callable[[R], Optional[str]]
    null_sentinel: Optional[str] = None
    null_inclusive: bool = False
    wildcard: str = DEFAULT_CONFIG.wildcard

    def matches(self, record: R) -> bool:
        if self.value is None or self.value == "" or self.value == self.wildcard:
            return True
        actual = self.field(record)
        if self.null_sentinel is not None and self.value == self.null_sentinel:
            return not actual
        if not actual:
            return self.null_inclusive
        return actual == self.value


@dataclass(frozen=True)
class Predicate(Generic[R]):
    """Arbitrary boolean test on a record."""

    test: Callable[[R], bool]

    def matches(self, record: R) -> bool:
        return bool(self.test(record))


# ─── Sorting ──────────────────────────────────────────────────────────────────


def collation_key(text: Optional[str]) -> tuple[str, str, str]:
    """
    Locale-style comparison key for display text.

    Compares base letters first (accents and case ignored), then accents,
    then case with lower case ahead of upper case.
    """
    text = text or ""
    decomposed = unicodedata.normalize("NFKD", text)
    base = "".join(char for char in decomposed if not unicodedata.combining(char))
    return (base.casefold(), decomposed.casefold(), text.swapcase())


def numeric_key(value: Any) -> float:
    if value is None:
        return 0.0
    return float(value)


@dataclass(frozen=True)
class SortKey(Generic[R]):
    """A named, comparable projection of a record."""

    name: str
    projection: Callable[[R], Any]
    kind: SortKind = "text"

    def sort_value(self, record: R) -> Any:
        value = self.projection(record)
        if self.kind == "numeric":
            return numeric_key(value)
        return collation_key(value)


class SortState(BaseModel, frozen=True):
    """
    The active sort of a view.

    ``toggle`` mirrors clicking a column header: the active key flips
    direction, any other key becomes active in ascending order.
    """

    key: Optional[str] = None
    direction: SortDirection = "asc"

    def toggle(self, key: str) -> SortState:
        if key == self.key:
            return SortState(key=key, direction="desc" if self.direction == "asc" else "asc")
        return SortState(key=key, direction="asc")


def resolve_sort_key(
    sort_key: SortKey[R] | str | None,
    sort_keys: Mapping[str, SortKey[R]] | None = None,
) -> SortKey[R] | None:
    """Look up a sort key by name. Raises UnknownSortKeyError for undeclared names."""
    if sort_key is None or isinstance(sort_key, SortKey):
        return sort_key
    registry = sort_keys or {}
    if sort_key not in registry:
        raise UnknownSortKeyError(sort_key, list(registry))
    return registry[sort_key]


def filter_records(
    records: Iterable[R],
    predicates: Sequence[RecordPredicate[R]] = (),
) -> list[R]:
    """Records matching every predicate, in input order."""
    return [record for record in records if all(p.matches(record) for p in predicates)]


def sort_records(
    records: Iterable[R],
    sort_key: SortKey[R],
    direction: SortDirection = "asc",
) -> list[R]:
    """Stable sort; equal keys keep their input order in either direction."""
    return sorted(records, key=sort_key.sort_value, reverse=direction == "desc")


def filter_and_sort(
    records: Iterable[R],
    predicates: Sequence[RecordPredicate[R]] = (),
    sort_key: SortKey[R] | str | None = None,
    direction: SortDirection = "asc",
    sort_keys: Mapping[str, SortKey[R]] | None = None,
) -> list[R]:
    """
    Filter ``records`` by all ``predicates`` and sort on ``sort_key``.

    ``sort_key`` may be a SortKey or the name of one declared in
    ``sort_keys``. With no sort key, matching records keep input order.
    Returns a new list; the input is not modified.
    """
    key = resolve_sort_key(sort_key, sort_keys)
    filtered = filter_records(records, predicates)
    if key is None:
        return filtered
    return sort_records(filtered, key, direction)
