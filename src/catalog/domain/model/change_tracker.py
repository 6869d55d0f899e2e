"""Dirty-field bookkeeping for the Product aggregate.

The tracker lives only for the lifetime of one in-memory aggregate
instance (load -> mutate -> commit) and is never persisted. The
repository reads it to build an update restricted to changed columns.
"""

from __future__ import annotations

from enum import Enum


class Field(Enum):
    NAME = "name"
    DESCRIPTION = "description"
    CATEGORY = "category"
    BASE_PRICE = "base_price"
    DISCOUNT = "discount"
    STATUS = "status"
    ARCHIVED_AT = "archived_at"


class ChangeTracker:

    def __init__(self) -> None:
        self._dirty: set[Field] = set()

    def mark_dirty(self, field: Field) -> None:
        self._dirty.add(field)

    def is_dirty(self, field: Field) -> bool:
        return field in self._dirty

    def has_changes(self) -> bool:
        return bool(self._dirty)

    def dirty_fields(self) -> frozenset[Field]:
        return frozenset(self._dirty)

    def reset(self) -> None:
        self._dirty.clear()

    def __repr__(self) -> str:
        names = sorted(f.value for f in self._dirty)
        return f"ChangeTracker(dirty={names})"
