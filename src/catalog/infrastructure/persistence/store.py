"""Storage backend contract: read by key, scan a table, apply atomically.

``Store.apply_atomic`` validates and applies every operation to a copy
of the tables and only hands that copy to ``_save`` once all of them
succeed, so a failing batch leaves storage untouched.
Backends that can be shared between processes hold an exclusive lock
from load to save via ``_locked``.
"""

from __future__ import annotations

import copy
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Any, Iterable, Iterator

from catalog.domain.exceptions import StorageError
from catalog.domain.repository.operations import Insert, Operation, Update
from catalog.infrastructure.persistence.schema import PRIMARY_KEYS

Row = dict[str, Any]
Tables = dict[str, dict[str, Row]]


class Store(ABC):

    # --- Reads ----------------------------------------------------------------

    def get(self, table: str, key: str) -> Row | None:
        """Return a copy of one row, or None."""
        row = self._table(self._load(), table).get(key)
        return dict(row) if row is not None else None

    def rows(self, table: str) -> list[Row]:
        """Return copies of every row in ``table``."""
        return [dict(row) for row in self._table(self._load(), table).values()]

    # --- Writes ---------------------------------------------------------------

    def apply_atomic(self, operations: Iterable[Operation]) -> None:
        operations = list(operations)
        if not operations:
            return

        with self._locked():
            tables = copy.deepcopy(self._load())
            for op in operations:
                self._apply_one(tables, op)
            self._save(tables)

    # --- Backend hooks --------------------------------------------------------

    @abstractmethod
    def _load(self) -> Tables:
        """Return the current tables. Callers must not mutate the result."""

    @abstractmethod
    def _save(self, tables: Tables) -> None:
        """Replace the stored tables with ``tables`` in one step."""

    @contextmanager
    def _locked(self) -> Iterator[None]:
        """Exclude other writers for the duration of one batch."""
        yield

    # --- Internal helpers -----------------------------------------------------

    @staticmethod
    def _table(tables: Tables, name: str) -> dict[str, Row]:
        if name not in PRIMARY_KEYS:
            raise StorageError(f"unknown table: {name!r}")
        return tables.get(name, {})

    @classmethod
    def _apply_one(cls, tables: Tables, op: Operation) -> None:
        if isinstance(op, Insert):
            cls._table(tables, op.table)
            key_column = PRIMARY_KEYS[op.table]
            key = op.row.get(key_column)
            if key is None:
                raise StorageError(f"insert into {op.table} is missing {key_column}")
            table = tables.setdefault(op.table, {})
            if key in table:
                raise StorageError(f"duplicate key {key!r} in {op.table}")
            table[key] = dict(op.row)
        elif isinstance(op, Update):
            row = cls._table(tables, op.table).get(op.key)
            if row is None:
                raise StorageError(f"row {op.key!r} not found in {op.table}")
            row.update(op.values)
        else:
            raise StorageError(f"unsupported operation: {type(op).__name__}")
