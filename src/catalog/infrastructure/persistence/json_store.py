"""JSON-file-backed Store.

The whole database is one JSON document::

    {"products": [...], "outbox_events": [...]}

Writes go to a temporary file in the same directory which then replaces
the original, so readers see either the old or the new document.
Writers take an exclusive ``flock`` on a sidecar ``.lock`` file for the
whole load-apply-replace cycle, so concurrent processes serialize their
batches instead of overwriting each other.
"""

from __future__ import annotations

import fcntl
import json
import os
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

import structlog

from catalog.domain.exceptions import StorageError
from catalog.infrastructure.persistence.schema import PRIMARY_KEYS
from catalog.infrastructure.persistence.store import Store, Tables

logger = structlog.get_logger(__name__)


class JsonStore(Store):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    @property
    def file_path(self) -> Path:
        return self._file_path

    @property
    def lock_path(self) -> Path:
        return self._file_path.with_name(self._file_path.name + ".lock")

    # --- Store hooks ----------------------------------------------------------

    def _load(self) -> Tables:
        raw = self._load_raw()
        tables: Tables = {}
        for table, key_column in PRIMARY_KEYS.items():
            tables[table] = {row[key_column]: row for row in raw.get(table, [])}
        return tables

    def _save(self, tables: Tables) -> None:
        raw = {table: list(rows.values()) for table, rows in tables.items()}
        self._persist_raw(raw)

    @contextmanager
    def _locked(self) -> Iterator[None]:
        try:
            fh = open(self.lock_path, "a", encoding="utf-8")
        except OSError as exc:
            logger.error("store_lock_failed", path=str(self.lock_path), error=str(exc))
            raise StorageError(f"cannot lock {self._file_path}: {exc}") from exc

        with fh:
            fcntl.flock(fh.fileno(), fcntl.LOCK_EX)
            try:
                yield
            finally:
                fcntl.flock(fh.fileno(), fcntl.LOCK_UN)

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> dict[str, list[dict]]:
        try:
            return json.loads(self._file_path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.error("store_read_failed", path=str(self._file_path), error=str(exc))
            raise StorageError(f"cannot read {self._file_path}: {exc}") from exc

    def _persist_raw(self, raw: dict[str, list[dict]]) -> None:
        directory = self._file_path.parent
        fd, tmp_name = tempfile.mkstemp(dir=directory, prefix=".catalog-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(json.dumps(raw, indent=2) + "\n")
            os.replace(tmp_name, self._file_path)
        except (OSError, TypeError, ValueError) as exc:
            Path(tmp_name).unlink(missing_ok=True)
            logger.error("store_write_failed", path=str(self._file_path), error=str(exc))
            raise StorageError(f"cannot write {self._file_path}: {exc}") from exc

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            empty = {table: [] for table in PRIMARY_KEYS}
            self._file_path.write_text(json.dumps(empty) + "\n", encoding="utf-8")
