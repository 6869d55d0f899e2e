"""In-memory fakes for testing.

``FakeStore`` implements the same Store contract as the JSON store but
keeps everything in a dict.  No file I/O, no side effects.
"""

from __future__ import annotations

import itertools
from datetime import datetime, timedelta, timezone

from catalog.application.clock import Clock
from catalog.application.commit_plan import CommitPlan, Committer
from catalog.domain.exceptions import StorageError
from catalog.infrastructure.persistence.store import Store, Tables

T0 = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


class FixedClock(Clock):

    def __init__(self, now: datetime = T0) -> None:
        self._now = now

    def now(self) -> datetime:
        return self._now

    def set(self, now: datetime) -> None:
        self._now = now

    def advance(self, **kwargs: float) -> None:
        self._now = self._now + timedelta(**kwargs)


class FakeStore(Store):

    def __init__(self) -> None:
        self._tables: Tables = {}
        self.apply_calls = 0
        self.fail_next_apply = False

    def apply_atomic(self, operations) -> None:
        self.apply_calls += 1
        if self.fail_next_apply:
            self.fail_next_apply = False
            raise StorageError("storage unavailable")
        super().apply_atomic(operations)

    def _load(self) -> Tables:
        return self._tables

    def _save(self, tables: Tables) -> None:
        self._tables = tables


class RecordingCommitter(Committer):
    """Keeps every plan it is given instead of writing anything."""

    def __init__(self) -> None:
        self.plans: list[CommitPlan] = []

    def apply(self, plan: CommitPlan) -> None:
        self.plans.append(plan)


def sequential_ids(prefix: str = "p"):
    counter = itertools.count(1)
    return lambda: f"{prefix}-{next(counter)}"
