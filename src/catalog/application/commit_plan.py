"""Commit plans: ordered batches of persistence operations.

A plan is built by a use case from the Operations its repositories
return, then handed to a Committer, which applies the whole batch as
one all-or-nothing unit.  The domain layer never sees a transaction.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from catalog.domain.repository.operations import Operation


class CommitPlan:

    def __init__(self) -> None:
        self._operations: list[Operation] = []

    def add(self, op: Operation | None) -> None:
        """Append ``op``; None is ignored so no-op mutations compose."""
        if op is not None:
            self._operations.append(op)

    def add_all(self, *ops: Operation | None) -> None:
        for op in ops:
            self.add(op)

    @property
    def operations(self) -> list[Operation]:
        return list(self._operations)

    def is_empty(self) -> bool:
        return not self._operations

    def count(self) -> int:
        return len(self._operations)

    def __len__(self) -> int:
        return len(self._operations)

    def __repr__(self) -> str:
        return f"CommitPlan({self._operations!r})"


class Committer(ABC):

    @abstractmethod
    def apply(self, plan: CommitPlan) -> None:
        """Apply every operation in ``plan`` atomically.

        An empty plan is a successful no-op.  Failures propagate unchanged.
        """
