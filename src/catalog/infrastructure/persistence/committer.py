"""Committer that applies plans through a Store."""

from __future__ import annotations

import structlog

from catalog.application.commit_plan import CommitPlan, Committer
from catalog.domain.exceptions import StorageError
from catalog.infrastructure.persistence.store import Store

logger = structlog.get_logger(__name__)


class StoreCommitter(Committer):

    def __init__(self, store: Store) -> None:
        self._store = store

    def apply(self, plan: CommitPlan) -> None:
        if plan.is_empty():
            return

        logger.debug("applying_commit_plan", operations=plan.count())
        try:
            self._store.apply_atomic(plan.operations)
        except StorageError as exc:
            logger.error("commit_failed", operations=plan.count(), error=str(exc))
            raise
