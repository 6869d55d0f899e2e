"""Write path shared by every Product command.

Turns a mutated aggregate into one CommitPlan (the product row plus an
outbox row per captured event, in emission order) and applies it.
"""

from __future__ import annotations

import structlog

from catalog.application.commit_plan import CommitPlan, Committer
from catalog.domain.model.product import Product
from catalog.domain.repository.outbox_repository import OutboxRepository
from catalog.domain.repository.product_repository import ProductRepository

logger = structlog.get_logger(__name__)


class ProductPersister:

    def __init__(
        self,
        product_repo: ProductRepository,
        outbox_repo: OutboxRepository,
        committer: Committer,
    ) -> None:
        self._product_repo = product_repo
        self._outbox_repo = outbox_repo
        self._committer = committer

    def build_plan(self, product: Product) -> CommitPlan:
        """Collect the writes for ``product``.

        Serialization errors surface here, before anything is written.
        """
        plan = CommitPlan()
        if product.is_new:
            plan.add(self._product_repo.insert_op(product))
        else:
            plan.add(self._product_repo.update_op(product))

        plan.add_all(
            *(self._outbox_repo.insert_from_event_op(e) for e in product.domain_events)
        )
        return plan

    def save(self, product: Product) -> None:
        """Persist ``product`` and its pending events atomically."""
        events = len(product.domain_events)
        plan = self.build_plan(product)
        self._committer.apply(plan)

        # The aggregate now matches storage.
        product.is_new = False
        product.changes.reset()
        product.clear_events()

        logger.info(
            "product_committed",
            product_id=product.id,
            operations=plan.count(),
            events=events,
        )
