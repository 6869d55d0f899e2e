"""Abstract repository for the transactional outbox."""

from __future__ import annotations

from abc import ABC, abstractmethod

from catalog.domain.model.events import DomainEvent
from catalog.domain.repository.operations import Operation


class OutboxRepository(ABC):

    @abstractmethod
    def insert_from_event_op(self, event: DomainEvent) -> Operation:
        """Serialize ``event`` into a pending outbox row insert.

        Raises EventSerializationError if the payload cannot be encoded.
        """
