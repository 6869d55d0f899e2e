"""Store-backed transactional outbox.

Rows are only ever inserted here, always as ``pending``.  Moving a row
to ``processed`` or ``failed`` is the job of an external relay, which
reads them through ``list_events``.
"""

from __future__ import annotations

import json
import uuid
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any

from catalog.application.clock import Clock
from catalog.domain.exceptions import EventSerializationError
from catalog.domain.model.events import DomainEvent, event_payload
from catalog.domain.repository.operations import Insert, Operation
from catalog.domain.repository.outbox_repository import OutboxRepository
from catalog.infrastructure.persistence import schema as s
from catalog.infrastructure.persistence.store import Store


class OutboxStatus(Enum):
    PENDING = "pending"
    PROCESSED = "processed"
    FAILED = "failed"


@dataclass(frozen=True)
class OutboxEventRecord:
    event_id: str
    event_type: str
    aggregate_id: str
    payload: dict[str, Any]
    status: OutboxStatus
    created_at: datetime
    processed_at: datetime | None = None


class StoreOutboxRepository(OutboxRepository):

    def __init__(self, store: Store, clock: Clock) -> None:
        self._store = store
        self._clock = clock

    # --- OutboxRepository interface -------------------------------------------

    def insert_from_event_op(self, event: DomainEvent) -> Operation:
        try:
            payload = json.dumps(event_payload(event))
        except (TypeError, ValueError) as exc:
            raise EventSerializationError(
                f"cannot serialize {type(event).__name__}: {exc}"
            ) from exc

        return Insert(
            s.OUTBOX_EVENTS,
            {
                s.EVENT_ID: str(uuid.uuid4()),
                s.EVENT_TYPE: event.event_type,
                s.AGGREGATE_ID: event.aggregate_id,
                s.PAYLOAD: payload,
                s.STATUS: OutboxStatus.PENDING.value,
                s.CREATED_AT: s.encode_time(self._clock.now()),
                s.PROCESSED_AT: None,
            },
        )

    # --- Relay-facing reads ---------------------------------------------------

    def list_events(
        self,
        status: OutboxStatus | None = None,
        aggregate_id: str | None = None,
    ) -> list[OutboxEventRecord]:
        """Return outbox rows oldest first, optionally filtered."""
        records = [self._to_record(row) for row in self._store.rows(s.OUTBOX_EVENTS)]
        if status is not None:
            records = [r for r in records if r.status == status]
        if aggregate_id is not None:
            records = [r for r in records if r.aggregate_id == aggregate_id]
        # Stable: rows from one commit share created_at and keep insert order.
        return sorted(records, key=lambda r: r.created_at)

    @staticmethod
    def _to_record(row: dict[str, Any]) -> OutboxEventRecord:
        return OutboxEventRecord(
            event_id=row[s.EVENT_ID],
            event_type=row[s.EVENT_TYPE],
            aggregate_id=row[s.AGGREGATE_ID],
            payload=json.loads(row[s.PAYLOAD]),
            status=OutboxStatus(row[s.STATUS]),
            created_at=s.decode_time(row[s.CREATED_AT]),
            processed_at=s.decode_time(row.get(s.PROCESSED_AT)),
        )
