"""Time source for use cases and queries.

Every command takes ``now`` from an injected Clock so tests can pin or
advance time without patching ``datetime``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime, timezone


class Clock(ABC):

    @abstractmethod
    def now(self) -> datetime:
        """Return the current instant as a timezone-aware datetime."""


class SystemClock(Clock):

    def now(self) -> datetime:
        return datetime.now(timezone.utc)
