"""Persistence operations handed back by repositories.

Repositories never write.  They describe the write as one of these
values and a Committer applies a whole batch of them atomically.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union


@dataclass(frozen=True)
class Insert:
    """Add a new row; fails at apply time if the key already exists."""

    table: str
    row: dict[str, Any] = field(hash=False)


@dataclass(frozen=True)
class Update:
    """Overwrite ``values`` on the row identified by ``key``."""

    table: str
    key: str
    values: dict[str, Any] = field(hash=False)


Operation = Union[Insert, Update]
