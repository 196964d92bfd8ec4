"""Domain event primitives shared by every module.

Events are published after the data store has persisted a change and
reloaded its snapshot.  They carry the id of the dashboard session that
made the change so notification handlers can echo the toast to that
session instead of delivering it twice.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict
from uuid import UUID, uuid4


@dataclass(frozen=True, kw_only=True)
class DomainEvent:
    """Base domain event (immutable, keyword-only)."""

    aggregate_id: UUID
    session_id: str = ""
    event_id: UUID = field(default_factory=uuid4)
    occurred_on: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    event_name: str = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "event_name", self.__class__.__name__)

    def log_context(self) -> Dict[str, Any]:
        """Fields bound to every log line written about this event."""
        return {
            "event_name": self.event_name,
            "event_id": str(self.event_id),
            "aggregate_id": str(self.aggregate_id),
            "session_id": self.session_id,
        }
