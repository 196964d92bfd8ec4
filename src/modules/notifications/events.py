"""Domain events for the notification channel."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict

from shared.domain.events import DomainEvent

NOTIFICATIONS_CHANNEL = "notifications"


@dataclass(frozen=True, kw_only=True)
class NotificationBroadcast(DomainEvent):
    """A toast published to every session listening on ``channel``.

    ``aggregate_id`` is the id of the toast echoed to the origin session;
    ``payload`` is the JSON form of the ``NotificationDraft``.
    """

    payload: Dict[str, Any]
    origin: str = ""
    channel: str = field(default=NOTIFICATIONS_CHANNEL)
