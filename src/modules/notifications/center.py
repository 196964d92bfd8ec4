"""Per-session toast queues and the cross-session broadcast hub.

``NotificationCenter`` holds the transient toasts for one dashboard
session.  Toasts carry their own expiry; expired entries are dropped
whenever the queue is read or written, so no timer thread is involved.

``NotificationHub`` owns one center per connected session.  A broadcast
is echoed to the origin session first and then published on the event
bus; the hub itself subscribes to that event and enqueues the toast in
every other connected session.  Delivery is best-effort: sessions that
connect later never see earlier broadcasts, and nothing is retried.
A session that has not called in for ``NOTIFICATION_SESSION_IDLE_SECONDS``
is forgotten along with its queue.
"""

from __future__ import annotations

import threading
from datetime import datetime, timedelta
from typing import Callable, Dict, List, Optional
from uuid import UUID, uuid4

import structlog
from django.conf import settings
from django.utils import timezone

from modules.notifications.dtos import Notification, NotificationDraft
from modules.notifications.events import NOTIFICATIONS_CHANNEL, NotificationBroadcast
from shared.domain.bus import IEventBus, IEventHandler
from shared.infrastructure.bus import event_bus

logger = structlog.get_logger(__name__)

Clock = Callable[[], datetime]


def _default_duration() -> int:
    return getattr(settings, "NOTIFICATION_DEFAULT_DURATION_MS", 6000)


def _default_idle_timeout() -> timedelta:
    return timedelta(seconds=getattr(settings, "NOTIFICATION_SESSION_IDLE_SECONDS", 300))


class NotificationCenter:
    """Time-boxed toast queue for a single session."""

    def __init__(
        self,
        clock: Optional[Clock] = None,
        default_duration: Optional[int] = None,
    ) -> None:
        self._clock = clock or timezone.now
        self._default_duration = default_duration
        self._queue: List[Notification] = []
        self._lock = threading.Lock()
        self.last_seen = self._clock()

    def touch(self) -> None:
        """Record that the session called in."""
        self.last_seen = self._clock()

    def is_idle(self, now: datetime, timeout: timedelta) -> bool:
        return now - self.last_seen > timeout

    def __len__(self) -> int:
        with self._lock:
            return len(self._queue)

    def notify(self, draft: NotificationDraft) -> Notification:
        """Enqueue a toast and return it with its generated id and expiry.

        Expired toasts are pruned first so an unpolled queue stays bounded
        by what is still on screen.
        """
        now = self._clock()
        notification = Notification.from_draft(
            draft,
            now=now,
            default_duration=self._default_duration or _default_duration(),
        )
        with self._lock:
            self._queue = [n for n in self._queue if not n.is_expired(now)]
            self._queue.append(notification)
        return notification

    def dismiss(self, notification_id: UUID) -> bool:
        """Remove a toast before it expires.  Returns ``False`` if it is gone."""
        with self._lock:
            for index, notification in enumerate(self._queue):
                if notification.id == notification_id:
                    del self._queue[index]
                    return True
        return False

    def active(self) -> List[Notification]:
        """Unexpired toasts, oldest first."""
        now = self._clock()
        with self._lock:
            self._queue = [n for n in self._queue if not n.is_expired(now)]
            return list(self._queue)


class NotificationHub(IEventHandler[NotificationBroadcast]):
    """Registry of session centers wired to the ``notifications`` channel."""

    def __init__(
        self,
        bus: IEventBus,
        channel: str = NOTIFICATIONS_CHANNEL,
        clock: Optional[Clock] = None,
        idle_timeout: Optional[timedelta] = None,
    ) -> None:
        self._bus = bus
        self._channel = channel
        self._clock = clock or timezone.now
        self._idle_timeout = idle_timeout
        self._centers: Dict[str, NotificationCenter] = {}
        self._lock = threading.Lock()

    def connect(self, session_id: str) -> NotificationCenter:
        """Return the center for ``session_id``, registering it on first use.

        Every call counts as activity for the session; idle sessions are
        evicted on the way in.
        """
        with self._lock:
            self._evict_idle(self._clock())
            center = self._centers.get(session_id)
            if center is None:
                center = NotificationCenter(clock=self._clock)
                self._centers[session_id] = center
                logger.debug("notification.session_connected", session_id=session_id)
            center.touch()
            return center

    def disconnect(self, session_id: str) -> None:
        with self._lock:
            self._centers.pop(session_id, None)

    def sessions(self) -> List[str]:
        with self._lock:
            return list(self._centers)

    def broadcast(self, draft: NotificationDraft, origin: str = "") -> Optional[Notification]:
        """Echo ``draft`` to ``origin`` and publish it to every other session.

        Returns the echoed toast, or ``None`` when there is no origin
        session (server-initiated broadcasts).
        """
        echoed = self.connect(origin).notify(draft) if origin else None
        event = NotificationBroadcast(
            aggregate_id=echoed.id if echoed else uuid4(),
            payload=draft.model_dump(mode="json"),
            origin=origin,
            channel=self._channel,
        )
        try:
            self._bus.publish(event)
        except Exception:
            logger.exception(
                "notification.broadcast_failed",
                title=draft.title,
                origin=origin,
            )
        return echoed

    def handle(self, event: NotificationBroadcast) -> None:
        if event.channel != self._channel:
            return
        draft = NotificationDraft.model_validate(event.payload)
        with self._lock:
            self._evict_idle(self._clock())
            targets = [
                center
                for session_id, center in self._centers.items()
                if session_id != event.origin
            ]
        for center in targets:
            center.notify(draft)
        logger.info(
            "notification.broadcast",
            title=draft.title,
            origin=event.origin,
            delivered=len(targets),
        )

    def _evict_idle(self, now: datetime) -> None:
        # Caller holds self._lock.
        timeout = self._idle_timeout or _default_idle_timeout()
        idle = [sid for sid, center in self._centers.items() if center.is_idle(now, timeout)]
        for session_id in idle:
            del self._centers[session_id]
        if idle:
            logger.info("notification.sessions_evicted", sessions=idle)


hub = NotificationHub(bus=event_bus)
