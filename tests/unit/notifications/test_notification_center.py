"""Unit tests for the toast queue and the cross-session broadcast hub."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock
from uuid import uuid4

import pytest
from pydantic import ValidationError

from modules.notifications.center import NotificationCenter, NotificationHub
from modules.notifications.dtos import NotificationDraft, NotificationType, SoundCue
from modules.notifications.events import NotificationBroadcast
from shared.infrastructure.bus import InMemoryEventBus

pytestmark = pytest.mark.unit


class FakeClock:
    def __init__(self) -> None:
        self.now = datetime(2024, 3, 5, 9, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


def _draft(title="Saved", **kwargs) -> NotificationDraft:
    return NotificationDraft(type=NotificationType.SUCCESS, title=title, **kwargs)


@pytest.fixture()
def clock():
    return FakeClock()


class TestNotificationDraft:
    def test_blank_title_is_rejected(self):
        with pytest.raises(ValidationError):
            _draft(title="   ")

    def test_negative_duration_is_rejected(self):
        with pytest.raises(ValidationError):
            _draft(duration=-1)


class TestNotificationCenter:
    def test_notify_assigns_id_timestamp_and_default_duration(self, clock):
        center = NotificationCenter(clock=clock, default_duration=6000)

        notification = center.notify(_draft(sound=SoundCue.DING))

        assert notification.timestamp == clock.now
        assert notification.duration == 6000
        assert notification.expires_at == clock.now + timedelta(seconds=6)
        assert notification.sound == SoundCue.DING
        assert center.active() == [notification]

    def test_zero_duration_means_default(self, clock):
        center = NotificationCenter(clock=clock, default_duration=4000)
        assert center.notify(_draft(duration=0)).duration == 4000

    def test_expired_toasts_are_dropped_on_read(self, clock):
        center = NotificationCenter(clock=clock, default_duration=6000)
        short = center.notify(_draft(title="Short", duration=1000))
        long = center.notify(_draft(title="Long"))

        clock.advance(milliseconds=999)
        assert center.active() == [short, long]

        clock.advance(milliseconds=1)
        assert center.active() == [long]

        clock.advance(seconds=10)
        assert center.active() == []

    def test_dismiss(self, clock):
        center = NotificationCenter(clock=clock)
        notification = center.notify(_draft())

        assert center.dismiss(notification.id) is True
        assert center.active() == []
        assert center.dismiss(notification.id) is False
        assert center.dismiss(uuid4()) is False

    def test_notify_prunes_expired_toasts_from_an_unread_queue(self, clock):
        center = NotificationCenter(clock=clock)
        for index in range(50):
            center.notify(_draft(title=f"Toast {index}", duration=1))
            clock.advance(milliseconds=2)

        latest = center.notify(_draft(title="Latest", duration=1000))

        assert len(center) == 1
        assert center.active() == [latest]


class TestNotificationHub:
    @pytest.fixture()
    def bus(self):
        return InMemoryEventBus()

    @pytest.fixture()
    def hub(self, bus, clock):
        hub = NotificationHub(bus=bus, clock=clock)
        bus.subscribe(NotificationBroadcast, hub)
        return hub

    def test_broadcast_echoes_once_and_fans_out(self, hub):
        origin = hub.connect("session-a")
        other = hub.connect("session-b")
        third = hub.connect("session-c")

        echoed = hub.broadcast(_draft(title="Order Dispatched!"), origin="session-a")

        assert [n.title for n in origin.active()] == ["Order Dispatched!"]
        assert origin.active()[0].id == echoed.id
        assert [n.title for n in other.active()] == ["Order Dispatched!"]
        assert [n.title for n in third.active()] == ["Order Dispatched!"]

    def test_server_broadcast_reaches_everyone_without_echo(self, hub):
        first = hub.connect("session-a")
        second = hub.connect("session-b")

        assert hub.broadcast(_draft()) is None
        assert len(first.active()) == 1
        assert len(second.active()) == 1

    def test_late_sessions_miss_earlier_broadcasts(self, hub):
        hub.broadcast(_draft(), origin="session-a")
        assert hub.connect("session-late").active() == []

    def test_other_channels_are_ignored(self, hub):
        center = hub.connect("session-a")
        hub.handle(
            NotificationBroadcast(
                aggregate_id=uuid4(),
                payload=_draft().model_dump(mode="json"),
                channel="elsewhere",
            )
        )
        assert center.active() == []

    def test_publish_failure_still_returns_echo(self, clock):
        bus = MagicMock()
        bus.publish.side_effect = RuntimeError("channel down")
        hub = NotificationHub(bus=bus, clock=clock)

        echoed = hub.broadcast(_draft(), origin="session-a")

        assert echoed is not None
        assert hub.connect("session-a").active() == [echoed]

    def test_connect_reuses_center_and_disconnect_forgets_it(self, hub):
        center = hub.connect("session-a")
        assert hub.connect("session-a") is center
        assert hub.sessions() == ["session-a"]

        hub.disconnect("session-a")
        assert hub.sessions() == []

    def test_idle_sessions_are_evicted_on_connect(self, bus, clock):
        hub = NotificationHub(bus=bus, clock=clock, idle_timeout=timedelta(minutes=5))
        stale = hub.connect("session-stale")
        hub.connect("session-live")

        clock.advance(minutes=4)
        hub.connect("session-live")
        clock.advance(minutes=2)
        hub.connect("session-new")

        assert sorted(hub.sessions()) == ["session-live", "session-new"]
        assert hub.connect("session-stale") is not stale

    def test_idle_sessions_are_evicted_before_fan_out(self, bus, clock):
        hub = NotificationHub(bus=bus, clock=clock, idle_timeout=timedelta(seconds=30))
        bus.subscribe(NotificationBroadcast, hub)
        abandoned = hub.connect("session-abandoned")
        clock.advance(minutes=1)

        hub.broadcast(_draft(), origin="session-a")

        assert hub.sessions() == ["session-a"]
        assert len(abandoned) == 0

    def test_many_broadcasts_keep_hub_bounded(self, bus, clock):
        hub = NotificationHub(bus=bus, clock=clock, idle_timeout=timedelta(seconds=10))
        bus.subscribe(NotificationBroadcast, hub)

        for index in range(100):
            listener = hub.connect("session-listener")
            hub.broadcast(_draft(title=f"Order {index}", duration=500), origin=f"session-{index}")
            clock.advance(seconds=1)

        assert len(listener) == 1
        # Origins from the last ten seconds plus the listener.
        assert len(hub.sessions()) == 12
