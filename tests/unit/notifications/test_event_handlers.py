"""Unit tests for the order and coordinator handlers that announce activity."""

from __future__ import annotations

from uuid import uuid4

import pytest

from modules.coordinators.events import CoordinatorAdded, CoordinatorUpdated
from modules.coordinators.handlers import coordinator_added_handler, coordinator_updated_handler
from modules.notifications.center import hub
from modules.notifications.dtos import NotificationType, SoundCue
from modules.orders.events import OrderCreated, OrderStatusChanged
from modules.orders.handlers import (
    order_created_handler,
    order_status_changed_handler,
    status_change_notification,
)

pytestmark = pytest.mark.unit


class TestStatusChangeNotification:
    def test_dispatched(self):
        draft = status_change_notification("SP/2024/0001", "dispatched")
        assert draft.title == "Order Dispatched!"
        assert draft.type == NotificationType.SUCCESS
        assert draft.sound == SoundCue.CLAP

    def test_cancelled(self):
        draft = status_change_notification("SP/2024/0001", "cancelled")
        assert draft.title == "Order Cancelled"
        assert draft.type == NotificationType.ERROR
        assert draft.sound == SoundCue.ERROR

    def test_any_other_status(self):
        draft = status_change_notification("SP/2024/0001", "under-fusing")
        assert draft.title == "Order Status Updated"
        assert draft.type == NotificationType.INFO
        assert draft.message == "Order SP/2024/0001 status changed to Under Fusing"


class TestHandlersBroadcast:
    def test_order_created_reaches_origin_and_others(self):
        origin = hub.connect("desk-1")
        other = hub.connect("desk-2")

        order_created_handler.handle(
            OrderCreated(aggregate_id=uuid4(), order_code="SP/2024/0007", session_id="desk-1")
        )

        for center in (origin, other):
            [toast] = center.active()
            assert toast.title == "New Order Created"
            assert toast.message == "Order SP/2024/0007 has been created successfully."

    def test_status_change_without_session_reaches_every_session(self):
        center = hub.connect("desk-1")

        order_status_changed_handler.handle(
            OrderStatusChanged(
                aggregate_id=uuid4(),
                order_code="SP/2024/0007",
                old_status="ready-to-ship",
                new_status="dispatched",
            )
        )

        assert [t.title for t in center.active()] == ["Order Dispatched!"]

    def test_coordinator_messages(self):
        center = hub.connect("desk-1")

        coordinator_added_handler.handle(CoordinatorAdded(aggregate_id=uuid4(), name="Sara Khan"))
        coordinator_updated_handler.handle(
            CoordinatorUpdated(aggregate_id=uuid4(), name="Sara Khan")
        )

        assert [(t.title, t.message) for t in center.active()] == [
            ("Coordinator Added", "Sara Khan has been added successfully."),
            ("Coordinator Updated", "Sara Khan has been updated successfully."),
        ]
        assert center.active()[0].sound == SoundCue.DING
