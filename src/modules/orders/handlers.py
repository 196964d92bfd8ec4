"""Event handlers for order events.

Order activity is announced to every connected dashboard session.
"""

from __future__ import annotations

import structlog

from modules.notifications.center import hub
from modules.notifications.dtos import NotificationDraft, NotificationType, SoundCue
from modules.orders.constants import OrderStatus, status_label
from modules.orders.events import OrderCreated, OrderStatusChanged
from shared.domain.bus import IEventHandler

logger = structlog.get_logger(__name__)


def status_change_notification(order_code: str, new_status: str) -> NotificationDraft:
    if new_status == OrderStatus.DISPATCHED:
        return NotificationDraft(
            type=NotificationType.SUCCESS,
            title="Order Dispatched!",
            message=f"Order {order_code} has been dispatched successfully.",
            sound=SoundCue.CLAP,
        )
    if new_status == OrderStatus.CANCELLED:
        return NotificationDraft(
            type=NotificationType.ERROR,
            title="Order Cancelled",
            message=f"Order {order_code} has been cancelled.",
            sound=SoundCue.ERROR,
        )
    return NotificationDraft(
        type=NotificationType.INFO,
        title="Order Status Updated",
        message=f"Order {order_code} status changed to {status_label(new_status)}",
        sound=SoundCue.NOTIFICATION,
    )


class OrderCreatedHandler(IEventHandler[OrderCreated]):
    def handle(self, event: OrderCreated) -> None:
        logger.info(
            "order.created",
            order_id=str(event.aggregate_id),
            order_code=event.order_code,
        )
        hub.broadcast(
            NotificationDraft(
                type=NotificationType.SUCCESS,
                title="New Order Created",
                message=f"Order {event.order_code} has been created successfully.",
                sound=SoundCue.NOTIFICATION,
            ),
            origin=event.session_id,
        )


class OrderStatusChangedHandler(IEventHandler[OrderStatusChanged]):
    def handle(self, event: OrderStatusChanged) -> None:
        logger.info(
            "order.status_changed",
            order_id=str(event.aggregate_id),
            old_status=event.old_status,
            new_status=event.new_status,
        )
        hub.broadcast(
            status_change_notification(event.order_code, event.new_status),
            origin=event.session_id,
        )


order_created_handler = OrderCreatedHandler()
order_status_changed_handler = OrderStatusChangedHandler()
