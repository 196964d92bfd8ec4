"""Domain events for orders."""

from __future__ import annotations

from dataclasses import dataclass

from shared.domain.events import DomainEvent


@dataclass(frozen=True, kw_only=True)
class OrderCreated(DomainEvent):
    """Raised after an order is persisted and the snapshot reloaded."""

    order_code: str


@dataclass(frozen=True, kw_only=True)
class OrderStatusChanged(DomainEvent):
    """Raised after an update moved an order to a different status."""

    order_code: str
    old_status: str
    new_status: str
