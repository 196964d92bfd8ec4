"""Django ORM implementation of the Order repository.

Each write is one statement inside its own ``transaction.atomic()``
block, so a unique-constraint violation on ``order_code`` rolls back
only that insert and the caller can retry with a fresh code.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional
from uuid import UUID

import structlog
from django.core.exceptions import ValidationError
from django.db import transaction

from modules.orders.models import Order
from modules.orders.repositories.interfaces import IOrderRepository

logger = structlog.get_logger(__name__)

REFERENCES = ("coordinator", "category", "product", "color")


class OrderDjangoRepository(IOrderRepository):
    """Concrete Order repository backed by Django ORM."""

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def create(self, data: Dict[str, Any]) -> Order:
        with transaction.atomic():
            order = Order(**data)
            order.save(force_insert=True)
        logger.info(
            "order.persisted",
            order_id=str(order.id),
            order_code=order.order_code,
            total_qty=order.total_qty,
        )
        return order

    def update(self, id: UUID, data: Dict[str, Any]) -> Order:
        with transaction.atomic():
            order = Order.objects.select_for_update().filter(id=id).first()
            if not order:
                raise Order.DoesNotExist(f"Order {id} not found.")
            for field, value in data.items():
                setattr(order, field, value)
            order.save()
        logger.info("order.updated", order_id=str(id), fields=sorted(data))
        return order

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get_by_id(self, id: str) -> Optional[Order]:
        """Returns ``None`` for non-existent or malformed ids."""
        try:
            return Order.objects.select_related(*REFERENCES).filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[Order]:
        queryset = Order.objects.select_related(*REFERENCES)
        if filters:
            queryset = queryset.filter(**filters)
        return list(queryset.order_by("-created_at", "-id"))

    def list_with_references(self) -> List[Order]:
        return self.list()

    def save(self, entity: Order) -> Order:
        entity.save()
        return entity
