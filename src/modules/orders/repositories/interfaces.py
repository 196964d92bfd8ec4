"""Order repository interface.

Extends ``IRepository[Order]`` with the single-statement writes the
data store needs and the joined read used to build a snapshot.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Dict, List
from uuid import UUID

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.orders.models import Order


class IOrderRepository(IRepository["Order"]):
    """Repository contract for orders."""

    @abstractmethod
    def create(self, data: Dict[str, Any]) -> Order:
        """Insert an order row.

        Raises ``django.db.IntegrityError`` when ``order_code`` is taken.
        """

    @abstractmethod
    def update(self, id: UUID, data: Dict[str, Any]) -> Order:
        """Overwrite the given columns; raises ``Order.DoesNotExist``."""

    @abstractmethod
    def list_with_references(self) -> List[Order]:
        """All orders, newest first, with coordinator and catalog rows joined."""
