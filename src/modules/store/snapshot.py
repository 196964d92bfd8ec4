"""Immutable, per-load view of everything the dashboard reads.

A ``DataSnapshot`` is produced by ``DataStore.load_all`` and never
mutated; a mutation produces a new snapshot.  Entities embedded in
orders are copies taken at ``taken_at`` and may lag behind the live
rows until the next load.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Tuple
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from modules.catalog.dtos import ColorDTO, ProductCategoryDTO, ProductNameDTO
from modules.coordinators.dtos import SalesCoordinatorDTO
from modules.customers.dtos import CustomerContactDTO, CustomerDTO
from modules.orders.dtos import OrderDTO


def _find(items, id):
    key = str(id)
    for item in items:
        if str(item.id) == key:
            return item
    return None


class DataSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True)

    taken_at: datetime
    coordinators: Tuple[SalesCoordinatorDTO, ...] = ()
    categories: Tuple[ProductCategoryDTO, ...] = ()
    products: Tuple[ProductNameDTO, ...] = ()
    colors: Tuple[ColorDTO, ...] = ()
    orders: Tuple[OrderDTO, ...] = ()
    contacts: Tuple[CustomerContactDTO, ...] = ()
    customers: Tuple[CustomerDTO, ...] = ()

    def coordinator(self, id: UUID | str) -> Optional[SalesCoordinatorDTO]:
        return _find(self.coordinators, id)

    def category(self, id: UUID | str) -> Optional[ProductCategoryDTO]:
        return _find(self.categories, id)

    def product(self, id: UUID | str) -> Optional[ProductNameDTO]:
        return _find(self.products, id)

    def color(self, id: UUID | str) -> Optional[ColorDTO]:
        return _find(self.colors, id)

    def order(self, id: UUID | str) -> Optional[OrderDTO]:
        return _find(self.orders, id)

    def order_codes(self) -> list[str]:
        return [order.order_code for order in self.orders]

    def with_coordinator(self, coordinator: SalesCoordinatorDTO) -> DataSnapshot:
        """Copy with ``coordinator`` inserted or replaced, kept sorted by name."""
        others = [c for c in self.coordinators if c.id != coordinator.id]
        merged = sorted([*others, coordinator], key=lambda c: c.name)
        return self.model_copy(update={"coordinators": tuple(merged)})
