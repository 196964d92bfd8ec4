"""Wiring of a ``DataStore`` to the Django repositories."""

from __future__ import annotations

from modules.attachments.storage import ObjectStorage
from modules.catalog.repositories import CatalogDjangoRepository
from modules.coordinators.repositories import CoordinatorDjangoRepository
from modules.customers.repositories import CustomerDjangoRepository
from modules.orders.repositories import OrderDjangoRepository
from modules.store.data_store import DataStore
from shared.infrastructure.bus import event_bus


def build_data_store() -> DataStore:
    """A fresh store for one request."""
    return DataStore(
        coordinator_repository=CoordinatorDjangoRepository(),
        catalog_repository=CatalogDjangoRepository(),
        order_repository=OrderDjangoRepository(),
        customer_repository=CustomerDjangoRepository(),
        bus=event_bus,
        storage=ObjectStorage(),
    )
