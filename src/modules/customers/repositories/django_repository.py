"""Django ORM implementation of the customer contact repository."""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

import structlog
from django.core.exceptions import ValidationError
from django.db import transaction

from modules.customers.dtos import CustomerContactDTO
from modules.customers.models import CustomerContact
from modules.customers.repositories.interfaces import ICustomerRepository

logger = structlog.get_logger(__name__)


class CustomerDjangoRepository(ICustomerRepository):
    """Concrete contact repository backed by Django ORM."""

    @transaction.atomic
    def upsert_many(self, contacts: Iterable[CustomerContactDTO]) -> List[CustomerContact]:
        saved = []
        for contact in contacts:
            row, created = CustomerContact.objects.update_or_create(
                email=contact.email,
                defaults=contact.model_dump(exclude={"id", "email"}),
            )
            saved.append(row)
            logger.debug(
                "customer.contact_saved", customer_id=str(row.id), created=created
            )
        return saved

    def get_by_id(self, id: str) -> Optional[CustomerContact]:
        try:
            return CustomerContact.objects.filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[CustomerContact]:
        queryset = CustomerContact.objects.order_by("name")
        if filters:
            queryset = queryset.filter(**filters)
        return list(queryset)

    def save(self, entity: CustomerContact) -> CustomerContact:
        entity.save()
        return entity
