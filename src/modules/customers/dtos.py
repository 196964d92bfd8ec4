"""Customer DTOs.

- ``CustomerContactDTO``: one row of the imported contact directory.
- ``CustomerDTO``: a customer as derived from orders (the rollup).
- ``ImportRowError`` / ``ImportResult``: outcome of a CSV import, where
  partial success is the norm.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING, List, Optional
from uuid import UUID

from django.db import models
from pydantic import BaseModel, ConfigDict

if TYPE_CHECKING:
    from modules.customers.models import CustomerContact


class CustomerStatus(models.TextChoices):
    ACTIVE = "active", "Active"
    INACTIVE = "inactive", "Inactive"


class CustomerContactDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: Optional[UUID] = None
    name: str
    email: str
    phone: str = ""
    company: str
    address: str = ""
    city: str = ""
    state: str = ""
    zip_code: str = ""

    @classmethod
    def from_entity(cls, contact: CustomerContact) -> CustomerContactDTO:
        return cls(
            id=contact.id,
            name=contact.name,
            email=contact.email,
            phone=contact.phone,
            company=contact.company,
            address=contact.address,
            city=contact.city,
            state=contact.state,
            zip_code=contact.zip_code,
        )


class CustomerDTO(BaseModel):
    """A customer rolled up from orders sharing the same (trimmed) name.

    ``total_spent`` sums every order regardless of status: it is lifetime
    value, not realised revenue.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    email: str = ""
    phone: str = ""
    total_orders: int
    total_spent: Decimal
    last_order_date: Optional[date] = None
    status: CustomerStatus


class ImportRowError(BaseModel):
    model_config = ConfigDict(frozen=True)

    row: int
    message: str


class ImportResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    customers: List[CustomerContactDTO] = []
    errors: List[ImportRowError] = []

    @property
    def success(self) -> int:
        return len(self.customers)
