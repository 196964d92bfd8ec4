"""Customer contact directory.

Customers in the order flow are derived from order rows by name; this
table only holds contact details imported in bulk from CSV, which the
customer rollup uses to fill in e-mail and phone.
"""

from __future__ import annotations

from django.db import models

from modules.core.models import BaseModel


class CustomerContact(BaseModel):
    name = models.CharField(max_length=255)
    email = models.EmailField(max_length=254, unique=True)
    phone = models.CharField(max_length=32, blank=True, default="")
    company = models.CharField(max_length=255)
    address = models.CharField(max_length=500, blank=True, default="")
    city = models.CharField(max_length=100, blank=True, default="")
    state = models.CharField(max_length=100, blank=True, default="")
    zip_code = models.CharField(max_length=20, blank=True, default="")

    class Meta:
        db_table = "customers"
        ordering = ["name"]
        indexes = [models.Index(fields=["name"], name="customers_name_idx")]

    def __str__(self) -> str:
        return f"{self.name} ({self.company})"
