from __future__ import annotations

from django.db import models

from modules.core.models import BaseModel


class SalesCoordinator(BaseModel):
    """A member of the sales team that owns customer orders."""

    name = models.CharField(max_length=255)
    email = models.EmailField(max_length=255)
    phone = models.CharField(max_length=32, blank=True, default="")
    avatar_url = models.CharField(max_length=500, blank=True, default="")

    class Meta:
        db_table = "sales_coordinators"
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name
