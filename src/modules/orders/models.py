"""Order model.

Business rules implemented:
- ``order_code`` (``SP/<year>/<NNNN>``) is unique; the data store retries
  code generation when a concurrent insert wins the race.
- ``total_qty`` is always the sum of the nine size counts and
  ``total_amount`` is always ``cost_per_pc * total_qty``; both are
  recalculated on every save.
- References use PROTECT: orders are never deleted and must keep their
  coordinator and catalog rows.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from django.core.validators import MinValueValidator
from django.db import models

from modules.core.models import BaseModel
from modules.orders.constants import (
    SIZE_LABELS,
    BrandingType,
    OrderStatus,
    OrderType,
    Priority,
)


def empty_size_breakdown() -> dict[str, int]:
    return {label: 0 for label in SIZE_LABELS}


class Order(BaseModel):
    """A customer order for branded garments."""

    order_code: models.CharField = models.CharField(
        max_length=32, unique=True, db_column="order_id"
    )
    order_date: models.DateField = models.DateField()
    delivery_date: models.DateField = models.DateField()
    edd: models.DateField = models.DateField(null=True, blank=True)
    customer_name: models.CharField = models.CharField(max_length=255)
    order_type: models.CharField = models.CharField(
        max_length=16, choices=OrderType.choices
    )
    priority: models.CharField = models.CharField(
        max_length=16, choices=Priority.choices, default=Priority.MEDIUM
    )
    coordinator: models.ForeignKey = models.ForeignKey(
        "coordinators.SalesCoordinator",
        on_delete=models.PROTECT,
        related_name="orders",
        db_column="sales_coordinator_id",
    )
    category: models.ForeignKey = models.ForeignKey(
        "catalog.ProductCategory",
        on_delete=models.PROTECT,
        related_name="orders",
        db_column="product_category_id",
    )
    product: models.ForeignKey = models.ForeignKey(
        "catalog.ProductName",
        on_delete=models.PROTECT,
        related_name="orders",
        db_column="product_name_id",
    )
    color: models.ForeignKey = models.ForeignKey(
        "catalog.Color",
        on_delete=models.PROTECT,
        related_name="orders",
    )
    description: models.TextField = models.TextField()
    size_breakdown: models.JSONField = models.JSONField(default=empty_size_breakdown)
    total_qty: models.PositiveIntegerField = models.PositiveIntegerField(
        default=0, editable=False
    )
    branding_type: models.CharField = models.CharField(
        max_length=16, choices=BrandingType.choices, default=BrandingType.NONE
    )
    placement1: models.CharField = models.CharField(max_length=100, blank=True, default="")
    placement1_size: models.CharField = models.CharField(max_length=50, blank=True, default="")
    placement2: models.CharField = models.CharField(max_length=100, blank=True, default="")
    placement2_size: models.CharField = models.CharField(max_length=50, blank=True, default="")
    placement3: models.CharField = models.CharField(max_length=100, blank=True, default="")
    placement3_size: models.CharField = models.CharField(max_length=50, blank=True, default="")
    placement4: models.CharField = models.CharField(max_length=100, blank=True, default="")
    placement4_size: models.CharField = models.CharField(max_length=50, blank=True, default="")
    mockup_files: models.JSONField = models.JSONField(default=list, blank=True)
    attachments: models.JSONField = models.JSONField(default=list, blank=True)
    remarks: models.TextField = models.TextField(blank=True, default="")
    cost_per_pc: models.DecimalField = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0.00"))],
    )
    total_amount: models.DecimalField = models.DecimalField(
        max_digits=12, decimal_places=2, default=Decimal("0.00"), editable=False
    )
    status: models.CharField = models.CharField(
        max_length=20,
        choices=OrderStatus.choices,
        default=OrderStatus.PENDING_APPROVAL,
        db_column="order_status",
    )

    class Meta:
        db_table = "orders"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["status"], name="orders_status_idx"),
            models.Index(fields=["order_date"], name="orders_order_date_idx"),
            models.Index(fields=["-created_at"], name="orders_created_idx"),
        ]

    # ------------------------------------------------------------------
    # Derived totals
    # ------------------------------------------------------------------

    def recalculate_totals(self) -> None:
        breakdown = self.size_breakdown or {}
        self.total_qty = sum(int(breakdown.get(label, 0)) for label in SIZE_LABELS)
        self.total_amount = Decimal(self.cost_per_pc or 0) * self.total_qty

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def save(self, *args: Any, **kwargs: Any) -> None:
        self.recalculate_totals()
        update_fields = kwargs.get("update_fields")
        if update_fields is not None:
            kwargs["update_fields"] = {*update_fields, "total_qty", "total_amount"}
        super().save(*args, **kwargs)

    def __str__(self) -> str:
        return f"{self.order_code} ({self.status})"
