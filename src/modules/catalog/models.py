"""Product taxonomy and colour reference tables.

Flat lookup rows referenced by orders.  ``ProductName.available_colors``
holds an explicit allow-list of colour ids; an empty list means every
colour may be used with the product.
"""

from __future__ import annotations

from decimal import Decimal

from django.core.validators import MinValueValidator, RegexValidator
from django.db import models

from modules.core.models import BaseModel


class ProductCategory(BaseModel):
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True, default="")

    class Meta:
        db_table = "product_categories"
        ordering = ["name"]
        verbose_name_plural = "product categories"

    def __str__(self) -> str:
        return self.name


class ProductName(BaseModel):
    name = models.CharField(max_length=255)
    category = models.ForeignKey(
        "catalog.ProductCategory",
        on_delete=models.PROTECT,
        related_name="products",
    )
    base_price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0.00"))],
    )
    available_colors = models.JSONField(default=list, blank=True)

    class Meta:
        db_table = "product_names"
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name


class Color(BaseModel):
    name = models.CharField(max_length=100)
    hex_code = models.CharField(
        max_length=7,
        validators=[
            RegexValidator(r"^#[0-9A-Fa-f]{6}$", "Hex code must look like #1A2B3C.")
        ],
    )

    class Meta:
        db_table = "colors"
        ordering = ["name"]

    def __str__(self) -> str:
        return f"{self.name} ({self.hex_code})"
