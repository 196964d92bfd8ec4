"""Catalog DTOs.

Immutable domain shapes for the product taxonomy and colours, mapped
from their table rows.  Orders embed copies of these as denormalised
snapshots.
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, List
from uuid import UUID

from pydantic import BaseModel, ConfigDict

if TYPE_CHECKING:
    from modules.catalog.models import Color, ProductCategory, ProductName


class ProductCategoryDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: UUID
    name: str
    description: str = ""

    @classmethod
    def from_entity(cls, category: ProductCategory) -> ProductCategoryDTO:
        return cls(
            id=category.id,
            name=category.name,
            description=category.description,
        )


class ProductNameDTO(BaseModel):
    """A sellable product.

    ``available_colors`` lists the colour ids the product may be ordered
    in; an empty list places no restriction.
    """

    model_config = ConfigDict(frozen=True)

    id: UUID
    name: str
    category_id: UUID
    base_price: Decimal = Decimal("0.00")
    available_colors: List[UUID] = []

    @classmethod
    def from_entity(cls, product: ProductName) -> ProductNameDTO:
        return cls(
            id=product.id,
            name=product.name,
            category_id=product.category_id,
            base_price=product.base_price,
            available_colors=list(product.available_colors or []),
        )

    def allows_color(self, color_id: UUID) -> bool:
        return not self.available_colors or color_id in self.available_colors


class ColorDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: UUID
    name: str
    hex_code: str

    @classmethod
    def from_entity(cls, color: Color) -> ColorDTO:
        return cls(id=color.id, name=color.name, hex_code=color.hex_code)
