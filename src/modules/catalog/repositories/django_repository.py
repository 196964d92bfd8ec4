"""Django ORM implementation of the catalog repository."""

from __future__ import annotations

from typing import List

from modules.catalog.models import Color, ProductCategory, ProductName
from modules.catalog.repositories.interfaces import ICatalogRepository


class CatalogDjangoRepository(ICatalogRepository):
    """Concrete catalog repository backed by Django ORM."""

    def list_categories(self) -> List[ProductCategory]:
        return list(ProductCategory.objects.order_by("name"))

    def list_products(self) -> List[ProductName]:
        return list(ProductName.objects.order_by("name"))

    def list_colors(self) -> List[Color]:
        return list(Color.objects.order_by("name"))
