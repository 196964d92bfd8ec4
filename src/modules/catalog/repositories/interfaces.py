"""Catalog repository interface.

The three reference tables are read together by the data store on
every load, so they share one read-only contract.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, List

if TYPE_CHECKING:
    from modules.catalog.models import Color, ProductCategory, ProductName


class ICatalogRepository(ABC):
    """Read contract for product categories, product names and colours."""

    @abstractmethod
    def list_categories(self) -> List[ProductCategory]:
        """All categories ordered by name."""

    @abstractmethod
    def list_products(self) -> List[ProductName]:
        """All product names ordered by name."""

    @abstractmethod
    def list_colors(self) -> List[Color]:
        """All colours ordered by name."""
