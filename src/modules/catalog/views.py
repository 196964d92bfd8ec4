"""Read-only catalog API views."""

from __future__ import annotations

from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from modules.catalog.dtos import ColorDTO, ProductCategoryDTO, ProductNameDTO
from modules.catalog.repositories import CatalogDjangoRepository


class CatalogView(APIView):
    """GET /api/v1/catalog/

    Categories, products and colours in one payload, for the order form.
    ``?category=<id>`` narrows the product list.
    """

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._repo = CatalogDjangoRepository()

    def get(self, request: Request) -> Response:
        categories = [ProductCategoryDTO.from_entity(c) for c in self._repo.list_categories()]
        products = [ProductNameDTO.from_entity(p) for p in self._repo.list_products()]
        colors = [ColorDTO.from_entity(c) for c in self._repo.list_colors()]

        category = request.query_params.get("category")
        if category:
            products = [p for p in products if str(p.category_id) == category]

        return Response(
            {
                "categories": [c.model_dump(mode="json") for c in categories],
                "products": [p.model_dump(mode="json") for p in products],
                "colors": [c.model_dump(mode="json") for c in colors],
            }
        )
