"""Catalog URL configuration."""

from __future__ import annotations

from django.urls import path

from modules.catalog.views import CatalogView

urlpatterns = [
    path("catalog/", CatalogView.as_view(), name="catalog"),
]
