"""Customer URL configuration."""

from __future__ import annotations

from django.urls import path

from modules.customers.views import (
    CustomerImportTemplateView,
    CustomerImportView,
    CustomerListView,
)

urlpatterns = [
    path("customers/", CustomerListView.as_view(), name="customer-list"),
    path("customers/import/", CustomerImportView.as_view(), name="customer-import"),
    path(
        "customers/import/template/",
        CustomerImportTemplateView.as_view(),
        name="customer-import-template",
    ),
]
