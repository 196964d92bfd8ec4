"""Dashboard and reports URL configuration."""

from __future__ import annotations

from django.urls import path

from modules.reports.views import DashboardView, ReportExportView, ReportView

urlpatterns = [
    path("dashboard/", DashboardView.as_view(), name="dashboard"),
    path("reports/", ReportView.as_view(), name="reports"),
    path("reports/export/", ReportExportView.as_view(), name="reports-export"),
]
