"""Dashboard and reports API views.

Every endpoint loads one snapshot and runs the aggregation functions
over it; nothing is cached between requests.
"""

from __future__ import annotations

from django.conf import settings
from django.utils import timezone
from rest_framework import serializers
from rest_framework.renderers import JSONRenderer
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from modules.reports import aggregation
from modules.reports.renderers import CSVRenderer
from modules.store.mixins import DataStoreMixin


class ReportQuerySerializer(serializers.Serializer):
    days = serializers.IntegerField(min_value=1, max_value=3650, required=False)


def _dump(items) -> list:
    return [item.model_dump(mode="json") for item in items]


class DashboardView(DataStoreMixin, APIView):
    """GET /api/v1/dashboard/"""

    def get(self, request: Request) -> Response:
        snapshot = self.store.snapshot
        orders = snapshot.orders
        now = timezone.now()
        return Response(
            {
                "stats": aggregation.dashboard_stats(orders, now).model_dump(mode="json"),
                "recent_activity": _dump(
                    aggregation.recent_activity(
                        orders, limit=settings.RECENT_ACTIVITY_LIMIT, now=now
                    )
                ),
                "priority_distribution": _dump(aggregation.priority_distribution(orders)),
                "monthly": _dump(
                    aggregation.monthly_time_series(
                        orders, window_months=settings.MONTHLY_WINDOW
                    )
                ),
                "order_types": _dump(aggregation.order_type_distribution(orders)),
                "top_customers": _dump(aggregation.top_customers(orders)),
                "sales_by_coordinator": _dump(
                    aggregation.sales_by_coordinator(orders, snapshot.coordinators)
                ),
            }
        )


class ReportView(DataStoreMixin, APIView):
    """GET /api/v1/reports/?days=30"""

    def build(self, request: Request) -> dict:
        query = ReportQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        days = query.validated_data.get("days", settings.REPORT_DEFAULT_DAYS)
        snapshot = self.store.snapshot
        report = aggregation.build_report(
            snapshot.orders, snapshot.coordinators, timezone.now(), days=days
        )
        return report.model_dump(mode="json")

    def get(self, request: Request) -> Response:
        return Response(self.build(request))


class ReportExportView(ReportView):
    """GET /api/v1/reports/export/?format=json|csv&days=30

    Served as a download named ``report-<date>.<format>``.
    """

    renderer_classes = [JSONRenderer, CSVRenderer]

    def get(self, request: Request) -> Response:
        response = Response(self.build(request))
        extension = getattr(request.accepted_renderer, "format", "json")
        filename = f"report-{timezone.localdate().isoformat()}.{extension}"
        response["Content-Disposition"] = f'attachment; filename="{filename}"'
        return response
