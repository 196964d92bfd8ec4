"""Customer API views.

The customer list is the rollup derived from orders in the current
snapshot.  Import adds contact details that the rollup picks up on the
next load.
"""

from __future__ import annotations

from django.http import HttpResponse
from rest_framework import status
from rest_framework.parsers import FormParser, MultiPartParser
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from modules.core.pagination import StandardResultsSetPagination
from modules.customers.exceptions import ImportFileError
from modules.customers.importers import TEMPLATE_CSV
from modules.customers.repositories import CustomerDjangoRepository
from modules.customers.serializers import CustomerImportSerializer, CustomerQuerySerializer
from modules.customers.services import CustomerImportService
from modules.store.mixins import DataStoreMixin


class CustomerListView(DataStoreMixin, APIView):
    """GET /api/v1/customers/?search=&status=active|inactive"""

    def get(self, request: Request) -> Response:
        query = CustomerQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        search = query.validated_data.get("search", "").strip().lower()
        wanted_status = query.validated_data.get("status")

        customers = [
            customer
            for customer in self.store.snapshot.customers
            if (not search or search in customer.name.lower() or search in customer.email.lower())
            and (not wanted_status or customer.status == wanted_status)
        ]
        paginator = StandardResultsSetPagination()
        page = paginator.paginate_queryset(customers, request, view=self)
        return paginator.get_paginated_response(
            [customer.model_dump(mode="json") for customer in page]
        )


class CustomerImportView(APIView):
    """POST /api/v1/customers/import/ (multipart, field ``file``)

    Responds 200 with the imported count and per-row errors; a file that
    cannot be read at all is a 400.
    """

    parser_classes = [MultiPartParser, FormParser]

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = CustomerImportService(repository=CustomerDjangoRepository())

    def post(self, request: Request) -> Response:
        serializer = CustomerImportSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        upload = serializer.validated_data["file"]
        try:
            result = self._service.import_file(upload.name, upload.read())
        except ImportFileError as exc:
            return Response(
                {"detail": str(exc), "success": 0, "errors": [str(exc)]},
                status=status.HTTP_400_BAD_REQUEST,
            )
        return Response(
            {
                "success": result.success,
                "errors": [error.message for error in result.errors],
                "customers": [c.model_dump(mode="json") for c in result.customers],
            }
        )


class CustomerImportTemplateView(APIView):
    """GET /api/v1/customers/import/template/"""

    def get(self, request: Request) -> HttpResponse:
        response = HttpResponse(TEMPLATE_CSV, content_type="text/csv")
        response["Content-Disposition"] = 'attachment; filename="customer-template.csv"'
        return response
