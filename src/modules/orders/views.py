"""Order API views.

Reads come from the request's data snapshot; writes go through the
``DataStore`` so they are validated, persisted and followed by a reload.
Domain exceptions are caught and translated into HTTP status codes.
"""

from __future__ import annotations

from django_filters.rest_framework import DjangoFilterBackend
from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.filters import OrderingFilter, SearchFilter
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.core.pagination import StandardResultsSetPagination
from modules.orders.dtos import CreateOrderDTO, UpdateOrderDTO
from modules.orders.exceptions import OrderNotFound
from modules.orders.filters import OrderFilter
from modules.orders.models import Order
from modules.orders.serializers import OrderFilesSerializer, OrderWriteSerializer
from modules.store.exceptions import ValidationError
from modules.store.mixins import DataStoreMixin, validation_error_response


def _not_found() -> Response:
    return Response({"detail": "Order not found."}, status=status.HTTP_404_NOT_FOUND)


def _invalid(exc: PydanticValidationError) -> Response:
    return Response(
        {
            "detail": "Invalid order.",
            "errors": exc.errors(include_url=False, include_context=False, include_input=False),
        },
        status=status.HTTP_400_BAD_REQUEST,
    )


class OrderViewSet(DataStoreMixin, GenericViewSet):
    """ViewSet for Order operations.

    Does **not** extend ``ModelViewSet``: the queryset is only used to
    apply filters, search and ordering; the rows returned are the
    snapshot's ``OrderDTO``s for the matching ids.
    """

    queryset = Order.objects.all()
    filterset_class = OrderFilter
    search_fields = ["order_code", "customer_name", "description"]
    ordering_fields = ["created_at", "order_date", "delivery_date", "total_amount", "status"]
    ordering = ["-created_at", "-id"]
    filter_backends = [DjangoFilterBackend, SearchFilter, OrderingFilter]
    parser_classes = [JSONParser, MultiPartParser, FormParser]

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def list(self, request: Request) -> Response:
        """GET /api/v1/orders/"""
        snapshot = self.store.snapshot
        by_id = {order.id: order for order in snapshot.orders}
        ids = self.filter_queryset(self.get_queryset()).values_list("id", flat=True)
        orders = [by_id[pk] for pk in ids if pk in by_id]

        paginator = StandardResultsSetPagination()
        page = paginator.paginate_queryset(orders, request, view=self)
        return paginator.get_paginated_response(
            [order.model_dump(mode="json") for order in page]
        )

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/orders/{pk}/"""
        order = self.store.snapshot.order(pk) if pk else None
        if order is None:
            return _not_found()
        return Response(order.model_dump(mode="json"))

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /api/v1/orders/"""
        serializer = OrderWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            draft = CreateOrderDTO(**serializer.validated_data)
        except PydanticValidationError as exc:
            return _invalid(exc)

        try:
            order = self.store.create_order(draft, session_id=self.session_id(request))
        except ValidationError as exc:
            return validation_error_response(exc)
        return Response(order.model_dump(mode="json"), status=status.HTTP_201_CREATED)

    # ------------------------------------------------------------------
    # Update
    # ------------------------------------------------------------------

    def update(self, request: Request, pk: str | None = None, partial: bool = False) -> Response:
        """PUT/PATCH /api/v1/orders/{pk}/

        PUT requires the full record; PATCH only the fields to change.
        Either way the merged record is validated again in full.
        """
        serializer = OrderWriteSerializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        try:
            patch = UpdateOrderDTO(**serializer.validated_data)
        except PydanticValidationError as exc:
            return _invalid(exc)

        try:
            order = self.store.update_order(pk, patch, session_id=self.session_id(request))
        except OrderNotFound:
            return _not_found()
        except ValidationError as exc:
            return validation_error_response(exc)
        return Response(order.model_dump(mode="json"))

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        return self.update(request, pk=pk, partial=True)

    # ------------------------------------------------------------------
    # Files
    # ------------------------------------------------------------------

    @action(detail=True, methods=["post"], parser_classes=[MultiPartParser, FormParser])
    def files(self, request: Request, pk: str | None = None) -> Response:
        """POST /api/v1/orders/{pk}/files/

        Multipart body with ``bucket`` (``mockups`` or ``attachments``) and
        one or more ``files``.  Files that fail to upload are left out.
        """
        serializer = OrderFilesSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        try:
            order = self.store.attach_files(
                pk,
                data["bucket"],
                data["files"],
                session_id=self.session_id(request),
            )
        except OrderNotFound:
            return _not_found()
        except ValidationError as exc:
            return validation_error_response(exc)
        return Response(order.model_dump(mode="json"))
