"""Sales coordinator API views.

Coordinator writes merge the saved row into the snapshot rather than
reloading everything, so orders keep their embedded coordinator copy
until the next load.
"""

from __future__ import annotations

from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import ViewSet

from modules.coordinators.dtos import CreateCoordinatorDTO, UpdateCoordinatorDTO
from modules.coordinators.exceptions import CoordinatorNotFound
from modules.coordinators.serializers import CoordinatorWriteSerializer
from modules.store.mixins import DataStoreMixin


def _invalid(exc: PydanticValidationError) -> Response:
    return Response(
        {
            "detail": "Invalid coordinator.",
            "errors": exc.errors(include_url=False, include_context=False, include_input=False),
        },
        status=status.HTTP_400_BAD_REQUEST,
    )


class CoordinatorViewSet(DataStoreMixin, ViewSet):
    """List, create and update sales coordinators."""

    def list(self, request: Request) -> Response:
        """GET /api/v1/coordinators/"""
        coordinators = self.store.snapshot.coordinators
        return Response([c.model_dump(mode="json") for c in coordinators])

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        coordinator = self.store.snapshot.coordinator(pk) if pk else None
        if coordinator is None:
            return Response(
                {"detail": "Coordinator not found."}, status=status.HTTP_404_NOT_FOUND
            )
        return Response(coordinator.model_dump(mode="json"))

    def create(self, request: Request) -> Response:
        """POST /api/v1/coordinators/"""
        serializer = CoordinatorWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            draft = CreateCoordinatorDTO(**serializer.validated_data)
        except PydanticValidationError as exc:
            return _invalid(exc)
        coordinator = self.store.create_coordinator(
            draft, session_id=self.session_id(request)
        )
        return Response(coordinator.model_dump(mode="json"), status=status.HTTP_201_CREATED)

    def update(self, request: Request, pk: str | None = None, partial: bool = False) -> Response:
        """PUT/PATCH /api/v1/coordinators/{pk}/"""
        serializer = CoordinatorWriteSerializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        try:
            patch = UpdateCoordinatorDTO(**serializer.validated_data)
        except PydanticValidationError as exc:
            return _invalid(exc)
        try:
            coordinator = self.store.update_coordinator(
                pk, patch, session_id=self.session_id(request)
            )
        except CoordinatorNotFound:
            return Response(
                {"detail": "Coordinator not found."}, status=status.HTTP_404_NOT_FOUND
            )
        return Response(coordinator.model_dump(mode="json"))

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        return self.update(request, pk=pk, partial=True)
