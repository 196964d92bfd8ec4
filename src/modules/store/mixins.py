"""View helpers shared by every endpoint that reads the data store."""

from __future__ import annotations

from typing import Optional

import structlog
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response

from modules.core.sessions import session_id_from
from modules.store.data_store import DataStore
from modules.store.exceptions import DataLoadError, ValidationError
from modules.store.factory import build_data_store

logger = structlog.get_logger(__name__)

def validation_error_response(exc: ValidationError) -> Response:
    body: dict = {"detail": str(exc)}
    if exc.errors:
        body["errors"] = exc.errors
    return Response(body, status=status.HTTP_400_BAD_REQUEST)


class DataStoreMixin:
    """Gives an API view a per-request ``DataStore``.

    A failed snapshot load is answered with 503 for every action of the
    view, since nothing can be shown without data.
    """

    _store: Optional[DataStore] = None

    @property
    def store(self) -> DataStore:
        if self._store is None:
            self._store = build_data_store()
        return self._store

    def session_id(self, request: Request) -> str:
        return session_id_from(request)

    def handle_exception(self, exc: Exception) -> Response:
        if isinstance(exc, DataLoadError):
            logger.error("store.unavailable", error=str(exc))
            return Response(
                {"detail": "Order data is unavailable. Please try again later."},
                status=status.HTTP_503_SERVICE_UNAVAILABLE,
            )
        return super().handle_exception(exc)  # type: ignore[misc]
