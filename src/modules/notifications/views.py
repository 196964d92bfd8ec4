"""Notification API views.

The dashboard identifies its session with the ``X-Session-ID`` header;
every endpoint here works on that session's toast queue.
"""

from __future__ import annotations

from uuid import UUID

from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from modules.core.sessions import SESSION_HEADER, session_id_from
from modules.notifications.center import hub
from modules.notifications.dtos import NotificationDraft
from modules.notifications.serializers import (
    NotificationSerializer,
    NotificationDraftSerializer,
)


def _missing_session() -> Response:
    return Response(
        {"detail": f"Header '{SESSION_HEADER}' is required."},
        status=status.HTTP_400_BAD_REQUEST,
    )


def _read_draft(request: Request) -> NotificationDraft:
    serializer = NotificationDraftSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    return NotificationDraft(**serializer.validated_data)


class NotificationListView(APIView):
    """GET lists active toasts; POST enqueues a toast for this session only."""

    def get(self, request: Request) -> Response:
        session_id = session_id_from(request)
        if not session_id:
            return _missing_session()
        active = hub.connect(session_id).active()
        return Response(NotificationSerializer(active, many=True).data)

    def post(self, request: Request) -> Response:
        session_id = session_id_from(request)
        if not session_id:
            return _missing_session()
        notification = hub.connect(session_id).notify(_read_draft(request))
        return Response(
            NotificationSerializer(notification).data,
            status=status.HTTP_201_CREATED,
        )


class NotificationBroadcastView(APIView):
    """POST echoes a toast to this session and fans it out to the others."""

    def post(self, request: Request) -> Response:
        session_id = session_id_from(request)
        if not session_id:
            return _missing_session()
        notification = hub.broadcast(_read_draft(request), origin=session_id)
        return Response(
            NotificationSerializer(notification).data,
            status=status.HTTP_201_CREATED,
        )


class NotificationDismissView(APIView):
    def delete(self, request: Request, pk: UUID) -> Response:
        session_id = session_id_from(request)
        if not session_id:
            return _missing_session()
        if not hub.connect(session_id).dismiss(pk):
            return Response(
                {"detail": "Notification not found."},
                status=status.HTTP_404_NOT_FOUND,
            )
        return Response(status=status.HTTP_204_NO_CONTENT)
