"""Attachment API views."""

from __future__ import annotations

from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from modules.attachments.tree import build_file_tree
from modules.store.mixins import DataStoreMixin


class FileTreeView(DataStoreMixin, APIView):
    """GET /api/v1/files/tree/

    Uploaded files grouped by coordinator, month and order.
    """

    def get(self, request: Request) -> Response:
        snapshot = self.store.snapshot
        tree = build_file_tree(snapshot.orders, snapshot.coordinators)
        return Response([node.model_dump(mode="json") for node in tree])
