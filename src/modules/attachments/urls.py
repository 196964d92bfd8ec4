"""Attachment URL configuration."""

from __future__ import annotations

from django.urls import path

from modules.attachments.views import FileTreeView

urlpatterns = [
    path("files/tree/", FileTreeView.as_view(), name="file-tree"),
]
