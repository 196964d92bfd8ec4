"""Notification URL configuration."""

from __future__ import annotations

from django.urls import path

from modules.notifications.views import (
    NotificationBroadcastView,
    NotificationDismissView,
    NotificationListView,
)

urlpatterns = [
    path("notifications/", NotificationListView.as_view(), name="notification-list"),
    path(
        "notifications/broadcast/",
        NotificationBroadcastView.as_view(),
        name="notification-broadcast",
    ),
    path(
        "notifications/<uuid:pk>/",
        NotificationDismissView.as_view(),
        name="notification-dismiss",
    ),
]
