"""Notification DRF serializers."""

from __future__ import annotations

from rest_framework import serializers

from modules.notifications.dtos import NotificationType, SoundCue


class NotificationDraftSerializer(serializers.Serializer):
    type = serializers.ChoiceField(choices=NotificationType.choices)
    title = serializers.CharField(max_length=200)
    message = serializers.CharField(required=False, default="", allow_blank=True)
    sound = serializers.ChoiceField(
        choices=SoundCue.choices, required=False, allow_null=True, default=None
    )
    duration = serializers.IntegerField(
        required=False, allow_null=True, default=None, min_value=0
    )


class NotificationSerializer(serializers.Serializer):
    id = serializers.UUIDField(read_only=True)
    type = serializers.CharField(read_only=True)
    title = serializers.CharField(read_only=True)
    message = serializers.CharField(read_only=True)
    sound = serializers.CharField(read_only=True, allow_null=True)
    duration = serializers.IntegerField(read_only=True)
    timestamp = serializers.DateTimeField(read_only=True)
    expires_at = serializers.DateTimeField(read_only=True)
