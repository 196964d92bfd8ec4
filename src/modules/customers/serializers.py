"""Customer DRF serializers."""

from __future__ import annotations

from rest_framework import serializers

from modules.customers.dtos import CustomerStatus


class CustomerQuerySerializer(serializers.Serializer):
    search = serializers.CharField(required=False, allow_blank=True)
    status = serializers.ChoiceField(choices=CustomerStatus.choices, required=False)


class CustomerImportSerializer(serializers.Serializer):
    file = serializers.FileField()
