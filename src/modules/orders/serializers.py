"""Order DRF serializers for API input.

Shape and type checks happen here; the business rules (size labels,
placements, references) are enforced by the DTOs and the data store.
Responses are the JSON form of ``OrderDTO``.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.attachments.storage import BUCKETS
from modules.orders.constants import BrandingType, OrderStatus, OrderType, Priority


class PlacementSerializer(serializers.Serializer):
    name = serializers.CharField(allow_blank=True, max_length=100)
    size = serializers.CharField(required=False, default="", allow_blank=True, max_length=50)


class OrderWriteSerializer(serializers.Serializer):
    """Validates an order create or full-replace payload.

    Use ``partial=True`` for PATCH.  ``total_qty`` and ``total_amount``
    are not accepted; they are always derived.
    """

    order_code = serializers.CharField(required=False, allow_blank=True, max_length=32)
    order_date = serializers.DateField()
    delivery_date = serializers.DateField()
    edd = serializers.DateField(required=False, allow_null=True)
    customer_name = serializers.CharField(max_length=255)
    order_type = serializers.ChoiceField(choices=OrderType.choices)
    priority = serializers.ChoiceField(choices=Priority.choices, required=False)
    coordinator_id = serializers.UUIDField()
    category_id = serializers.UUIDField()
    product_id = serializers.UUIDField()
    color_id = serializers.UUIDField()
    description = serializers.CharField()
    size_breakdown = serializers.DictField(child=serializers.IntegerField())
    branding_type = serializers.ChoiceField(choices=BrandingType.choices, required=False)
    placements = PlacementSerializer(many=True, required=False)
    mockup_files = serializers.ListField(child=serializers.CharField(), required=False)
    attachments = serializers.ListField(child=serializers.CharField(), required=False)
    remarks = serializers.CharField(required=False, allow_blank=True)
    cost_per_pc = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0)
    status = serializers.ChoiceField(choices=OrderStatus.choices, required=False)


class OrderFilesSerializer(serializers.Serializer):
    bucket = serializers.ChoiceField(choices=[(bucket, bucket) for bucket in BUCKETS])
    files = serializers.ListField(child=serializers.FileField(), allow_empty=False)
