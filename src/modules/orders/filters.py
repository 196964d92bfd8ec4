import django_filters

from modules.orders.constants import BrandingType, OrderStatus, OrderType, Priority
from modules.orders.models import Order


class OrderFilter(django_filters.FilterSet):
    status = django_filters.ChoiceFilter(choices=OrderStatus.choices)
    priority = django_filters.ChoiceFilter(choices=Priority.choices)
    order_type = django_filters.ChoiceFilter(choices=OrderType.choices)
    branding_type = django_filters.ChoiceFilter(choices=BrandingType.choices)
    coordinator = django_filters.UUIDFilter(field_name="coordinator_id")
    customer = django_filters.CharFilter(field_name="customer_name", lookup_expr="iexact")
    start_date = django_filters.DateFilter(field_name="order_date", lookup_expr="gte")
    end_date = django_filters.DateFilter(field_name="order_date", lookup_expr="lte")

    class Meta:
        model = Order
        fields = [
            "status",
            "priority",
            "order_type",
            "branding_type",
            "coordinator",
            "customer",
            "start_date",
            "end_date",
        ]
