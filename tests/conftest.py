from datetime import date, datetime, timezone
from decimal import Decimal
from uuid import uuid4

import pytest

from django.contrib.auth import get_user_model

from rest_framework.test import APIClient

from modules.catalog.dtos import ColorDTO, ProductCategoryDTO, ProductNameDTO
from modules.catalog.models import Color, ProductCategory, ProductName
from modules.coordinators.dtos import SalesCoordinatorDTO
from modules.coordinators.models import SalesCoordinator
from modules.notifications.center import hub
from modules.orders.constants import SIZE_LABELS
from modules.orders.dtos import CreateOrderDTO, OrderDTO
from modules.store.factory import build_data_store

User = get_user_model()


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture(autouse=True)
def _reset_notification_hub():
    """Drop every session the global hub registered during a test."""
    yield
    for session_id in hub.sessions():
        hub.disconnect(session_id)


@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints."""
    return APIClient()


@pytest.fixture()
def api_client_with_correlation(api_client):
    """APIClient pre-configured with a known correlation ID header."""
    cid = "test-correlation-id-fixture"
    api_client.defaults["HTTP_X_REQUEST_ID"] = cid
    return api_client, cid


@pytest.fixture()
def user():
    return User.objects.create_user(username="desk", password="testpass123")


@pytest.fixture()
def auth_client(user):
    """APIClient with a force-authenticated Django user."""
    client = APIClient()
    client.force_authenticate(user=user)
    return client


# ---------------------------------------------------------------------------
# Reference rows
# ---------------------------------------------------------------------------


@pytest.fixture()
def category():
    return ProductCategory.objects.create(name="T-Shirts")


@pytest.fixture()
def black():
    return Color.objects.create(name="Black", hex_code="#000000")


@pytest.fixture()
def white():
    return Color.objects.create(name="White", hex_code="#FFFFFF")


@pytest.fixture()
def product(category, black):
    """Polo tee that may only be ordered in black."""
    return ProductName.objects.create(
        name="Polo Tee",
        category=category,
        base_price=Decimal("320.00"),
        available_colors=[str(black.id)],
    )


@pytest.fixture()
def coordinator():
    return SalesCoordinator.objects.create(
        name="Priya Nair", email="priya@example.com", phone="+91 98450 11111"
    )


@pytest.fixture()
def order_payload(coordinator, category, product, black):
    """A valid create payload for the orders API."""
    return {
        "order_date": "2024-03-05",
        "delivery_date": "2024-03-20",
        "customer_name": "Acme Co",
        "order_type": "new",
        "priority": "high",
        "coordinator_id": str(coordinator.id),
        "category_id": str(category.id),
        "product_id": str(product.id),
        "color_id": str(black.id),
        "description": "Staff polos",
        "size_breakdown": {"S": 2, "M": 3},
        "branding_type": "embroidery",
        "placements": [{"name": "Left Chest", "size": "3in"}],
        "cost_per_pc": "100.00",
    }


@pytest.fixture()
def store():
    return build_data_store()


@pytest.fixture()
def create_order(store, order_payload):
    """Persist an order through the data store; keyword overrides apply."""

    def _create(**overrides) -> OrderDTO:
        return store.create_order(CreateOrderDTO(**{**order_payload, **overrides}))

    return _create


# ---------------------------------------------------------------------------
# In-memory orders for the aggregation functions
# ---------------------------------------------------------------------------


@pytest.fixture()
def make_order():
    """Build an ``OrderDTO`` without touching the database.

    ``quantity`` puts that many pieces in size M; ``coordinator`` and
    ``product_name`` select the embedded reference copies.
    """
    category = ProductCategoryDTO(id=uuid4(), name="T-Shirts")
    color = ColorDTO(id=uuid4(), name="Black", hex_code="#000000")
    default_coordinator = SalesCoordinatorDTO(
        id=uuid4(), name="Priya Nair", email="priya@example.com"
    )
    products: dict = {}
    counter = iter(range(1, 10_000))

    def _make(
        status="pending-approval",
        priority="medium",
        order_type="new",
        customer_name="Acme Co",
        order_date=date(2024, 3, 5),
        delivery_date=None,
        cost_per_pc="100.00",
        quantity=1,
        coordinator=None,
        product_name="Polo Tee",
        **overrides,
    ) -> OrderDTO:
        sequence = next(counter)
        product = products.setdefault(
            product_name,
            ProductNameDTO(id=uuid4(), name=product_name, category_id=category.id),
        )
        stamp = datetime(2024, 3, 1, 10, 0, tzinfo=timezone.utc)
        values = {
            "id": uuid4(),
            "order_code": f"SP/2024/{sequence:04d}",
            "order_date": order_date,
            "delivery_date": delivery_date or order_date,
            "customer_name": customer_name,
            "order_type": order_type,
            "priority": priority,
            "coordinator": coordinator or default_coordinator,
            "category": category,
            "product": product,
            "color": color,
            "description": "Staff polos",
            "size_breakdown": {label: (quantity if label == "M" else 0) for label in SIZE_LABELS},
            "branding_type": "none",
            "cost_per_pc": Decimal(cost_per_pc),
            "status": status,
            "created_at": stamp,
            "updated_at": stamp,
            "snapshot_taken_at": stamp,
        }
        values.update(overrides)
        return OrderDTO(**values)

    return _make
