from __future__ import annotations

import random
from datetime import timedelta
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.utils import timezone

from modules.catalog.models import Color, ProductCategory, ProductName
from modules.coordinators.dtos import CreateCoordinatorDTO
from modules.orders.constants import (
    SIZE_LABELS,
    BrandingType,
    OrderStatus,
    OrderType,
    Priority,
)
from modules.orders.dtos import CreateOrderDTO
from modules.store.factory import build_data_store


class Command(BaseCommand):
    help = "Seed database with realistic development data."

    def add_arguments(self, parser):
        parser.add_argument("--orders", type=int, default=40)

    def handle(self, *args, **options):
        random.seed(42)
        self.stdout.write("Seeding development data...")

        users_created = self._seed_users()
        colors = self._seed_colors()
        products = self._seed_catalog(colors)
        store = build_data_store()
        coordinators = self._seed_coordinators(store)
        orders_created = self._seed_orders(store, coordinators, products, options["orders"])

        self.stdout.write(
            self.style.SUCCESS(
                "Seed completed: "
                f"users={users_created}, "
                f"colors={len(colors)}, "
                f"products={len(products)}, "
                f"coordinators={len(coordinators)}, "
                f"orders={orders_created}"
            )
        )

    def _seed_users(self) -> int:
        User = get_user_model()
        created = 0
        if not User.objects.filter(username="admin").exists():
            User.objects.create_superuser("admin", password="admin123")
            created += 1
        if not User.objects.filter(username="desk").exists():
            User.objects.create_user("desk", password="desk123", is_staff=True)
            created += 1
        return created

    def _seed_colors(self) -> list[Color]:
        self.stdout.write("Creating colours...")
        palette = [
            ("Black", "#000000"),
            ("White", "#FFFFFF"),
            ("Navy", "#1E3A8A"),
            ("Maroon", "#7F1D1D"),
            ("Bottle Green", "#14532D"),
            ("Grey Melange", "#9CA3AF"),
        ]
        colors = [
            Color.objects.get_or_create(name=name, defaults={"hex_code": hex_code})[0]
            for name, hex_code in palette
        ]
        self.stdout.write(self.style.SUCCESS("Creating colours... Done!"))
        return colors

    def _seed_catalog(self, colors: list[Color]) -> list[ProductName]:
        self.stdout.write("Creating catalog...")
        all_ids = [str(c.id) for c in colors]
        catalog = {
            "T-Shirts": [
                ("Round Neck Tee", Decimal("180.00"), []),
                ("Polo Tee", Decimal("320.00"), all_ids[:4]),
            ],
            "Outerwear": [
                ("Hoodie", Decimal("650.00"), all_ids[:3]),
                ("Zip Jacket", Decimal("900.00"), []),
            ],
            "Headwear": [("Baseball Cap", Decimal("150.00"), [])],
        }
        products: list[ProductName] = []
        for category_name, items in catalog.items():
            category, _ = ProductCategory.objects.get_or_create(name=category_name)
            for name, price, allowed in items:
                product, _ = ProductName.objects.get_or_create(
                    name=name,
                    category=category,
                    defaults={"base_price": price, "available_colors": allowed},
                )
                products.append(product)
        self.stdout.write(self.style.SUCCESS("Creating catalog... Done!"))
        return products

    def _seed_coordinators(self, store) -> list:
        self.stdout.write("Creating sales coordinators...")
        existing = {c.email: c for c in store.snapshot.coordinators}
        people = [
            ("Priya Nair", "priya@example.com", "+91 98450 11111"),
            ("Rahul Mehta", "rahul@example.com", "+91 98450 22222"),
            ("Sara Khan", "sara@example.com", "+91 98450 33333"),
        ]
        coordinators = []
        for name, email, phone in people:
            if email in existing:
                coordinators.append(existing[email])
                continue
            coordinators.append(
                store.create_coordinator(
                    CreateCoordinatorDTO(name=name, email=email, phone=phone)
                )
            )
        self.stdout.write(self.style.SUCCESS("Creating sales coordinators... Done!"))
        return coordinators

    def _seed_orders(self, store, coordinators, products, count: int) -> int:
        self.stdout.write("Creating orders...")
        if store.snapshot.orders:
            self.stdout.write(self.style.WARNING("Skipping orders (already seeded)."))
            return 0

        customers = ["Acme Corp", "Blue Harbor Cafe", "Northwind School", "Zenith Gym"]
        statuses = list(OrderStatus.values)
        today = timezone.localdate()
        created = 0
        for _ in range(count):
            product = random.choice(products)
            allowed = product.available_colors or [str(c.id) for c in store.snapshot.colors]
            order_date = today - timedelta(days=random.randint(0, 170))
            branding = random.choice(BrandingType.values)
            draft = CreateOrderDTO(
                order_date=order_date,
                delivery_date=order_date + timedelta(days=random.randint(7, 30)),
                customer_name=random.choice(customers),
                order_type=random.choice(OrderType.values),
                priority=random.choice(Priority.values),
                coordinator_id=random.choice(coordinators).id,
                category_id=product.category_id,
                product_id=product.id,
                color_id=random.choice(allowed),
                description=f"{product.name} for staff uniforms",
                size_breakdown={
                    label: random.choice([0, 0, 5, 10, 20]) for label in SIZE_LABELS
                },
                branding_type=branding,
                placements=[{"name": "Left Chest", "size": "3in"}],
                cost_per_pc=product.base_price,
                status=random.choice(statuses),
            )
            store.create_order(draft)
            created += 1
        self.stdout.write(self.style.SUCCESS("Creating orders... Done!"))
        return created
