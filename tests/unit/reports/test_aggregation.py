"""Unit tests for the order aggregation engine.

Every function is pure, so the orders are built in memory.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from uuid import uuid4

import pytest

from modules.coordinators.dtos import SalesCoordinatorDTO
from modules.customers.dtos import CustomerContactDTO, CustomerStatus
from modules.reports.aggregation import (
    average_processing_days,
    build_report,
    customer_names,
    customer_order_count,
    customer_rollup,
    dashboard_stats,
    monthly_time_series,
    most_popular_product,
    order_type_distribution,
    priority_distribution,
    recent_activity,
    sales_by_coordinator,
    status_distribution,
    top_customers,
    top_entities,
)

pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# Dashboard
# ---------------------------------------------------------------------------


class TestDashboardStats:
    def test_counts_and_revenue(self, make_order):
        orders = [
            make_order(status="dispatched", order_date=date(2024, 3, 2), quantity=2),
            make_order(status="dispatched", order_date=date(2024, 2, 10), quantity=1),
            make_order(status="pending-approval"),
            make_order(status="sticker-printing"),
            make_order(status="under-fusing"),
            make_order(status="sample-approval"),
        ]

        stats = dashboard_stats(orders, date(2024, 3, 20))

        assert stats.total_orders == 6
        assert stats.pending_orders == 1
        assert stats.in_progress == 2
        assert stats.completed_this_month == 1
        assert stats.revenue == Decimal("200.00")
        assert stats.average_order_value == Decimal("150.00")

    def test_zero_not_nan_without_dispatched_orders(self, make_order):
        stats = dashboard_stats([make_order(), make_order(status="cancelled")], date(2024, 3, 20))
        assert stats.revenue == 0
        assert stats.average_order_value == 0
        assert stats.completed_this_month == 0

    def test_empty_input(self):
        stats = dashboard_stats([], date(2024, 3, 20))
        assert stats.total_orders == 0
        assert stats.average_order_value == 0

    def test_average_is_rounded_to_cents(self, make_order):
        orders = [
            make_order(status="dispatched", cost_per_pc="100.00"),
            make_order(status="dispatched", cost_per_pc="100.00"),
            make_order(status="dispatched", cost_per_pc="101.00"),
        ]
        stats = dashboard_stats(orders, date(2024, 3, 20))
        assert stats.average_order_value == Decimal("100.33")


class TestRecentActivity:
    def test_maps_orders_in_given_order_up_to_limit(self, make_order):
        orders = [make_order(status="dispatched"), make_order(), make_order()]

        feed = recent_activity(orders, limit=2)
        entries = list(feed)

        assert len(feed) == 2
        assert [e.order_code for e in entries] == [orders[0].order_code, orders[1].order_code]
        assert entries[0].action == f"Order {orders[0].order_code} was dispatched"
        assert entries[0].color == "#10B981"
        assert entries[0].user == "Priya Nair"
        assert entries[1].action == f"Order {orders[1].order_code} is pending approval"

    def test_feed_can_be_iterated_twice(self, make_order):
        feed = recent_activity([make_order(), make_order()])
        assert list(feed) == list(feed)

    def test_unknown_status_uses_fallbacks(self, make_order):
        entry = next(iter(recent_activity([make_order(status="on-hold")])))
        assert entry.action.endswith("was updated")
        assert entry.color == "#6B7280"


class TestPriorityDistribution:
    def test_percentages_sum_to_100(self, make_order):
        orders = [
            make_order(priority="urgent"),
            make_order(priority="high"),
            make_order(priority="high"),
            make_order(priority="low"),
            make_order(priority="medium"),
            make_order(priority="medium"),
            make_order(priority="low"),
        ]
        buckets = priority_distribution(orders)
        assert sum(b.percentage for b in buckets) == pytest.approx(100.0)

    def test_four_buckets_most_pressing_first(self, make_order):
        buckets = priority_distribution([make_order(priority="low")])
        assert [b.priority for b in buckets] == ["urgent", "high", "medium", "low"]
        assert [b.count for b in buckets] == [0, 0, 0, 1]
        assert buckets[0].color == "#EF4444"
        assert buckets[0].label == "Urgent"

    def test_dispatched_orders_are_excluded(self, make_order):
        orders = [
            make_order(priority="urgent", status="dispatched"),
            make_order(priority="low"),
        ]
        buckets = {b.priority: b for b in priority_distribution(orders)}
        assert buckets["urgent"].count == 0
        assert buckets["low"].percentage == pytest.approx(100.0)

    def test_cancelled_orders_still_count(self, make_order):
        orders = [make_order(priority="high", status="cancelled"), make_order(priority="low")]
        buckets = {b.priority: b for b in priority_distribution(orders)}
        assert buckets["high"].count == 1
        assert buckets["high"].percentage == pytest.approx(50.0)

    def test_empty_when_everything_is_dispatched(self, make_order):
        assert priority_distribution([make_order(status="dispatched")]) == []
        assert priority_distribution([]) == []


class TestMonthlyTimeSeries:
    def test_only_months_with_orders_in_chronological_order(self, make_order):
        orders = [
            make_order(order_date=date(2024, 6, 1), status="dispatched"),
            make_order(order_date=date(2024, 3, 15)),
            make_order(order_date=date(2024, 3, 2), status="dispatched"),
        ]

        series = monthly_time_series(orders)

        assert [(b.year, b.month) for b in series] == [(2024, 3), (2024, 6)]
        assert [b.label for b in series] == ["Mar 24", "Jun 24"]
        assert series[0].orders == 2
        assert series[0].revenue == Decimal("100.00")

    def test_window_keeps_latest_months(self, make_order):
        orders = [make_order(order_date=date(2023, month, 1)) for month in range(1, 13)]
        series = monthly_time_series(orders, window_months=6)
        assert [b.month for b in series] == [7, 8, 9, 10, 11, 12]

    def test_year_boundary_sorts_by_year_first(self, make_order):
        orders = [make_order(order_date=date(2024, 1, 5)), make_order(order_date=date(2023, 12, 5))]
        assert [b.label for b in monthly_time_series(orders)] == ["Dec 23", "Jan 24"]


class TestCategoricalDistributions:
    def test_order_types_in_first_seen_order(self, make_order):
        orders = [
            make_order(order_type="rush"),
            make_order(order_type="new"),
            make_order(order_type="rush"),
        ]
        slices = order_type_distribution(orders)
        assert [(s.key, s.label, s.count) for s in slices] == [("rush", "Rush", 2), ("new", "New", 1)]
        assert slices[0].color == "#EF4444"

    def test_status_distribution_follows_lifecycle_and_skips_zero(self, make_order):
        orders = [
            make_order(status="dispatched"),
            make_order(status="pending-approval"),
            make_order(status="dispatched"),
        ]
        slices = status_distribution(orders)
        assert [(s.key, s.count) for s in slices] == [("pending-approval", 1), ("dispatched", 2)]
        assert slices[1].label == "Dispatched"


# ---------------------------------------------------------------------------
# Rollups
# ---------------------------------------------------------------------------


class TestTopEntities:
    def test_ranked_by_dispatched_revenue(self, make_order):
        orders = [
            make_order(customer_name="Small", status="dispatched", quantity=1),
            make_order(customer_name="Big", status="dispatched", quantity=5),
            make_order(customer_name="Big", status="pending-approval", quantity=50),
        ]
        rollups = top_customers(orders)
        assert [r.key for r in rollups] == ["Big", "Small"]
        assert rollups[0].orders == 2
        assert rollups[0].completed == 1
        assert rollups[0].revenue == Decimal("500.00")

    def test_ties_keep_first_seen_order(self, make_order):
        orders = [
            make_order(customer_name="Charlie"),
            make_order(customer_name="Alpha"),
            make_order(customer_name="Bravo"),
        ]
        rollups = top_entities(orders, lambda o: o.customer_name)
        assert [r.key for r in rollups] == ["Charlie", "Alpha", "Bravo"]

    def test_limit(self, make_order):
        orders = [make_order(customer_name=f"Customer {i}") for i in range(8)]
        assert len(top_customers(orders)) == 5
        assert len(top_customers(orders, limit=None)) == 8

    def test_sales_by_coordinator_includes_idle_coordinators(self, make_order):
        busy = SalesCoordinatorDTO(id=uuid4(), name="Busy", email="busy@example.com")
        idle = SalesCoordinatorDTO(id=uuid4(), name="Idle", email="idle@example.com")
        orders = [
            make_order(coordinator=busy, status="dispatched", quantity=3),
            make_order(coordinator=busy),
        ]

        rows = sales_by_coordinator(orders, [idle, busy])

        assert [r.name for r in rows] == ["Busy", "Idle"]
        assert rows[0].orders == 2
        assert rows[0].completed_orders == 1
        assert rows[0].revenue == Decimal("300.00")
        assert rows[1].orders == 0
        assert rows[1].revenue == 0


class TestCustomerRollup:
    def test_total_spent_counts_every_status(self, make_order):
        orders = [
            make_order(customer_name="Acme Co", status="dispatched", cost_per_pc="100.00"),
            make_order(customer_name="Acme Co", status="pending-approval", cost_per_pc="200.00"),
        ]
        [customer] = customer_rollup(orders, now=date(2024, 3, 20))
        assert customer.name == "Acme Co"
        assert customer.total_orders == 2
        assert customer.total_spent == Decimal("300.00")

    def test_names_are_trimmed_but_case_sensitive(self, make_order):
        orders = [
            make_order(customer_name=" Acme Co "),
            make_order(customer_name="Acme Co"),
            make_order(customer_name="ACME CO"),
        ]
        customers = customer_rollup(orders, now=date(2024, 3, 20))
        assert [(c.name, c.total_orders) for c in customers] == [("ACME CO", 1), ("Acme Co", 2)]

    def test_status_follows_last_order_date(self, make_order):
        orders = [
            make_order(customer_name="Recent", order_date=date(2024, 3, 1)),
            make_order(customer_name="Dormant", order_date=date(2023, 1, 1)),
        ]
        customers = {c.name: c for c in customer_rollup(orders, now=date(2024, 3, 20))}
        assert customers["Recent"].status == CustomerStatus.ACTIVE
        assert customers["Recent"].last_order_date == date(2024, 3, 1)
        assert customers["Dormant"].status == CustomerStatus.INACTIVE

    def test_contact_details_come_from_directory(self, make_order):
        directory = [
            CustomerContactDTO(
                name="Acme Co", email="buyer@acme.test", phone="555-0100", company="Acme"
            )
        ]
        [customer] = customer_rollup(
            [make_order(customer_name="Acme Co")], now=date(2024, 3, 20), directory=directory
        )
        assert customer.email == "buyer@acme.test"
        assert customer.phone == "555-0100"

    def test_blank_names_are_skipped(self, make_order):
        assert customer_rollup([make_order(customer_name="  ")], now=date(2024, 3, 20)) == []

    def test_customer_names_and_order_count(self, make_order):
        orders = [
            make_order(customer_name="Zenith Gym"),
            make_order(customer_name="Acme Co"),
            make_order(customer_name="Acme Co "),
        ]
        assert customer_names(orders) == ["Acme Co", "Zenith Gym"]
        assert customer_order_count(orders, "Acme Co") == 2


# ---------------------------------------------------------------------------
# Reports
# ---------------------------------------------------------------------------


class TestBuildReport:
    @pytest.fixture()
    def orders(self, make_order):
        return [
            make_order(
                customer_name="Acme Co",
                status="dispatched",
                priority="high",
                order_date=date(2024, 3, 5),
                delivery_date=date(2024, 3, 15),
                quantity=2,
            ),
            make_order(
                customer_name="Acme Co",
                priority="low",
                order_date=date(2024, 3, 10),
            ),
            make_order(
                customer_name="Zenith Gym",
                status="dispatched",
                priority="high",
                order_date=date(2024, 3, 20),
                delivery_date=date(2024, 3, 25),
                cost_per_pc="300.00",
                product_name="Hoodie",
            ),
            make_order(
                customer_name="Old Customer",
                status="dispatched",
                order_date=date(2024, 1, 10),
                cost_per_pc="999.00",
            ),
        ]

    def test_window_and_summary(self, orders):
        report = build_report(orders, [], now=date(2024, 3, 31), days=30)

        assert report.start_date == date(2024, 3, 1)
        assert report.end_date == date(2024, 3, 31)
        assert report.date_range == "01-Mar-24 - 31-Mar-24"
        assert report.summary.total_orders == 3
        assert report.summary.completed_orders == 2
        assert report.summary.pending_orders == 1
        assert report.summary.total_revenue == Decimal("500.00")
        assert report.summary.average_order_value == Decimal("250.00")

    def test_rankings_and_derived_metrics(self, orders):
        report = build_report(orders, [], now=date(2024, 3, 31), days=30)

        assert [c.key for c in report.top_customers] == ["Zenith Gym", "Acme Co"]
        assert report.customer_retention == 50
        assert report.average_processing_days == 8
        assert report.most_popular_product == "Polo Tee"
        assert [(s.key, s.count) for s in report.status_distribution] == [
            ("pending-approval", 1),
            ("dispatched", 2),
        ]
        assert [(s.key, s.count) for s in report.priority_distribution] == [
            ("high", 2),
            ("low", 1),
        ]

    def test_longer_window_includes_older_orders(self, orders):
        report = build_report(orders, [], now=date(2024, 3, 31), days=90)
        assert report.summary.total_orders == 4

    def test_empty_window(self, orders):
        report = build_report(orders, [], now=date(2025, 1, 1), days=7)
        assert report.summary.total_orders == 0
        assert report.summary.average_order_value == 0
        assert report.most_popular_product == "N/A"
        assert report.average_processing_days == 0
        assert report.customer_retention == 0
        assert report.top_customers == []

    def test_processing_days_only_counts_dispatched(self, make_order):
        orders = [
            make_order(
                status="dispatched",
                order_date=date(2024, 3, 1),
                delivery_date=date(2024, 3, 4),
            ),
            make_order(order_date=date(2024, 3, 1), delivery_date=date(2024, 4, 1)),
        ]
        assert average_processing_days(orders) == 3

    def test_most_popular_product(self, make_order):
        orders = [
            make_order(product_name="Hoodie"),
            make_order(product_name="Cap"),
            make_order(product_name="Hoodie"),
        ]
        assert most_popular_product(orders) == "Hoodie"
