"""Order aggregation engine.

Pure functions turning a flat sequence of ``OrderDTO`` into dashboard
metrics, distributions, time series and rollups.  Nothing here touches
the database or keeps state between calls: the same input always gives
the same output, so every function can be re-run on each snapshot.

Revenue rules:
- dashboard, report and rollup revenue counts ``dispatched`` orders only;
- ``customer_rollup().total_spent`` counts every order regardless of
  status (lifetime value, not realised revenue).
"""

from __future__ import annotations

import math
from collections import Counter
from datetime import date, datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import (
    TYPE_CHECKING,
    Callable,
    Dict,
    Hashable,
    Iterable,
    Iterator,
    List,
    Optional,
    Sequence,
    Tuple,
)

from django.utils import timezone

from modules.customers.dtos import CustomerDTO, CustomerStatus
from modules.orders.constants import (
    IN_PROGRESS_STATUSES,
    ORDER_TYPE_COLORS,
    PRIORITY_COLORS,
    PRIORITY_SEQUENCE,
    STATUS_COLORS,
    STATUS_SEQUENCE,
    UNKNOWN_COLOR,
    OrderStatus,
    Priority,
    status_action,
    status_label,
)
from modules.reports.dtos import (
    ActivityDTO,
    ChartSliceDTO,
    CoordinatorSalesDTO,
    DashboardStatsDTO,
    EntityRollupDTO,
    MonthlyBucketDTO,
    PriorityBucketDTO,
    ReportDTO,
    ReportSummaryDTO,
)
from modules.reports.formatting import format_date, month_label

if TYPE_CHECKING:
    from modules.coordinators.dtos import SalesCoordinatorDTO
    from modules.customers.dtos import CustomerContactDTO
    from modules.orders.dtos import OrderDTO

ZERO = Decimal("0")
CENTS = Decimal("0.01")

DEFAULT_ACTIVITY_LIMIT = 10
DEFAULT_MONTH_WINDOW = 6
DEFAULT_ACTIVE_WINDOW_DAYS = 180
DASHBOARD_TOP_CUSTOMERS = 5
REPORT_TOP_CUSTOMERS = 10


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _today(now: date | datetime) -> date:
    if isinstance(now, datetime):
        return timezone.localdate(now) if timezone.is_aware(now) else now.date()
    return now


def _is_dispatched(order: OrderDTO) -> bool:
    return order.status == OrderStatus.DISPATCHED


def _revenue(orders: Iterable[OrderDTO]) -> Decimal:
    return sum((order.total_amount for order in orders), ZERO)


def _average(total: Decimal, count: int) -> Decimal:
    if not count:
        return ZERO
    return (total / count).quantize(CENTS, rounding=ROUND_HALF_UP)


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


# ---------------------------------------------------------------------------
# Dashboard
# ---------------------------------------------------------------------------


def dashboard_stats(orders: Sequence[OrderDTO], now: date | datetime) -> DashboardStatsDTO:
    """Headline counters for the dashboard cards.

    ``completed_this_month`` and ``revenue`` cover dispatched orders whose
    order date falls in the calendar month of ``now``.  The average order
    value is taken over all dispatched orders and is 0 when there are none.
    """
    today = _today(now)
    dispatched = [order for order in orders if _is_dispatched(order)]
    this_month = [
        order
        for order in dispatched
        if order.order_date.year == today.year and order.order_date.month == today.month
    ]
    return DashboardStatsDTO(
        total_orders=len(orders),
        pending_orders=sum(
            1 for order in orders if order.status == OrderStatus.PENDING_APPROVAL
        ),
        in_progress=sum(1 for order in orders if order.status in IN_PROGRESS_STATUSES),
        completed_this_month=len(this_month),
        revenue=_revenue(this_month),
        average_order_value=_average(_revenue(dispatched), len(dispatched)),
    )


class RecentActivityFeed:
    """Restartable view over the first ``limit`` orders as activity entries.

    Orders are taken in the order given; the feed does not sort.  Each
    iteration maps the orders afresh, so the feed can be consumed more
    than once.
    """

    def __init__(
        self,
        orders: Sequence[OrderDTO],
        limit: int = DEFAULT_ACTIVITY_LIMIT,
        now: Optional[datetime] = None,
    ) -> None:
        self._orders = orders
        self._limit = max(limit, 0)
        self._now = now

    def __iter__(self) -> Iterator[ActivityDTO]:
        for order in self._orders[: self._limit]:
            yield self._entry(order)

    def __len__(self) -> int:
        return min(len(self._orders), self._limit)

    def _entry(self, order: OrderDTO) -> ActivityDTO:
        timestamp = order.updated_at or order.created_at or self._now or timezone.now()
        return ActivityDTO(
            id=order.id,
            action=f"Order {order.order_code} {status_action(order.status)}",
            order_code=order.order_code,
            timestamp=timestamp,
            status=order.status,
            color=STATUS_COLORS.get(order.status, UNKNOWN_COLOR),
            user=order.coordinator.name if order.coordinator else None,
        )


def recent_activity(
    orders: Sequence[OrderDTO],
    limit: int = DEFAULT_ACTIVITY_LIMIT,
    now: Optional[datetime] = None,
) -> RecentActivityFeed:
    return RecentActivityFeed(orders, limit=limit, now=now)


def priority_distribution(orders: Sequence[OrderDTO]) -> List[PriorityBucketDTO]:
    """Share of each priority among orders that are not dispatched.

    Cancelled orders are counted.  All four buckets are returned, most
    pressing first, unless nothing remains, in which case the result is
    empty.
    """
    remainder = [order for order in orders if not _is_dispatched(order)]
    if not remainder:
        return []
    counts = Counter(order.priority for order in remainder)
    total = len(remainder)
    return [
        PriorityBucketDTO(
            priority=priority,
            label=Priority(priority).label,
            count=counts.get(priority, 0),
            percentage=counts.get(priority, 0) / total * 100,
            color=PRIORITY_COLORS[priority],
        )
        for priority in PRIORITY_SEQUENCE
    ]


def monthly_time_series(
    orders: Sequence[OrderDTO],
    window_months: int = DEFAULT_MONTH_WINDOW,
) -> List[MonthlyBucketDTO]:
    """Orders and dispatched revenue per calendar month of the order date.

    Only months that have orders produce a bucket (no zero filling).
    Buckets are chronological and limited to the last ``window_months``.
    """
    buckets: Dict[Tuple[int, int], List[OrderDTO]] = {}
    for order in orders:
        key = (order.order_date.year, order.order_date.month)
        buckets.setdefault(key, []).append(order)

    keys = sorted(buckets)
    if window_months > 0:
        keys = keys[-window_months:]
    else:
        keys = []
    return [
        MonthlyBucketDTO(
            year=year,
            month=month,
            label=month_label(year, month),
            orders=len(buckets[(year, month)]),
            revenue=_revenue(o for o in buckets[(year, month)] if _is_dispatched(o)),
        )
        for year, month in keys
    ]


def order_type_distribution(orders: Sequence[OrderDTO]) -> List[ChartSliceDTO]:
    counts = Counter(order.order_type for order in orders)
    return [
        ChartSliceDTO(
            key=order_type,
            label=order_type.capitalize(),
            count=count,
            color=ORDER_TYPE_COLORS.get(order_type, UNKNOWN_COLOR),
        )
        for order_type, count in counts.items()
    ]


def status_distribution(orders: Sequence[OrderDTO]) -> List[ChartSliceDTO]:
    """Non-zero order counts per status, in lifecycle order."""
    counts = Counter(order.status for order in orders)
    return [
        ChartSliceDTO(
            key=status,
            label=status_label(status),
            count=counts[status],
            color=STATUS_COLORS[status],
        )
        for status in STATUS_SEQUENCE
        if counts.get(status)
    ]


# ---------------------------------------------------------------------------
# Rollups
# ---------------------------------------------------------------------------


def top_entities(
    orders: Sequence[OrderDTO],
    key_fn: Callable[[OrderDTO], Hashable],
    limit: Optional[int] = None,
) -> List[EntityRollupDTO]:
    """Group orders by ``key_fn`` and rank the groups by dispatched revenue.

    Groups with equal revenue keep the order in which they were first
    seen.  ``limit=None`` returns every group.
    """
    groups: Dict[Hashable, List[OrderDTO]] = {}
    for order in orders:
        groups.setdefault(key_fn(order), []).append(order)

    rollups = []
    for key, members in groups.items():
        dispatched = [order for order in members if _is_dispatched(order)]
        rollups.append(
            EntityRollupDTO(
                key=str(key),
                orders=len(members),
                completed=len(dispatched),
                revenue=_revenue(dispatched),
            )
        )
    rollups.sort(key=lambda rollup: rollup.revenue, reverse=True)
    return rollups if limit is None else rollups[:limit]


def top_customers(
    orders: Sequence[OrderDTO], limit: Optional[int] = DASHBOARD_TOP_CUSTOMERS
) -> List[EntityRollupDTO]:
    return top_entities(orders, lambda order: order.customer_name, limit=limit)


def sales_by_coordinator(
    orders: Sequence[OrderDTO],
    coordinators: Sequence[SalesCoordinatorDTO],
) -> List[CoordinatorSalesDTO]:
    """Performance of every coordinator, including those without orders."""
    rollups = {
        rollup.key: rollup
        for rollup in top_entities(orders, lambda order: order.coordinator.id)
    }
    rows = []
    for coordinator in coordinators:
        rollup = rollups.get(str(coordinator.id))
        rows.append(
            CoordinatorSalesDTO(
                coordinator_id=coordinator.id,
                name=coordinator.name,
                orders=rollup.orders if rollup else 0,
                completed_orders=rollup.completed if rollup else 0,
                revenue=rollup.revenue if rollup else ZERO,
            )
        )
    rows.sort(key=lambda row: row.revenue, reverse=True)
    return rows


def customer_rollup(
    orders: Sequence[OrderDTO],
    now: Optional[date | datetime] = None,
    directory: Optional[Iterable[CustomerContactDTO]] = None,
    active_window_days: int = DEFAULT_ACTIVE_WINDOW_DAYS,
) -> List[CustomerDTO]:
    """Derive the customer list from orders, alphabetically by name.

    Orders are grouped by the trimmed, case-sensitive customer name.
    Contact details come from ``directory`` when a contact has the same
    name.  A customer is active while the latest order date is within
    ``active_window_days`` of ``now``.
    """
    today = _today(now if now is not None else timezone.now())
    contacts: Dict[str, CustomerContactDTO] = {}
    for contact in directory or ():
        contacts.setdefault(contact.name.strip(), contact)

    groups: Dict[str, List[OrderDTO]] = {}
    for order in orders:
        name = order.customer_name.strip()
        if name:
            groups.setdefault(name, []).append(order)

    cutoff = today - timedelta(days=active_window_days)
    customers = []
    for name, members in groups.items():
        last_order_date = max(order.order_date for order in members)
        contact = contacts.get(name)
        customers.append(
            CustomerDTO(
                name=name,
                email=contact.email if contact else "",
                phone=contact.phone if contact else "",
                total_orders=len(members),
                total_spent=_revenue(members),
                last_order_date=last_order_date,
                status=(
                    CustomerStatus.ACTIVE
                    if last_order_date >= cutoff
                    else CustomerStatus.INACTIVE
                ),
            )
        )
    customers.sort(key=lambda customer: customer.name)
    return customers


def customer_names(orders: Sequence[OrderDTO]) -> List[str]:
    """Distinct non-blank customer names, sorted; used for form suggestions."""
    return sorted({order.customer_name.strip() for order in orders} - {""})


def customer_order_count(orders: Sequence[OrderDTO], name: str) -> int:
    name = name.strip()
    return sum(1 for order in orders if order.customer_name.strip() == name)


# ---------------------------------------------------------------------------
# Reports
# ---------------------------------------------------------------------------


def most_popular_product(orders: Sequence[OrderDTO]) -> str:
    counts = Counter(order.product.name for order in orders)
    if not counts:
        return "N/A"
    return counts.most_common(1)[0][0]


def average_processing_days(orders: Sequence[OrderDTO]) -> int:
    """Mean days from order date to delivery date over dispatched orders."""
    dispatched = [order for order in orders if _is_dispatched(order)]
    if not dispatched:
        return 0
    total = sum((order.delivery_date - order.order_date).days for order in dispatched)
    return _round_half_up(total / len(dispatched))


def build_report(
    orders: Sequence[OrderDTO],
    coordinators: Sequence[SalesCoordinatorDTO],
    now: date | datetime,
    days: int = 30,
) -> ReportDTO:
    """The reports page for orders dated within the last ``days`` days."""
    end_date = _today(now)
    start_date = end_date - timedelta(days=days)
    window = [order for order in orders if start_date <= order.order_date <= end_date]

    dispatched = [order for order in window if _is_dispatched(order)]
    total_revenue = _revenue(dispatched)
    priority_counts = Counter(order.priority for order in window)
    customers = top_customers(window, limit=REPORT_TOP_CUSTOMERS)
    returning = sum(1 for customer in customers if customer.orders > 1)

    return ReportDTO(
        days=days,
        start_date=start_date,
        end_date=end_date,
        date_range=f"{format_date(start_date)} - {format_date(end_date)}",
        summary=ReportSummaryDTO(
            total_orders=len(window),
            completed_orders=len(dispatched),
            pending_orders=sum(
                1 for order in window if order.status == OrderStatus.PENDING_APPROVAL
            ),
            total_revenue=total_revenue,
            average_order_value=_average(total_revenue, len(dispatched)),
        ),
        sales_by_coordinator=sales_by_coordinator(window, coordinators),
        status_distribution=status_distribution(window),
        priority_distribution=[
            ChartSliceDTO(
                key=priority,
                label=Priority(priority).label,
                count=priority_counts[priority],
                color=PRIORITY_COLORS[priority],
            )
            for priority in PRIORITY_SEQUENCE
            if priority_counts.get(priority)
        ],
        top_customers=customers,
        most_popular_product=most_popular_product(window),
        average_processing_days=average_processing_days(window),
        customer_retention=(
            _round_half_up(returning / len(customers) * 100) if customers else 0
        ),
    )
