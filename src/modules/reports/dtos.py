"""Report and dashboard DTOs.

Output shapes of the aggregation functions.  Money is ``Decimal``;
percentages are floats in the 0-100 range.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class DashboardStatsDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    total_orders: int
    pending_orders: int
    in_progress: int
    completed_this_month: int
    revenue: Decimal
    average_order_value: Decimal


class ActivityDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: UUID
    action: str
    order_code: str
    timestamp: datetime
    status: str
    color: str
    user: Optional[str] = None


class PriorityBucketDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    priority: str
    label: str
    count: int
    percentage: float
    color: str


class MonthlyBucketDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    year: int
    month: int
    label: str
    orders: int
    revenue: Decimal


class ChartSliceDTO(BaseModel):
    """One slice of a categorical chart (order types, statuses, priorities)."""

    model_config = ConfigDict(frozen=True)

    key: str
    label: str
    count: int
    color: str


class EntityRollupDTO(BaseModel):
    """Orders grouped by an arbitrary key.

    ``revenue`` counts dispatched orders only; ``completed`` is the number
    of dispatched orders.
    """

    model_config = ConfigDict(frozen=True)

    key: str
    orders: int
    completed: int
    revenue: Decimal


class CoordinatorSalesDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    coordinator_id: UUID
    name: str
    orders: int
    completed_orders: int
    revenue: Decimal


class ReportSummaryDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    total_orders: int
    completed_orders: int
    pending_orders: int
    total_revenue: Decimal
    average_order_value: Decimal


class ReportDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    days: int
    start_date: date
    end_date: date
    date_range: str
    summary: ReportSummaryDTO
    sales_by_coordinator: List[CoordinatorSalesDTO]
    status_distribution: List[ChartSliceDTO]
    priority_distribution: List[ChartSliceDTO]
    top_customers: List[EntityRollupDTO]
    most_popular_product: str
    average_processing_days: int
    customer_retention: int
