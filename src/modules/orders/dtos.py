"""Order DTOs.

Framework-agnostic data transfer objects using Pydantic v2.  All of
them are immutable (``frozen=True``).

- ``CreateOrderDTO``: the complete typed draft of an order.  The data
  store validates it before anything touches the database.
- ``UpdateOrderDTO``: a patch; only the fields that were explicitly set
  are merged over the current record, which is then re-validated as a
  ``CreateOrderDTO``.
- ``OrderDTO``: the read shape held by the data snapshot, embedding
  copies of the referenced coordinator and catalog rows.

``total_qty`` and ``total_amount`` are never accepted from callers;
they are derived from the size breakdown and the cost per piece.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Annotated, Any, Dict, List, Optional
from uuid import UUID

from django.conf import settings
from pydantic import (
    AfterValidator,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    NonNegativeInt,
    TypeAdapter,
    computed_field,
    field_validator,
    model_validator,
)

from modules.catalog.dtos import ColorDTO, ProductCategoryDTO, ProductNameDTO
from modules.coordinators.dtos import SalesCoordinatorDTO
from modules.orders.constants import (
    MAX_PLACEMENTS,
    SIZE_LABELS,
    BrandingType,
    OrderStatus,
    OrderType,
    Priority,
    SizeLabel,
)
from modules.orders.identifiers import is_order_code

if TYPE_CHECKING:
    from modules.orders.models import Order


_SIZE_COUNTS = TypeAdapter(Dict[SizeLabel, NonNegativeInt])


def _fill_sizes(value: Any) -> Dict[str, int]:
    counts = {label.value: count for label, count in _SIZE_COUNTS.validate_python(value).items()}
    return {label: counts.get(label, 0) for label in SIZE_LABELS}


# Input keys are checked against SizeLabel; the stored dict is keyed by plain
# label strings so it serialises without enum coercion.  Unknown labels and
# negative counts are rejected; missing labels become 0.
SizeBreakdown = Annotated[Dict[str, NonNegativeInt], BeforeValidator(_fill_sizes)]

Money = Annotated[Decimal, Field(ge=Decimal("0"), max_digits=10, decimal_places=2)]


def total_quantity(breakdown: Dict[str, int]) -> int:
    return sum(breakdown.get(label, 0) for label in SIZE_LABELS)


class Placement(BaseModel):
    """Where the branding goes (``Left Chest``) and how big it is."""

    model_config = ConfigDict(frozen=True)

    name: str
    size: str = ""

    @field_validator("name", "size")
    @classmethod
    def strip_text(cls, v: str) -> str:
        return v.strip()


def _clean_placements(value: List[Placement]) -> List[Placement]:
    kept = [placement for placement in value if placement.name]
    if len(kept) > MAX_PLACEMENTS:
        raise ValueError(f"At most {MAX_PLACEMENTS} placements are allowed.")
    return kept


Placements = Annotated[List[Placement], AfterValidator(_clean_placements)]


def placement_columns(placements: List[Placement]) -> Dict[str, str]:
    """Spread placements over the ``placementN``/``placementN_size`` columns."""
    columns: Dict[str, str] = {}
    for index in range(MAX_PLACEMENTS):
        placement = placements[index] if index < len(placements) else None
        columns[f"placement{index + 1}"] = placement.name if placement else ""
        columns[f"placement{index + 1}_size"] = placement.size if placement else ""
    return columns


# ---------------------------------------------------------------------------
# Input DTOs
# ---------------------------------------------------------------------------


class CreateOrderDTO(BaseModel):
    """Immutable draft for a complete order record.

    Validates:
    - ``customer_name`` and ``description`` are not blank.
    - the size breakdown carries known labels with non-negative counts.
    - placements with a blank name are dropped; at most four remain, and
      none at all when ``branding_type`` is ``none``.

    ``order_code`` is optional: the data store generates one when absent.
    """

    model_config = ConfigDict(frozen=True)

    order_code: Optional[str] = None
    order_date: date
    delivery_date: date
    edd: Optional[date] = None
    customer_name: str
    order_type: OrderType
    priority: Priority = Priority.MEDIUM
    coordinator_id: UUID
    category_id: UUID
    product_id: UUID
    color_id: UUID
    description: str
    size_breakdown: SizeBreakdown = Field(default_factory=dict, validate_default=True)
    branding_type: BrandingType = BrandingType.NONE
    placements: Placements = []
    mockup_files: List[str] = []
    attachments: List[str] = []
    remarks: str = ""
    cost_per_pc: Money = Decimal("0.00")
    status: OrderStatus = OrderStatus.PENDING_APPROVAL

    @field_validator("customer_name", "description")
    @classmethod
    def must_not_be_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Must not be blank.")
        return v

    @field_validator("order_code")
    @classmethod
    def code_is_generated_or_well_formed(cls, v: Optional[str]) -> Optional[str]:
        """Blank means "generate one"; anything else must follow the sequence format."""
        v = (v or "").strip()
        if not v:
            return None
        prefix = settings.ORDER_CODE_PREFIX
        if not is_order_code(v, prefix):
            raise ValueError(f"Must look like {prefix}/<year>/<NNNN>.")
        return v

    @model_validator(mode="before")
    @classmethod
    def placements_require_branding(cls, data: Any) -> Any:
        if isinstance(data, dict):
            branding = data.get("branding_type", BrandingType.NONE)
            if branding == BrandingType.NONE and data.get("placements"):
                data = {**data, "placements": []}
        return data

    @property
    def total_qty(self) -> int:
        return total_quantity(self.size_breakdown)

    @property
    def total_amount(self) -> Decimal:
        return self.cost_per_pc * self.total_qty

    def to_record(self, order_code: str) -> Dict[str, Any]:
        """Column values for the ``orders`` row."""
        record: Dict[str, Any] = {
            "order_code": order_code,
            "order_date": self.order_date,
            "delivery_date": self.delivery_date,
            "edd": self.edd,
            "customer_name": self.customer_name,
            "order_type": self.order_type.value,
            "priority": self.priority.value,
            "coordinator_id": self.coordinator_id,
            "category_id": self.category_id,
            "product_id": self.product_id,
            "color_id": self.color_id,
            "description": self.description,
            "size_breakdown": dict(self.size_breakdown),
            "branding_type": self.branding_type.value,
            "mockup_files": list(self.mockup_files),
            "attachments": list(self.attachments),
            "remarks": self.remarks,
            "cost_per_pc": self.cost_per_pc,
            "status": self.status.value,
        }
        record.update(placement_columns(self.placements))
        return record


class UpdateOrderDTO(BaseModel):
    """Immutable patch for an existing order.

    Fields left unset keep their current value; everything that was set
    overwrites, including explicit ``None`` for nullable columns.
    """

    model_config = ConfigDict(frozen=True)

    order_code: Optional[str] = None
    order_date: Optional[date] = None
    delivery_date: Optional[date] = None
    edd: Optional[date] = None
    customer_name: Optional[str] = None
    order_type: Optional[OrderType] = None
    priority: Optional[Priority] = None
    coordinator_id: Optional[UUID] = None
    category_id: Optional[UUID] = None
    product_id: Optional[UUID] = None
    color_id: Optional[UUID] = None
    description: Optional[str] = None
    size_breakdown: Optional[SizeBreakdown] = None
    branding_type: Optional[BrandingType] = None
    placements: Optional[List[Placement]] = None
    mockup_files: Optional[List[str]] = None
    attachments: Optional[List[str]] = None
    remarks: Optional[str] = None
    cost_per_pc: Optional[Money] = None
    status: Optional[OrderStatus] = None

    def changes(self) -> Dict[str, Any]:
        return self.model_dump(exclude_unset=True)


# ---------------------------------------------------------------------------
# Output DTOs
# ---------------------------------------------------------------------------


class OrderDTO(BaseModel):
    """Immutable order as loaded into a data snapshot.

    ``coordinator``, ``category``, ``product`` and ``color`` are copies
    taken at ``snapshot_taken_at``.  A later rename of the live row is
    not reflected here until the next load.
    """

    model_config = ConfigDict(frozen=True)

    id: UUID
    order_code: str
    order_date: date
    delivery_date: date
    edd: Optional[date] = None
    customer_name: str
    order_type: str
    priority: str
    coordinator: SalesCoordinatorDTO
    category: ProductCategoryDTO
    product: ProductNameDTO
    color: ColorDTO
    description: str
    size_breakdown: SizeBreakdown
    branding_type: str
    placements: List[Placement] = []
    mockup_files: List[str] = []
    attachments: List[str] = []
    remarks: str = ""
    cost_per_pc: Decimal
    status: str
    created_at: datetime
    updated_at: datetime
    snapshot_taken_at: datetime

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total_qty(self) -> int:
        return total_quantity(self.size_breakdown)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total_amount(self) -> Decimal:
        return self.cost_per_pc * self.total_qty

    @property
    def coordinator_id(self) -> UUID:
        return self.coordinator.id

    @classmethod
    def from_entity(cls, order: Order, snapshot_taken_at: datetime) -> OrderDTO:
        """Build the DTO from an ``Order`` row.

        Assumes ``coordinator``, ``category``, ``product`` and ``color``
        are select-related.
        """
        placements = []
        for index in range(1, MAX_PLACEMENTS + 1):
            name = getattr(order, f"placement{index}") or ""
            if name.strip():
                placements.append(
                    Placement(name=name, size=getattr(order, f"placement{index}_size") or "")
                )
        return cls(
            id=order.id,
            order_code=order.order_code,
            order_date=order.order_date,
            delivery_date=order.delivery_date,
            edd=order.edd,
            customer_name=order.customer_name,
            order_type=order.order_type,
            priority=order.priority,
            coordinator=SalesCoordinatorDTO.from_entity(order.coordinator),
            category=ProductCategoryDTO.from_entity(order.category),
            product=ProductNameDTO.from_entity(order.product),
            color=ColorDTO.from_entity(order.color),
            description=order.description,
            size_breakdown=order.size_breakdown or {},
            branding_type=order.branding_type,
            placements=placements,
            mockup_files=list(order.mockup_files or []),
            attachments=list(order.attachments or []),
            remarks=order.remarks,
            cost_per_pc=order.cost_per_pc,
            status=order.status,
            created_at=order.created_at,
            updated_at=order.updated_at,
            snapshot_taken_at=snapshot_taken_at,
        )

    def draft_values(self) -> Dict[str, Any]:
        """Current values in ``CreateOrderDTO`` form, for merging a patch.

        The code is left out so a stored code is kept as is and only a
        code named in the patch is checked.
        """
        return {
            "order_code": None,
            "order_date": self.order_date,
            "delivery_date": self.delivery_date,
            "edd": self.edd,
            "customer_name": self.customer_name,
            "order_type": self.order_type,
            "priority": self.priority,
            "coordinator_id": self.coordinator.id,
            "category_id": self.category.id,
            "product_id": self.product.id,
            "color_id": self.color.id,
            "description": self.description,
            "size_breakdown": dict(self.size_breakdown),
            "branding_type": self.branding_type,
            "placements": [p.model_dump() for p in self.placements],
            "mockup_files": list(self.mockup_files),
            "attachments": list(self.attachments),
            "remarks": self.remarks,
            "cost_per_pc": self.cost_per_pc,
            "status": self.status,
        }
