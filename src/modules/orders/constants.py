"""Order domain constants.

Closed enumerations for the order lifecycle and classification.  Each
enumeration's presentation mapping (colour, activity phrase) is defined
once, directly beside it, and consumed everywhere else.
"""

from django.db import models


class OrderStatus(models.TextChoices):
    PENDING_APPROVAL = "pending-approval", "Pending Approval"
    STICKER_PRINTING = "sticker-printing", "Sticker Printing"
    SAMPLE_APPROVAL = "sample-approval", "Sample Approval"
    UNDER_FUSING = "under-fusing", "Under Fusing"
    UNDER_PACKAGING = "under-packaging", "Under Packaging"
    READY_TO_SHIP = "ready-to-ship", "Ready to Ship"
    DISPATCHED = "dispatched", "Dispatched"
    CANCELLED = "cancelled", "Cancelled"


STATUS_COLORS: dict[str, str] = {
    OrderStatus.PENDING_APPROVAL: "#EAB308",
    OrderStatus.STICKER_PRINTING: "#3B82F6",
    OrderStatus.SAMPLE_APPROVAL: "#A855F7",
    OrderStatus.UNDER_FUSING: "#F97316",
    OrderStatus.UNDER_PACKAGING: "#6366F1",
    OrderStatus.READY_TO_SHIP: "#22C55E",
    OrderStatus.DISPATCHED: "#10B981",
    OrderStatus.CANCELLED: "#EF4444",
}

STATUS_ACTIONS: dict[str, str] = {
    OrderStatus.PENDING_APPROVAL: "is pending approval",
    OrderStatus.STICKER_PRINTING: "moved to sticker printing",
    OrderStatus.SAMPLE_APPROVAL: "moved to sample approval",
    OrderStatus.UNDER_FUSING: "moved to fusing",
    OrderStatus.UNDER_PACKAGING: "moved to packaging",
    OrderStatus.READY_TO_SHIP: "is ready to ship",
    OrderStatus.DISPATCHED: "was dispatched",
    OrderStatus.CANCELLED: "was cancelled",
}
DEFAULT_STATUS_ACTION = "was updated"
UNKNOWN_COLOR = "#6B7280"

# Lifecycle order; cancelled branches off any non-terminal status.
STATUS_SEQUENCE: tuple[str, ...] = tuple(OrderStatus.values)

TERMINAL_STATES: set[str] = {OrderStatus.DISPATCHED, OrderStatus.CANCELLED}

# The dashboard "in progress" card counts only these two production stages.
IN_PROGRESS_STATUSES: frozenset[str] = frozenset(
    {OrderStatus.STICKER_PRINTING, OrderStatus.UNDER_FUSING}
)


class OrderType(models.TextChoices):
    NEW = "new", "New"
    REPEAT = "repeat", "Repeat"
    SAMPLE = "sample", "Sample"
    RUSH = "rush", "Rush"


ORDER_TYPE_COLORS: dict[str, str] = {
    OrderType.NEW: "#3B82F6",
    OrderType.REPEAT: "#10B981",
    OrderType.SAMPLE: "#8B5CF6",
    OrderType.RUSH: "#EF4444",
}


class Priority(models.TextChoices):
    LOW = "low", "Low"
    MEDIUM = "medium", "Medium"
    HIGH = "high", "High"
    URGENT = "urgent", "Urgent"


PRIORITY_COLORS: dict[str, str] = {
    Priority.URGENT: "#EF4444",
    Priority.HIGH: "#F97316",
    Priority.MEDIUM: "#EAB308",
    Priority.LOW: "#22C55E",
}

# Display order for distributions, most pressing first.
PRIORITY_SEQUENCE: tuple[str, ...] = (
    Priority.URGENT.value,
    Priority.HIGH.value,
    Priority.MEDIUM.value,
    Priority.LOW.value,
)


class BrandingType(models.TextChoices):
    EMBROIDERY = "embroidery", "Embroidery"
    SCREEN_PRINT = "screen-print", "Screen Print"
    HEAT_TRANSFER = "heat-transfer", "Heat Transfer"
    SUBLIMATION = "sublimation", "Sublimation"
    VINYL = "vinyl", "Vinyl"
    DTF = "dtf", "DTF"
    NONE = "none", "None"


class SizeLabel(models.TextChoices):
    XS = "XS", "XS"
    S = "S", "S"
    M = "M", "M"
    L = "L", "L"
    XL = "XL", "XL"
    XXL = "2XL", "2XL"
    XXXL = "3XL", "3XL"
    XXXXL = "4XL", "4XL"
    XXXXXL = "5XL", "5XL"


SIZE_LABELS: tuple[str, ...] = tuple(SizeLabel.values)

MAX_PLACEMENTS = 4


def status_action(status: str) -> str:
    return STATUS_ACTIONS.get(status, DEFAULT_STATUS_ACTION)


def status_label(status: str) -> str:
    try:
        return OrderStatus(status).label
    except ValueError:
        return status
