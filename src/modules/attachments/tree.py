"""Browsable folder tree of every uploaded order file.

Layout: coordinator / month of order date / order code / ``Mockup`` and
``Attachments``.  A folder that would end up empty is left out, so only
branches leading to at least one file appear.
"""

from __future__ import annotations

import calendar
import posixpath
from typing import TYPE_CHECKING, Dict, List, Sequence, Tuple
from urllib.parse import urlparse

from modules.attachments.dtos import FileNodeDTO, NodeType
from modules.reports.formatting import format_date

if TYPE_CHECKING:
    from modules.coordinators.dtos import SalesCoordinatorDTO
    from modules.orders.dtos import OrderDTO


def _file_nodes(order: OrderDTO, prefix: str, urls: Sequence[str]) -> List[FileNodeDTO]:
    nodes = []
    for index, url in enumerate(urls):
        extension = posixpath.splitext(urlparse(url).path)[1]
        nodes.append(
            FileNodeDTO(
                id=f"{prefix}-file-{order.id}-{index}",
                name=f"{prefix}-{index + 1}{extension}",
                type=NodeType.FILE,
                url=url,
                upload_date=format_date(order.created_at),
            )
        )
    return nodes


def _order_folder(order: OrderDTO) -> FileNodeDTO | None:
    children = []
    if order.mockup_files:
        children.append(
            FileNodeDTO(
                id=f"mockup-{order.id}",
                name="Mockup",
                type=NodeType.FOLDER,
                children=_file_nodes(order, "mockup", order.mockup_files),
            )
        )
    if order.attachments:
        children.append(
            FileNodeDTO(
                id=f"attachment-{order.id}",
                name="Attachments",
                type=NodeType.FOLDER,
                children=_file_nodes(order, "attachment", order.attachments),
            )
        )
    if not children:
        return None
    return FileNodeDTO(
        id=f"order-{order.id}",
        name=order.order_code,
        type=NodeType.FOLDER,
        children=children,
    )


def build_file_tree(
    orders: Sequence[OrderDTO],
    coordinators: Sequence[SalesCoordinatorDTO],
) -> List[FileNodeDTO]:
    """Folder tree in coordinator order; orders of unknown coordinators are skipped."""
    by_coordinator: Dict[str, List[OrderDTO]] = {}
    for order in orders:
        by_coordinator.setdefault(str(order.coordinator.id), []).append(order)

    tree = []
    for coordinator in coordinators:
        coordinator_id = str(coordinator.id)
        by_month: Dict[Tuple[int, int], List[OrderDTO]] = {}
        for order in by_coordinator.get(coordinator_id, []):
            key = (order.order_date.year, order.order_date.month)
            by_month.setdefault(key, []).append(order)

        months = []
        for (year, month), month_orders in by_month.items():
            folders = [f for f in (_order_folder(o) for o in month_orders) if f]
            if folders:
                months.append(
                    FileNodeDTO(
                        id=f"month-{coordinator_id}-{year}-{month:02d}",
                        name=f"{calendar.month_name[month]} {year}",
                        type=NodeType.FOLDER,
                        children=folders,
                    )
                )
        if months:
            tree.append(
                FileNodeDTO(
                    id=f"coordinator-{coordinator_id}",
                    name=coordinator.name,
                    type=NodeType.FOLDER,
                    children=months,
                )
            )
    return tree
