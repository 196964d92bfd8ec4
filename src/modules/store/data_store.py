"""Data access adapter for the order desk.

``DataStore`` is the single writer of its ``DataSnapshot``.  Reads go
through ``snapshot``; writes go through the mutation methods, which
validate a typed draft, persist it through the repositories and then
replace the snapshot.

Order mutations are pessimistic: after persisting, the whole snapshot is
reloaded so every denormalised copy comes from the database.  Coordinator
mutations merge the saved row into the current snapshot instead.

A store is cheap to build and is meant to live for one request.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Iterable, Optional
from uuid import UUID

import structlog
from django.conf import settings
from django.db import DatabaseError, IntegrityError
from django.utils import timezone
from pydantic import ValidationError as PydanticValidationError

from modules.attachments.storage import (
    ATTACHMENTS_BUCKET,
    MOCKUPS_BUCKET,
    ObjectStorage,
    order_path,
)
from modules.catalog.dtos import ColorDTO, ProductCategoryDTO, ProductNameDTO
from modules.coordinators.dtos import SalesCoordinatorDTO
from modules.coordinators.events import CoordinatorAdded, CoordinatorUpdated
from modules.coordinators.exceptions import CoordinatorNotFound
from modules.customers.dtos import CustomerContactDTO
from modules.orders.dtos import CreateOrderDTO, OrderDTO, UpdateOrderDTO
from modules.orders.events import OrderCreated, OrderStatusChanged
from modules.orders.exceptions import OrderNotFound
from modules.orders.identifiers import generate_order_id
from modules.reports.aggregation import customer_rollup
from modules.store.exceptions import DataLoadError, ValidationError
from modules.store.snapshot import DataSnapshot

if TYPE_CHECKING:
    from datetime import datetime

    from django.core.files import File

    from modules.catalog.repositories.interfaces import ICatalogRepository
    from modules.coordinators.dtos import CreateCoordinatorDTO, UpdateCoordinatorDTO
    from modules.coordinators.repositories.interfaces import ICoordinatorRepository
    from modules.customers.repositories.interfaces import ICustomerRepository
    from modules.orders.repositories.interfaces import IOrderRepository
    from shared.domain.bus import IEventBus

logger = structlog.get_logger(__name__)


def _pydantic_errors(exc: PydanticValidationError) -> dict[str, str]:
    errors = {}
    for error in exc.errors():
        field = ".".join(str(part) for part in error["loc"]) or "__all__"
        errors.setdefault(field, error["msg"])
    return errors


class DataStore:
    """Owns the current snapshot and every write to the order desk tables.

    Receives repositories, object storage and the event bus via
    constructor injection.
    """

    def __init__(
        self,
        coordinator_repository: ICoordinatorRepository,
        catalog_repository: ICatalogRepository,
        order_repository: IOrderRepository,
        customer_repository: ICustomerRepository,
        bus: IEventBus,
        storage: Optional[ObjectStorage] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self._coordinator_repo = coordinator_repository
        self._catalog_repo = catalog_repository
        self._order_repo = order_repository
        self._customer_repo = customer_repository
        self._bus = bus
        self._storage = storage or ObjectStorage()
        self._clock = clock or timezone.now
        self._snapshot: Optional[DataSnapshot] = None

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    @property
    def snapshot(self) -> DataSnapshot:
        """The current snapshot, loading it on first access."""
        if self._snapshot is None:
            return self.load_all()
        return self._snapshot

    def load_all(self) -> DataSnapshot:
        """Fetch every table in one pass and replace the snapshot.

        Raises:
            DataLoadError: any query failed.  The previous snapshot is
                discarded; there is no partial result.
        """
        self._snapshot = None
        try:
            coordinators = self._coordinator_repo.list()
            categories = self._catalog_repo.list_categories()
            products = self._catalog_repo.list_products()
            colors = self._catalog_repo.list_colors()
            orders = self._order_repo.list_with_references()
            contacts = self._customer_repo.list()
        except DatabaseError as exc:
            logger.error("store.load_failed", error=str(exc))
            raise DataLoadError("Failed to load order desk data.") from exc

        taken_at = self._clock()
        order_dtos = tuple(OrderDTO.from_entity(o, snapshot_taken_at=taken_at) for o in orders)
        contact_dtos = tuple(CustomerContactDTO.from_entity(c) for c in contacts)
        snapshot = DataSnapshot(
            taken_at=taken_at,
            coordinators=tuple(SalesCoordinatorDTO.from_entity(c) for c in coordinators),
            categories=tuple(ProductCategoryDTO.from_entity(c) for c in categories),
            products=tuple(ProductNameDTO.from_entity(p) for p in products),
            colors=tuple(ColorDTO.from_entity(c) for c in colors),
            orders=order_dtos,
            contacts=contact_dtos,
            customers=tuple(
                customer_rollup(
                    order_dtos,
                    now=taken_at,
                    directory=contact_dtos,
                    active_window_days=settings.CUSTOMER_ACTIVE_WINDOW_DAYS,
                )
            ),
        )
        self._snapshot = snapshot
        logger.info(
            "store.loaded",
            orders=len(snapshot.orders),
            coordinators=len(snapshot.coordinators),
            customers=len(snapshot.customers),
        )
        return snapshot

    # ------------------------------------------------------------------
    # Orders
    # ------------------------------------------------------------------

    def create_order(self, draft: CreateOrderDTO, session_id: str = "") -> OrderDTO:
        """Persist a new order and return it from the reloaded snapshot.

        Without an explicit ``order_code`` the next ``SP/<year>/<NNNN>``
        is generated from the snapshot.  A concurrent insert of the same
        code trips the unique constraint; the store then reloads and
        tries the next code, up to ``ORDER_CODE_MAX_RETRIES`` times.

        Raises:
            ValidationError: unknown reference, product/category or colour
                mismatch, a taken explicit code, or retries exhausted.
        """
        log = logger.bind(customer_name=draft.customer_name)
        snapshot = self.snapshot
        self._validate_references(snapshot, draft)

        explicit_code = draft.order_code
        if explicit_code and explicit_code in snapshot.order_codes():
            raise ValidationError(
                f"Order code {explicit_code} already exists.",
                {"order_code": "Already exists."},
            )

        attempts = settings.ORDER_CODE_MAX_RETRIES
        year = timezone.localdate(self._clock()).year
        for attempt in range(1, attempts + 1):
            code = explicit_code or generate_order_id(
                snapshot.order_codes(), year, prefix=settings.ORDER_CODE_PREFIX
            )
            try:
                order = self._order_repo.create(draft.to_record(code))
            except IntegrityError:
                if explicit_code:
                    raise ValidationError(
                        f"Order code {code} already exists.",
                        {"order_code": "Already exists."},
                    )
                log.warning("store.order_code_conflict", order_code=code, attempt=attempt)
                snapshot = self.load_all()
                continue
            break
        else:
            raise ValidationError(
                f"Could not allocate a unique order code after {attempts} attempts."
            )

        created = self._reload_order(order.id)
        log.info("store.order_created", order_id=str(created.id), order_code=code)
        self._bus.publish(
            OrderCreated(
                aggregate_id=created.id,
                order_code=created.order_code,
                session_id=session_id,
            )
        )
        return created

    def update_order(
        self, order_id: UUID | str, patch: UpdateOrderDTO, session_id: str = ""
    ) -> OrderDTO:
        """Merge ``patch`` over the current record, persist and reload.

        Totals are re-derived from the merged size breakdown and cost.

        Raises:
            OrderNotFound: no such order in the snapshot.
            ValidationError: the merged record is invalid.
        """
        snapshot = self.snapshot
        current = snapshot.order(order_id)
        if current is None:
            raise OrderNotFound(f"Order {order_id} not found.")

        values = current.draft_values()
        values.update(patch.changes())
        try:
            draft = CreateOrderDTO.model_validate(values)
        except PydanticValidationError as exc:
            raise ValidationError("Invalid order update.", _pydantic_errors(exc)) from exc
        self._validate_references(snapshot, draft)

        code = draft.order_code or current.order_code
        if code != current.order_code and code in snapshot.order_codes():
            raise ValidationError(
                f"Order code {code} already exists.", {"order_code": "Already exists."}
            )

        try:
            self._order_repo.update(current.id, draft.to_record(code))
        except IntegrityError as exc:
            raise ValidationError(
                f"Order code {code} already exists.", {"order_code": "Already exists."}
            ) from exc

        updated = self._reload_order(current.id)
        logger.info("store.order_updated", order_id=str(updated.id))
        if updated.status != current.status:
            self._bus.publish(
                OrderStatusChanged(
                    aggregate_id=updated.id,
                    order_code=updated.order_code,
                    old_status=current.status,
                    new_status=updated.status,
                    session_id=session_id,
                )
            )
        return updated

    def attach_files(
        self,
        order_id: UUID | str,
        bucket: str,
        files: Iterable[File],
        session_id: str = "",
    ) -> OrderDTO:
        """Upload ``files`` into ``bucket`` and append their URLs to the order.

        Files that fail to upload are skipped.  ``bucket`` is ``mockups``
        or ``attachments`` and selects the URL list that grows.
        """
        current = self.snapshot.order(order_id)
        if current is None:
            raise OrderNotFound(f"Order {order_id} not found.")
        if bucket not in (MOCKUPS_BUCKET, ATTACHMENTS_BUCKET):
            raise ValidationError(f"Unknown bucket '{bucket}'.", {"bucket": "Unknown."})

        urls = self._storage.upload_batch(files, bucket, order_path(current.order_code))
        if not urls:
            return current
        if bucket == MOCKUPS_BUCKET:
            patch = UpdateOrderDTO(mockup_files=[*current.mockup_files, *urls])
        else:
            patch = UpdateOrderDTO(attachments=[*current.attachments, *urls])
        return self.update_order(current.id, patch, session_id=session_id)

    # ------------------------------------------------------------------
    # Coordinators
    # ------------------------------------------------------------------

    def create_coordinator(
        self, draft: CreateCoordinatorDTO, session_id: str = ""
    ) -> SalesCoordinatorDTO:
        snapshot = self.snapshot
        coordinator = SalesCoordinatorDTO.from_entity(
            self._coordinator_repo.create(draft.model_dump())
        )
        self._snapshot = snapshot.with_coordinator(coordinator)
        self._bus.publish(
            CoordinatorAdded(
                aggregate_id=coordinator.id,
                name=coordinator.name,
                session_id=session_id,
            )
        )
        return coordinator

    def update_coordinator(
        self,
        coordinator_id: UUID | str,
        patch: UpdateCoordinatorDTO,
        session_id: str = "",
    ) -> SalesCoordinatorDTO:
        """Apply ``patch`` and merge the result into the current snapshot.

        Orders already in the snapshot keep their old coordinator copy
        until the next load.

        Raises:
            CoordinatorNotFound: no such coordinator in the snapshot.
        """
        snapshot = self.snapshot
        current = snapshot.coordinator(coordinator_id)
        if current is None:
            raise CoordinatorNotFound(f"Coordinator {coordinator_id} not found.")

        changes = patch.changes()
        if changes:
            row = self._coordinator_repo.update(current.id, changes)
            coordinator = SalesCoordinatorDTO.from_entity(row)
        else:
            coordinator = current
        self._snapshot = snapshot.with_coordinator(coordinator)
        self._bus.publish(
            CoordinatorUpdated(
                aggregate_id=coordinator.id,
                name=coordinator.name,
                session_id=session_id,
            )
        )
        return coordinator

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _reload_order(self, order_id: UUID) -> OrderDTO:
        order = self.load_all().order(order_id)
        if order is None:
            raise DataLoadError(f"Order {order_id} missing after reload.")
        return order

    @staticmethod
    def _validate_references(snapshot: DataSnapshot, draft: CreateOrderDTO) -> None:
        errors: dict[str, str] = {}
        if snapshot.coordinator(draft.coordinator_id) is None:
            errors["coordinator_id"] = "Unknown sales coordinator."
        category = snapshot.category(draft.category_id)
        if category is None:
            errors["category_id"] = "Unknown product category."
        product = snapshot.product(draft.product_id)
        if product is None:
            errors["product_id"] = "Unknown product."
        color = snapshot.color(draft.color_id)
        if color is None:
            errors["color_id"] = "Unknown colour."

        if product is not None and category is not None and product.category_id != category.id:
            errors["product_id"] = "Product does not belong to the selected category."
        if product is not None and color is not None and not product.allows_color(color.id):
            errors["color_id"] = "Colour is not available for this product."

        if errors:
            raise ValidationError("Order references are invalid.", errors)
