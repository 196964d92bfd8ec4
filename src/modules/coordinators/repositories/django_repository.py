"""Django ORM implementation of the sales coordinator repository."""

from __future__ import annotations

from typing import Any, Dict, List, Optional
from uuid import UUID

import structlog
from django.core.exceptions import ValidationError

from modules.coordinators.models import SalesCoordinator
from modules.coordinators.repositories.interfaces import ICoordinatorRepository

logger = structlog.get_logger(__name__)


class CoordinatorDjangoRepository(ICoordinatorRepository):
    """Concrete coordinator repository backed by Django ORM."""

    def create(self, data: Dict[str, Any]) -> SalesCoordinator:
        coordinator = SalesCoordinator.objects.create(**data)
        logger.info("coordinator.persisted", coordinator_id=str(coordinator.id))
        return coordinator

    def update(self, id: UUID, data: Dict[str, Any]) -> SalesCoordinator:
        coordinator = SalesCoordinator.objects.get(id=id)
        for field, value in data.items():
            setattr(coordinator, field, value)
        coordinator.save()
        return coordinator

    def get_by_id(self, id: str) -> Optional[SalesCoordinator]:
        try:
            return SalesCoordinator.objects.filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[SalesCoordinator]:
        queryset = SalesCoordinator.objects.order_by("name")
        if filters:
            queryset = queryset.filter(**filters)
        return list(queryset)

    def save(self, entity: SalesCoordinator) -> SalesCoordinator:
        entity.save()
        return entity
