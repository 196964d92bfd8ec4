"""Sales coordinator repository interface."""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Dict
from uuid import UUID

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.coordinators.models import SalesCoordinator


class ICoordinatorRepository(IRepository["SalesCoordinator"]):
    """Repository contract for sales coordinators."""

    @abstractmethod
    def create(self, data: Dict[str, Any]) -> SalesCoordinator:
        """Insert a coordinator row."""

    @abstractmethod
    def update(self, id: UUID, data: Dict[str, Any]) -> SalesCoordinator:
        """Overwrite the given fields; raises ``SalesCoordinator.DoesNotExist``."""
