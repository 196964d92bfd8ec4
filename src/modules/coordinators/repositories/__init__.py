"""Sales coordinator repositories package."""

from modules.coordinators.repositories.django_repository import (
    CoordinatorDjangoRepository,
)
from modules.coordinators.repositories.interfaces import ICoordinatorRepository

__all__ = ["CoordinatorDjangoRepository", "ICoordinatorRepository"]
