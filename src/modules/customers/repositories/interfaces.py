"""Customer contact repository interface."""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Iterable, List

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.customers.dtos import CustomerContactDTO
    from modules.customers.models import CustomerContact


class ICustomerRepository(IRepository["CustomerContact"]):
    """Repository contract for the imported contact directory."""

    @abstractmethod
    def upsert_many(self, contacts: Iterable[CustomerContactDTO]) -> List[CustomerContact]:
        """Insert contacts, overwriting existing rows that share an e-mail."""
