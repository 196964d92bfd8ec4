"""Customer import use case.

Parses an uploaded CSV and persists every valid row into the contact
directory.  Row errors are returned to the caller, not raised.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from modules.customers.exceptions import ImportFileError
from modules.customers.importers import parse_customer_csv

if TYPE_CHECKING:
    from modules.customers.dtos import ImportResult
    from modules.customers.repositories.interfaces import ICustomerRepository

logger = structlog.get_logger(__name__)


class CustomerImportService:
    """Receives an ``ICustomerRepository`` via constructor injection."""

    def __init__(self, repository: ICustomerRepository) -> None:
        self._repo = repository

    def import_file(self, filename: str, content: bytes) -> ImportResult:
        """Import an uploaded ``.csv`` file.

        Raises:
            ImportFileError: not a CSV file, not UTF-8, or missing columns.
        """
        if not filename.lower().endswith(".csv"):
            raise ImportFileError("Please upload a CSV file")
        try:
            text = content.decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            raise ImportFileError("Failed to parse CSV file") from exc
        return self.import_text(text)

    def import_text(self, text: str) -> ImportResult:
        result = parse_customer_csv(text)
        if result.customers:
            self._repo.upsert_many(result.customers)
        logger.info(
            "customer.imported",
            imported=result.success,
            rejected=len(result.errors),
        )
        return result
