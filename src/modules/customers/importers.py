"""Bulk customer import from CSV.

The accepted format is deliberately simple: a header row naming the
eight columns below in any order and case, then one customer per line.
Fields are split on every comma and double quotes are stripped, so a
quoted field cannot contain a comma.  A bad row is reported and skipped;
the rest of the file still imports.
"""

from __future__ import annotations

from typing import Dict, List

import structlog

from modules.customers.dtos import CustomerContactDTO, ImportResult, ImportRowError
from modules.customers.exceptions import ImportFileError

logger = structlog.get_logger(__name__)

REQUIRED_HEADERS = (
    "name",
    "email",
    "phone",
    "company",
    "address",
    "city",
    "state",
    "zipcode",
)

TEMPLATE_CSV = (
    "name,email,phone,company,address,city,state,zipcode\n"
    "John Doe,john@example.com,(555) 123-4567,Example Corp,123 Main St,Anytown,CA,12345\n"
    "Jane Smith,jane@company.com,(555) 987-6543,Company Inc,456 Oak Ave,Somewhere,NY,67890"
)


def _split(line: str) -> List[str]:
    return [value.strip().replace('"', "") for value in line.split(",")]


def parse_customer_csv(text: str) -> ImportResult:
    """Parse CSV ``text`` into contacts plus per-row errors.

    Rows are numbered from 1 with the header as row 1, counting only
    non-blank lines.

    Raises:
        ImportFileError: the file is empty or lacks required columns.
    """
    lines = [line for line in text.splitlines() if line.strip()]
    if not lines:
        raise ImportFileError("The file is empty.")

    headers = [header.strip().lower() for header in lines[0].split(",")]
    missing = [header for header in REQUIRED_HEADERS if header not in headers]
    if missing:
        raise ImportFileError(f"Missing required columns: {', '.join(missing)}")

    position: Dict[str, int] = {header: headers.index(header) for header in REQUIRED_HEADERS}
    customers: List[CustomerContactDTO] = []
    errors: List[ImportRowError] = []

    for index, line in enumerate(lines[1:], start=1):
        row = index + 1
        values = _split(line)
        if len(values) != len(headers):
            errors.append(ImportRowError(row=row, message=f"Row {row}: Invalid number of columns"))
            continue

        record = {header: values[position[header]] for header in REQUIRED_HEADERS}
        if not record["name"] or not record["email"] or not record["company"]:
            errors.append(
                ImportRowError(
                    row=row,
                    message=f"Row {row}: Missing required fields (name, email, or company)",
                )
            )
            continue

        customers.append(
            CustomerContactDTO(
                name=record["name"],
                email=record["email"],
                phone=record["phone"],
                company=record["company"],
                address=record["address"],
                city=record["city"],
                state=record["state"],
                zip_code=record["zipcode"],
            )
        )

    logger.info("customer.import_parsed", imported=len(customers), rejected=len(errors))
    return ImportResult(customers=customers, errors=errors)
