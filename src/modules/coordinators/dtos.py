"""Sales coordinator DTOs.

- ``CreateCoordinatorDTO``: typed draft for a new coordinator.
- ``UpdateCoordinatorDTO``: patch draft; only fields that were set are applied.
- ``SalesCoordinatorDTO``: immutable read shape held by the data snapshot.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, field_validator

if TYPE_CHECKING:
    from modules.coordinators.models import SalesCoordinator


def _require_text(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("Must not be blank.")
    return value


# ---------------------------------------------------------------------------
# Input DTOs
# ---------------------------------------------------------------------------


class CreateCoordinatorDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    email: EmailStr
    phone: str = ""
    avatar_url: str = ""

    @field_validator("name")
    @classmethod
    def name_must_not_be_blank(cls, v: str) -> str:
        return _require_text(v)


class UpdateCoordinatorDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: Optional[str] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    avatar_url: Optional[str] = None

    @field_validator("name")
    @classmethod
    def name_must_not_be_blank(cls, v: Optional[str]) -> Optional[str]:
        return None if v is None else _require_text(v)

    def changes(self) -> dict:
        """Fields explicitly present in the patch, ``None`` values excluded."""
        return self.model_dump(exclude_unset=True, exclude_none=True)


# ---------------------------------------------------------------------------
# Output DTOs
# ---------------------------------------------------------------------------


class SalesCoordinatorDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: UUID
    name: str
    email: str
    phone: str = ""
    avatar_url: str = ""

    @classmethod
    def from_entity(cls, coordinator: SalesCoordinator) -> SalesCoordinatorDTO:
        return cls(
            id=coordinator.id,
            name=coordinator.name,
            email=coordinator.email,
            phone=coordinator.phone,
            avatar_url=coordinator.avatar_url,
        )
