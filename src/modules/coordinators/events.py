"""Domain events for sales coordinators."""

from __future__ import annotations

from dataclasses import dataclass

from shared.domain.events import DomainEvent


@dataclass(frozen=True, kw_only=True)
class CoordinatorAdded(DomainEvent):
    """Raised after a coordinator is created."""

    name: str


@dataclass(frozen=True, kw_only=True)
class CoordinatorUpdated(DomainEvent):
    """Raised after a coordinator is updated."""

    name: str
