"""Data store exceptions.

Raised by ``DataStore`` at the persistence boundary.  The API layer
catches these and translates them into HTTP responses.
"""

from __future__ import annotations


class DataLoadError(Exception):
    """Loading the snapshot from the database failed; no partial snapshot is kept."""


class ValidationError(Exception):
    """A draft referenced an unknown entity or broke a field rule.

    ``errors`` maps field names to messages when the failure can be
    attributed to specific fields.
    """

    def __init__(self, message: str, errors: dict[str, str] | None = None) -> None:
        super().__init__(message)
        self.errors = errors or {}
