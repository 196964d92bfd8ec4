"""Customer domain exceptions."""

from __future__ import annotations


class ImportFileError(Exception):
    """The uploaded file cannot be imported at all (wrong type, missing columns)."""
