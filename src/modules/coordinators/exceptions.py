"""Sales coordinator domain exceptions."""

from __future__ import annotations


class CoordinatorNotFound(Exception):
    """The requested sales coordinator does not exist."""
