"""Order domain exceptions.

Field-level and reference failures surface as
``modules.store.exceptions.ValidationError``; only the lookup failure
is order specific.
"""

from __future__ import annotations


class OrderNotFound(Exception):
    """The requested order does not exist in the current snapshot."""
