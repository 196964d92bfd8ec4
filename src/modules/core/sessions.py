"""Dashboard session identification.

Each browser tab of the order desk sends a stable ``X-Session-ID``.  The
id scopes its toast queue and is stamped on the domain events it causes
so the notification hub can echo instead of double-delivering.
"""

from __future__ import annotations

from django.http import HttpRequest

SESSION_HEADER = "X-Session-ID"


def session_id_from(request: HttpRequest) -> str:
    """The caller's session id, or ``""`` when the header is absent or blank.

    Works for both Django requests and DRF ``Request`` wrappers.
    """
    return request.headers.get(SESSION_HEADER, "").strip()
