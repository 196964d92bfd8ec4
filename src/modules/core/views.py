import time
from typing import Any, Callable, Dict, Tuple

import structlog
from django.core.cache import cache
from django.core.files.storage import default_storage
from django.db import connections
from django.http import HttpRequest, JsonResponse
from django.utils import timezone
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from modules.attachments.storage import BUCKETS

logger = structlog.get_logger()


def _check_database() -> None:
    conn = connections["default"]
    conn.ensure_connection()
    with conn.cursor() as cursor:
        cursor.execute("SELECT 1")
        cursor.fetchone()


def _check_cache() -> None:
    cache.set("_health_check", "ok", 10)
    if cache.get("_health_check") != "ok":
        raise ConnectionError("Cache read failed")


def _check_storage() -> None:
    # Listing a missing bucket is fine; an unreachable backend is not.
    for bucket in BUCKETS:
        default_storage.exists(bucket)


SERVICE_CHECKS: Tuple[Tuple[str, Callable[[], None]], ...] = (
    ("database", _check_database),
    ("cache", _check_cache),
    ("storage", _check_storage),
)


def _check_service(name: str, check: Callable[[], None]) -> Dict[str, Any]:
    start = time.monotonic()
    try:
        check()
    except Exception:
        logger.error("health_check.service_failed", service=name)
        return {"status": "down"}
    return {
        "status": "up",
        "response_time_ms": round((time.monotonic() - start) * 1000, 2),
    }


def health_check(request: HttpRequest) -> JsonResponse:
    """GET /health: unauthenticated check of every backing service in ``SERVICE_CHECKS``."""
    services = {name: _check_service(name, check) for name, check in SERVICE_CHECKS}
    healthy = all(service["status"] == "up" for service in services.values())
    status = "healthy" if healthy else "unhealthy"

    logger.info("health_check.completed", status=status)

    return JsonResponse(
        {
            "status": status,
            "timestamp": timezone.now().isoformat(),
            "services": services,
        },
        status=200 if healthy else 503,
    )


class CurrentUserView(APIView):
    """Return the authenticated dashboard user.

    Stands in for the mocked login of the dashboard client: any valid
    JWT is accepted and echoed back.
    """

    permission_classes = [IsAuthenticated]

    def get(self, request: HttpRequest) -> Response:
        user = request.user
        return Response(
            {
                "username": user.get_username(),
                "name": user.get_full_name() or user.get_username(),
                "email": getattr(user, "email", ""),
                "is_staff": user.is_staff,
            }
        )
