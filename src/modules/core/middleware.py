import time
import uuid
from typing import Callable

import structlog
from django.http import HttpRequest, HttpResponse

from modules.core.sessions import session_id_from

logger = structlog.get_logger()

REQUEST_ID_HEADER = "X-Request-ID"


class CorrelationIdMiddleware:
    """Bind request-scoped ids into the structlog context.

    ``X-Request-ID`` is reused when the client sends one and generated
    otherwise; it is echoed on the response.  ``X-Session-ID`` names the
    dashboard session whose toast queue the request belongs to.  Both
    ids end up on every log line written while the request is handled.
    """

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        cid = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        sid = session_id_from(request)
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(correlation_id=cid, session_id=sid)

        started = time.monotonic()
        logger.info("request.started", method=request.method, path=request.path)

        response = self.get_response(request)

        logger.info(
            "request.finished",
            method=request.method,
            path=request.path,
            status_code=response.status_code,
            duration_ms=round((time.monotonic() - started) * 1000, 2),
        )

        response[REQUEST_ID_HEADER] = cid
        return response
