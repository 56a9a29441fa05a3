import time
import uuid
from typing import Callable

import structlog
from django.http import HttpRequest, HttpResponse

REQUEST_ID_HEADER = "X-Request-ID"

logger = structlog.get_logger(__name__)


class CorrelationIdMiddleware:
    """Tag every log line of a request with one correlation ID.

    The ID comes from the ``X-Request-ID`` request header or, when absent,
    a fresh UUID4.  It is bound into structlog's context vars for the
    duration of the request and echoed back in the response header.
    """

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        cid = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            correlation_id=cid,
            method=request.method,
            path=request.path,
        )
        started = time.monotonic()
        logger.info("request.started")

        try:
            response = self.get_response(request)
            logger.info(
                "request.finished",
                status_code=response.status_code,
                duration_ms=round((time.monotonic() - started) * 1000, 2),
            )
            response[REQUEST_ID_HEADER] = cid
            return response
        finally:
            structlog.contextvars.clear_contextvars()
