"""
common.middleware
~~~~~~~~~~~~~~~~~
Structured JSON request-logging middleware powered by structlog.

Every log record emitted while a request is being handled carries the same
``request_id`` (bound through :mod:`structlog.contextvars`), so service-level
events such as ``mobile_app_saved`` can be correlated with the
``http_request`` summary line.
"""
import time
import uuid

import structlog

logger = structlog.get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


class StructuredLoggingMiddleware:
    """
    Middleware that binds a request id and emits one structured log record
    per HTTP request.

    The id is taken from the incoming ``X-Request-ID`` header when present,
    otherwise generated, and is echoed back on the response.

    Log record fields:
        event       – "http_request"
        request_id  – correlation id
        method      – HTTP verb (GET, POST, …)
        path        – URL path
        status      – HTTP response status code (int)
        duration_ms – Round-trip duration in milliseconds (float, 2 dp)
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id)

        start = time.monotonic()
        try:
            response = self.get_response(request)
            duration_ms = round((time.monotonic() - start) * 1000, 2)
            logger.info(
                "http_request",
                method=request.method,
                path=request.get_full_path(),
                status=response.status_code,
                duration_ms=duration_ms,
            )
            response[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            structlog.contextvars.clear_contextvars()
