"""Request logging middleware."""

import logging
import time
from uuid import uuid4

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger("call_gateway.request")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Log one record per request and tag the response with ``x-request-id``.

    An incoming ``x-request-id`` is reused so gateway logs line up with the
    caller's.
    """

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("x-request-id") or uuid4().hex
        fields = {"request_id": request_id, "method": request.method, "path": request.url.path}
        start = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception:
            fields["duration_ms"] = round((time.perf_counter() - start) * 1000, 2)
            logger.exception("request.failed", extra=fields)
            raise

        fields["duration_ms"] = round((time.perf_counter() - start) * 1000, 2)
        fields["status_code"] = response.status_code
        response.headers["x-request-id"] = request_id
        logger.info("request.completed", extra=fields)
        return response
