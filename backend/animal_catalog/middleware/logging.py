"""
Animal Catalog Backend — Request Logging Middleware
=====================================================

What:  One access-log line per HTTP request.
How:   Measures the time spent in the rest of the stack and logs method,
       path, status, duration, request ID and client IP. Level follows the
       status class: 5xx → ERROR, 4xx → WARNING, otherwise INFO.
       An exception escaping the handlers is logged as a 500 with its
       traceback, then re-raised.

Request bodies and uploaded file contents are never logged.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from animal_catalog.middleware.request_id import request_id_var

logger = logging.getLogger("animal_catalog.access")

# Probed every few seconds by orchestrators
QUIET_PATHS = {"/health"}


class RequestLoggingMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path in QUIET_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        client_ip = getattr(request.client, "host", "unknown") if request.client else "unknown"

        try:
            response = await call_next(request)
        except Exception:
            # ServerErrorMiddleware turns this into the 500 response further out
            self._log_access(logging.ERROR, request.method, path, 500, start_time, client_ip, exc_info=True)
            raise

        status = response.status_code
        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        self._log_access(log_level, request.method, path, status, start_time, client_ip)
        return response

    @staticmethod
    def _log_access(
        log_level: int,
        method: str,
        path: str,
        status: int,
        start_time: float,
        client_ip: str,
        exc_info: bool = False,
    ) -> None:
        duration_ms = (time.perf_counter() - start_time) * 1000
        rid = request_id_var.get("")
        logger.log(
            log_level,
            "%s %s %d %.1fms [%s] from %s",
            method,
            path,
            status,
            duration_ms,
            rid,
            client_ip,
            exc_info=exc_info,
            extra={
                "request_id": rid,
                "method": method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )
