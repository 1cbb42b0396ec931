"""
Animal Catalog Backend — Origin Allow-List Middleware
=======================================================

What:  Refuses requests whose Origin header is not on the allow-list.
How:   Starlette's CORSMiddleware only decides which CORS headers to send;
       a simple cross-origin request from an unknown site would still reach
       the handler. This middleware answers such requests with 403 first.
       Requests without an Origin header (curl, server-to-server, same-origin
       GETs) pass through.

The allow-list comes from settings.cors_origins_list, which depends on
ENVIRONMENT (development / production).
"""

import logging
from typing import Iterable

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from animal_catalog.middleware.request_id import request_id_var

logger = logging.getLogger(__name__)


class OriginAllowListMiddleware(BaseHTTPMiddleware):

    def __init__(self, app, allowed_origins: Iterable[str], **kwargs):
        super().__init__(app, **kwargs)
        self.allowed_origins = frozenset(allowed_origins)

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        origin = request.headers.get("origin")
        if origin is None or origin in self.allowed_origins:
            return await call_next(request)

        rid = request_id_var.get("")
        logger.warning("[%s] Rejected request from disallowed origin %s", rid, origin)
        return JSONResponse(
            status_code=403,
            content={
                "error": "origin_not_allowed",
                "message": "Not allowed by CORS",
                "details": {"origin": origin},
                "request_id": rid,
            },
        )
