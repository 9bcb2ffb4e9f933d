"""Request logging middleware.

Every request gets a short request ID, stored on request.state (so routers
can echo it in ApiResponse) and returned as the X-Request-ID header. Trade
and admin calls are not idempotent, so the ID is what callers quote when
reconciling an ambiguous timeout against the portfolio view.

Log format:
    INFO [POST] /api/v1/trade/buy → 200 (4ms) req_a1b2c3d4e5f6
Responses with status >= 400 are logged at WARNING.
"""

import logging
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("cc.request")


class RequestLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = f"req_{uuid.uuid4().hex[:12]}"
        request.state.request_id = request_id

        start = time.perf_counter()
        response: Response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000
        response.headers["X-Request-ID"] = request_id

        level = logging.WARNING if response.status_code >= 400 else logging.INFO
        logger.log(
            level,
            "[%s] %s → %d (%.0fms) %s",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
            request_id,
        )
        return response
