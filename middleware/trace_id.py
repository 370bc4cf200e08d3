"""Request Tracing Middleware

Gives every request a trace id, taken from the X-Trace-Id request header or
generated, stored on request.state for the error envelope and echoed back
in the X-Trace-Id response header.
"""

import logging
import uuid
from datetime import datetime, timezone

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

TRACE_ID_HEADER = "X-Trace-Id"

logger = logging.getLogger(__name__)


def generate_trace_id() -> str:
    return f"{datetime.now(timezone.utc).strftime('%Y%m%d-%H%M%S')}-{uuid.uuid4().hex[:8]}"


class TraceIdMiddleware(BaseHTTPMiddleware):

    async def dispatch(self, request: Request, call_next) -> Response:
        trace_id = request.headers.get(TRACE_ID_HEADER) or generate_trace_id()
        request.state.trace_id = trace_id

        response = await call_next(request)

        response.headers[TRACE_ID_HEADER] = trace_id
        logger.debug(f"[{trace_id}] {request.method} {request.url.path} -> {response.status_code}")
        return response
