"""Middleware rejecting oversized command bodies."""

from __future__ import annotations

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from deskbridge.api.errors import error_json, request_trace_id


class BodyLimitMiddleware(BaseHTTPMiddleware):
    def __init__(self, app: object, max_bytes: int = 1_048_576) -> None:
        super().__init__(app)  # type: ignore[arg-type]
        self.max_bytes = max_bytes

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        content_length = request.headers.get("content-length")
        if content_length is not None and content_length.isdigit():
            if int(content_length) > self.max_bytes:
                return error_json(
                    413,
                    "validation_error",
                    "request_too_large",
                    f"Request body too large (max {self.max_bytes} bytes).",
                    trace_id=request_trace_id(request),
                )
        return await call_next(request)
