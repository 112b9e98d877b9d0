"""Error envelope for the command surface."""

from __future__ import annotations

import uuid
from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from deskbridge.gateway.errors import LOCAL_ERRORS, GatewayError


class ErrorDetail(BaseModel):
    loc: list[Any]
    msg: str
    type: str


class ErrorResponse(BaseModel):
    type: str
    code: str
    message: str
    details: list[ErrorDetail] | None = None
    upstream_status: int | None = None
    trace_id: str | None = None

    model_config = {"json_schema_extra": {"example": {
        "type": "upstream_error",
        "code": "upstream",
        "message": "LLM API error 401 Unauthorized: invalid key",
        "upstream_status": 401,
        "trace_id": "req_abc123",
    }}}


def new_request_id() -> str:
    return f"req_{uuid.uuid4().hex[:12]}"


def request_trace_id(request: Request) -> str:
    """The X-Request-ID assigned by ``RequestIDMiddleware``, so envelopes and headers agree."""
    return getattr(request.state, "request_id", None) or new_request_id()


def error_json(
    status_code: int,
    error_type: str,
    code: str,
    message: str,
    details: list[ErrorDetail] | None = None,
    upstream_status: int | None = None,
    trace_id: str | None = None,
) -> JSONResponse:
    body = ErrorResponse(
        type=error_type,
        code=code,
        message=message,
        details=details,
        upstream_status=upstream_status,
        trace_id=trace_id or new_request_id(),
    )
    return JSONResponse(
        status_code=status_code,
        content={"error": body.model_dump(exclude_none=True)},
    )


def validation_error(
    message: str,
    details: list[ErrorDetail] | None = None,
    status_code: int = 400,
    trace_id: str | None = None,
) -> JSONResponse:
    return error_json(status_code, "validation_error", "invalid_payload", message, details=details, trace_id=trace_id)


def gateway_error(exc: GatewayError, trace_id: str | None = None) -> JSONResponse:
    if isinstance(exc, LOCAL_ERRORS):
        return error_json(400, "local_error", exc.kind, str(exc), trace_id=trace_id)
    return error_json(
        502,
        "upstream_error",
        exc.kind,
        str(exc),
        upstream_status=getattr(exc, "status_code", None),
        trace_id=trace_id,
    )


def assistant_error(message: str, trace_id: str | None = None) -> JSONResponse:
    return error_json(502, "assistant_error", "assistant_failed", message, trace_id=trace_id)


def not_found_error(path: str, trace_id: str | None = None) -> JSONResponse:
    return error_json(404, "not_found", "not_found", f"Not found: {path}", trace_id=trace_id)
