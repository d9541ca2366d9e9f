"""Response envelopes shared by every route."""

import uuid
from datetime import datetime, timezone
from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse

from chari_stub.serialization import format_timestamp, serialize_value

REQUEST_ID_HEADER = "c-request-id"


def request_id(request: Request) -> str:
    """Caller-supplied correlation id, or a new UUID."""
    return request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())


def envelope(data: Any, request: Request) -> dict[str, Any]:
    """Wrap a payload as ``{data, c_request_id}``."""
    return {"data": serialize_value(data), "c_request_id": request_id(request)}


def error_body(error_code: int, description: str) -> dict[str, Any]:
    return {"errorCode": error_code, "errorDescription": description}


def error_response(status_code: int, description: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=error_body(status_code, description))


def now_iso() -> str:
    return format_timestamp(datetime.now(timezone.utc))
