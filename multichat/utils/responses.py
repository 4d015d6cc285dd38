"""Response utility functions."""

from datetime import datetime, timezone
from typing import Optional

from fastapi import status
from fastapi.responses import JSONResponse

from ..models.chat import ErrorResponse


def utc_timestamp() -> str:
    """ISO-8601 UTC timestamp with millisecond precision and a Z suffix."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def error_response(
    message: str,
    status_code: int = status.HTTP_400_BAD_REQUEST,
    details: Optional[str] = None,
    fallback_error: Optional[str] = None,
) -> JSONResponse:
    """Create standardized error response."""
    body = ErrorResponse(
        error=message,
        details=details,
        fallback_error=fallback_error,
        timestamp=utc_timestamp(),
    )
    return JSONResponse(
        content=body.model_dump(by_alias=True, exclude_none=True),
        status_code=status_code,
    )
