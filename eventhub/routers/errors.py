"""Mapping of client errors to HTTP responses."""
from fastapi import HTTPException

from eventhub.errors import ApiError, TransportError


def to_http_exception(error: TransportError, detail: str | None = None) -> HTTPException:
    """
    Client errors (4xx from the events API) keep their status and message;
    anything else becomes a 502 with a retryable message.
    """
    if isinstance(error, ApiError) and 400 <= error.status_code < 500:
        return HTTPException(status_code=error.status_code, detail=error.message)
    return HTTPException(status_code=502, detail=detail or error.message)
