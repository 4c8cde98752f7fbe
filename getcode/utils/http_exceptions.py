"""
HTTP exception helpers for FastAPI.

This module provides helper functions for raising HTTP exceptions
with consistent status codes and messages. The application renders
every HTTPException as ``{"error": detail}``.
"""
from typing import NoReturn

from fastapi import HTTPException
from starlette.status import (
    HTTP_429_TOO_MANY_REQUESTS,
    HTTP_500_INTERNAL_SERVER_ERROR,
    HTTP_502_BAD_GATEWAY,
)


def raise_internal_error(
    detail: str = "Internal server error. Please try again later."
) -> NoReturn:
    """Raises an HTTP 500 Internal Server Error exception."""
    raise HTTPException(status_code=HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)


def raise_too_many_requests(detail: str) -> NoReturn:
    """Raises an HTTP 429 Too Many Requests exception."""
    raise HTTPException(status_code=HTTP_429_TOO_MANY_REQUESTS, detail=detail)


def raise_bad_gateway(detail: str) -> NoReturn:
    """Raises an HTTP 502 Bad Gateway exception."""
    raise HTTPException(status_code=HTTP_502_BAD_GATEWAY, detail=detail)
