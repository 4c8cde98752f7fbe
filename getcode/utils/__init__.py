"""
Backend utilities.
"""
from .http_exceptions import (
    raise_bad_gateway,
    raise_internal_error,
    raise_too_many_requests,
)
