"""
Common models shared across the backend.
"""
from .base import ModelBase


class ErrorDetail(ModelBase):
    """Error response body."""
    error: str
