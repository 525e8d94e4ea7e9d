"""Adapter Utilities."""

from .http import (
    APPLICATION_JSON_CONTENT_TYPE,
    default_headers,
    is_valid_price,
    validate_url,
)

__all__ = [
    "APPLICATION_JSON_CONTENT_TYPE",
    "default_headers",
    "is_valid_price",
    "validate_url",
]
