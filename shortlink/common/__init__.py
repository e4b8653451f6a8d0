"""Common utilities for shortlink."""

from .validators import is_valid_url, is_success_status
from .url_builder import (
    URLEncodingError,
    URLTooLongError,
    encode_target_url,
    build_api_url,
    normalize_short_url,
)
from .logging_config import setup_logging

__all__ = [
    "is_valid_url",
    "is_success_status",
    "URLEncodingError",
    "URLTooLongError",
    "encode_target_url",
    "build_api_url",
    "normalize_short_url",
    "setup_logging",
]
