"""Common utilities for shortlink."""

from .validators import is_valid_url, validate_url_field
from .url_hasher import normalize_url, hash_url
from .links import AccessContext, access_context, public_base_url, short_link_url
from .logging_config import setup_logging

__all__ = [
    "is_valid_url",
    "validate_url_field",
    "normalize_url",
    "hash_url",
    "AccessContext",
    "access_context",
    "public_base_url",
    "short_link_url",
    "setup_logging",
]
