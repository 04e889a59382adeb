"""Validation utilities for shortlink."""

import re
from urllib.parse import urlsplit, SplitResult
from typing import Any, Optional

from ..errors import FieldErrors


MAX_URL_LENGTH = 2000

ALLOWED_SCHEMES = ("http", "https")

# At least one non-whitespace run, a dot, then another non-whitespace run
HOSTNAME_PATTERN = re.compile(r"\S+\.\S+")

# Only printable ASCII may appear unescaped; anything else must be percent-encoded
_FORBIDDEN_CHARS = re.compile(r"[^\x21-\x7e]")

BLANK_MESSAGE = "can't be blank"
INVALID_MESSAGE = "is invalid"
TOO_LONG_MESSAGE = f"is too long (maximum is {MAX_URL_LENGTH} characters)"


def parse_uri(value: Any) -> Optional[SplitResult]:
    """Parse a value as a URI.

    Args:
        value: Candidate URI

    Returns:
        The split URI, or None if the value is not a parseable URI string
    """
    if not isinstance(value, str) or not value:
        return None

    if _FORBIDDEN_CHARS.search(value):
        return None

    try:
        parts = urlsplit(value)
        # Accessing the port validates it
        parts.port
    except ValueError:
        return None

    return parts


def is_valid_url(value: Any) -> bool:
    """Check that a value is an absolute http(s) URL with a dotted host.

    Args:
        value: The value to check (None and empty strings are invalid)

    Returns:
        True if valid
    """
    parts = parse_uri(value)
    if parts is None:
        return False

    if parts.scheme.lower() not in ALLOWED_SCHEMES:
        return False

    host = parts.hostname
    return bool(host) and HOSTNAME_PATTERN.fullmatch(host) is not None


def is_blank(value: Any) -> bool:
    """True for None, empty and whitespace-only strings."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def validate_url_field(value: Any, field: str, errors: Optional[FieldErrors] = None) -> FieldErrors:
    """Run the URL field pipeline: presence, length, then syntax.

    The syntax check is skipped when an earlier check already reported an
    error for the field, so a blank value only yields "can't be blank".

    Args:
        value: Submitted value
        field: Field name the messages are keyed under
        errors: Existing error set to add to (a new one is created if omitted)

    Returns:
        The error set
    """
    errors = errors if errors is not None else FieldErrors()

    if is_blank(value):
        errors.add(field, BLANK_MESSAGE)

    if isinstance(value, str) and len(value) > MAX_URL_LENGTH:
        errors.add(field, TOO_LONG_MESSAGE)

    if not errors.has(field) and not is_valid_url(value):
        errors.add(field, INVALID_MESSAGE)

    return errors
