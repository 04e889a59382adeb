"""
Error classes for the shortlink service.

Validation failures carry a field-keyed set of messages; store failures wrap
driver errors so callers never see asyncpg exceptions directly.
"""

from typing import Optional, Dict, Any, List


class FieldErrors:
    """Ordered mapping of field name to a list of error messages."""

    def __init__(self):
        self._messages: Dict[str, List[str]] = {}

    def add(self, field: str, message: str) -> None:
        self._messages.setdefault(field, []).append(message)

    def get(self, field: str) -> List[str]:
        return list(self._messages.get(field, []))

    def has(self, field: str) -> bool:
        return bool(self._messages.get(field))

    def to_dict(self) -> Dict[str, str]:
        """Messages per field joined with ", " (the wire format)."""
        return {field: ", ".join(messages) for field, messages in self._messages.items()}

    def __bool__(self) -> bool:
        return any(self._messages.values())

    def __len__(self) -> int:
        return sum(len(messages) for messages in self._messages.values())

    def __repr__(self) -> str:
        return f"FieldErrors({self._messages!r})"


class ShortlinkError(Exception):
    """
    Base error class.

    Attributes:
        status_code: HTTP status code used at the boundary (default: 500)
        message: Error message (default: "Internal server error")
        details: Optional additional error details
    """
    status_code: int = 500
    message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        self.message = message or self.message
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(ShortlinkError):
    """400 Validation error carrying per-field messages."""
    status_code = 400
    message = "Validation failed"

    def __init__(self, errors: FieldErrors, message: Optional[str] = None):
        self.errors = errors
        super().__init__(message, details=errors.to_dict())


class StoreError(ShortlinkError):
    """503 Store unavailable or failed."""
    status_code = 503
    message = "Store error"


class StoreConstraintViolation(StoreError):
    """409 Unique or foreign-key constraint rejected a write."""
    status_code = 409
    message = "Constraint violation"

    def __init__(self, field: str, message: Optional[str] = None):
        self.field = field
        super().__init__(message or f"Constraint violation on {field}", details={"field": field})
