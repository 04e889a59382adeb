"""Core business logic for shortlink."""

from .shortcode import ShortCodeGenerator
from .service import ShortlinkService

__all__ = ["ShortCodeGenerator", "ShortlinkService"]
