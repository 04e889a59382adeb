"""Short code generation utilities."""

import secrets
import string


class ShortCodeGenerator:
    """Generate random short codes for links."""

    # Base62 characters (alphanumeric, case-sensitive)
    BASE62_CHARS = string.ascii_letters + string.digits  # a-zA-Z0-9

    CODE_LENGTH = 6

    def __init__(self, length: int = CODE_LENGTH):
        """Initialize short code generator.

        Args:
            length: Length of generated codes
        """
        self.length = length

    def generate(self) -> str:
        """Generate a random short code.

        Each character is drawn independently from the base62 alphabet with
        a cryptographically secure source, so every code has full length.

        Returns:
            Random short code
        """
        return "".join(secrets.choice(self.BASE62_CHARS) for _ in range(self.length))

    @classmethod
    def is_valid_format(cls, code: str) -> bool:
        """Check if code is exactly CODE_LENGTH base62 characters.

        Args:
            code: Code to validate

        Returns:
            True if valid format
        """
        return (
            isinstance(code, str)
            and len(code) == cls.CODE_LENGTH
            and all(c in cls.BASE62_CHARS for c in code)
        )
