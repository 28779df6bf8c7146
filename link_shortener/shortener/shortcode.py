"""Short code generation utilities."""

import random
import string
from typing import Optional


class ShortCodeGenerator:
    """Generate candidate short codes for links."""

    # Base62 characters (alphanumeric, case-sensitive)
    BASE62_CHARS = string.ascii_lowercase + string.ascii_uppercase + string.digits

    def __init__(self, default_length: int = 11, rng: Optional[random.Random] = None):
        """Initialize short code generator.

        Args:
            default_length: Default length for generated codes
            rng: Optional random source (seed it for reproducible codes)
        """
        self.default_length = default_length
        self.rng = rng or random.Random()

    def generate(self, length: Optional[int] = None) -> str:
        """Generate a random short code.

        Every position is drawn independently and uniformly from the
        base62 alphabet. The source is not cryptographic, so codes are
        only "probably unique" and callers must check them against the store.

        Args:
            length: Length of the code (uses default if not specified)

        Returns:
            Random short code
        """
        length = length or self.default_length
        return ''.join(self.rng.choices(self.BASE62_CHARS, k=length))

    @staticmethod
    def is_valid_format(code: str) -> bool:
        """Check that every character of code is in the base62 alphabet."""
        return bool(code) and all(c in ShortCodeGenerator.BASE62_CHARS for c in code)
