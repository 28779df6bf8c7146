"""Validation utilities for the link shortener."""

import re
from typing import Tuple


MAX_TARGET_LENGTH = 2048

CODE_PATTERN = re.compile(r'^[A-Za-z0-9]{1,11}$')


def is_valid_target(url: str, max_length: int = MAX_TARGET_LENGTH) -> Tuple[bool, str]:
    """Validate a target URL.

    Only presence, length and the absence of NUL are checked; the target is
    stored verbatim.

    Args:
        url: The URL to validate
        max_length: Maximum accepted length in characters

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not url or not isinstance(url, str):
        return False, "url parameter is required"

    if len(url) > max_length:
        return False, "url is too long"

    # PostgreSQL text columns cannot hold NUL
    if "\x00" in url:
        return False, "url contains invalid characters"

    return True, ""


def is_valid_code(code: str) -> bool:
    """Check that code has the routable shape: 1 to 11 alphanumerics."""
    return isinstance(code, str) and CODE_PATTERN.match(code) is not None
