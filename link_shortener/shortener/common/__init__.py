"""Common utilities for the link shortener."""

from .validators import is_valid_target, is_valid_code
from .headers import extract_forwarded_headers, build_base_url, resolve_path_prefix
from .url_builder import build_short_url
from .logging_config import setup_logging, get_logger

__all__ = [
    "is_valid_target",
    "is_valid_code",
    "extract_forwarded_headers",
    "build_base_url",
    "resolve_path_prefix",
    "build_short_url",
    "setup_logging",
    "get_logger",
]
