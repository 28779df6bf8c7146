"""Core business logic for the link shortener."""

from .shortcode import ShortCodeGenerator
from .shortening import ShorteningService
from .resolution import ResolutionService
from .service import LinkShortenerService

__all__ = ["ShortCodeGenerator", "ShorteningService", "ResolutionService", "LinkShortenerService"]
