"""Service facade wiring shortening and resolution together."""

import logging
from typing import Optional, Dict, Any, Callable
from datetime import datetime, timedelta

from .shortcode import ShortCodeGenerator
from .shortening import ShorteningService, DEFAULT_CAPACITY, DEFAULT_LINK_TTL
from .resolution import ResolutionService
from .store.base import LinkStoreBase
from .store.cache import RedisCache
from .store.models import Link, utc_now
from .common.logging_config import get_logger


class LinkShortenerService:
    """Service layer used by the web app and the CLI."""

    def __init__(
        self,
        store: LinkStoreBase,
        cache: Optional[RedisCache] = None,
        short_code_generator: Optional[ShortCodeGenerator] = None,
        logger: Optional[logging.Logger] = None,
        clock: Callable[[], datetime] = utc_now,
        capacity: int = DEFAULT_CAPACITY,
        link_ttl: timedelta = DEFAULT_LINK_TTL,
        max_collision_retries: int = 10,
    ):
        """Initialize link shortener service.

        Args:
            store: Link store instance
            cache: Optional cache instance
            short_code_generator: Optional short code generator
            logger: Optional logger
            clock: Returns the current aware UTC time
            capacity: Maximum number of stored links
            link_ttl: Lifetime of a new link
            max_collision_retries: Maximum attempts at a free code
        """
        self.store = store
        self.cache = cache
        self.logger = logger or get_logger()
        self.clock = clock
        self.capacity = capacity

        self.shortening = ShorteningService(
            store=store,
            generator=short_code_generator,
            cache=cache,
            clock=clock,
            capacity=capacity,
            link_ttl=link_ttl,
            max_collision_retries=max_collision_retries,
            logger=self.logger.getChild("shortening"),
        )
        self.resolution = ResolutionService(
            store=store,
            cache=cache,
            clock=clock,
            logger=self.logger.getChild("resolution"),
        )

    async def shorten(self, target: str) -> Link:
        return await self.shortening.shorten(target)

    async def resolve(self, code: str) -> str:
        return await self.resolution.resolve(code)

    async def get_link(self, code: str) -> Link:
        return await self.resolution.get_link(code)

    def status_of(self, link: Link) -> str:
        """Status of a link right now."""
        return link.status(self.clock())

    async def get_statistics(self) -> Dict[str, Any]:
        """Get service statistics.

        Returns:
            Dictionary with link counts and capacity
        """
        total = await self.store.count()
        active = await self.store.count_active(self.clock())

        return {
            "total_links": total,
            "active_links": active,
            "capacity": self.capacity,
            "remaining_capacity": max(self.capacity - total, 0),
            "cache_enabled": self.cache is not None and self.cache.enabled,
        }

    async def health_check(self) -> Dict[str, bool]:
        """Perform health check.

        Returns:
            Dictionary with health status
        """
        db_healthy = await self.store.health_check()

        cache_healthy = True
        if self.cache and self.cache.enabled:
            cache_healthy = await self.cache.ping()

        return {
            "database": db_healthy,
            "cache": cache_healthy,
            "overall": db_healthy and cache_healthy,
        }

    async def close(self) -> None:
        """Close service connections."""
        await self.store.close()
        if self.cache:
            await self.cache.close()
