"""Redis cache layer for link lookups."""

import json
import logging
from typing import Optional
from datetime import datetime

import redis.asyncio as redis

from .models import Link


class RedisCache:
    """Redis cache for link records, keyed by code.

    The cache is best-effort: any Redis failure is logged and treated as
    a miss, so the store stays authoritative.
    """

    def __init__(
        self,
        redis_url: Optional[str] = None,
        ttl_seconds: int = 3600,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize Redis cache.

        Args:
            redis_url: Redis connection URL (e.g., redis://localhost:6379/0)
            ttl_seconds: Upper bound on how long an entry is kept
            logger: Optional logger instance
        """
        self.redis_url = redis_url
        self.ttl_seconds = ttl_seconds
        self.logger = logger or logging.getLogger(__name__)
        self.enabled = redis_url is not None
        self.client: Optional[redis.Redis] = None

        if self.enabled:
            self.logger.info(f"Redis cache enabled with TTL={ttl_seconds}s")

    async def connect(self) -> None:
        """Connect to Redis."""
        if not self.enabled:
            return

        try:
            self.client = redis.from_url(
                self.redis_url,
                encoding="utf-8",
                decode_responses=True,
            )
            await self.client.ping()
            self.logger.info("Connected to Redis")
        except redis.RedisError as e:
            self.logger.error(f"Failed to connect to Redis: {e}")
            self.enabled = False

    async def get_link(self, code: str) -> Optional[Link]:
        """Get a cached link record.

        Args:
            code: The short code

        Returns:
            Cached link or None
        """
        if not self.enabled or not self.client:
            return None

        try:
            raw = await self.client.get(self.get_cache_key(code))
        except redis.RedisError as e:
            self.logger.error(f"Cache get error: {e}")
            return None

        if raw is None:
            return None

        try:
            return Link.from_dict(json.loads(raw))
        except (ValueError, KeyError, TypeError) as e:
            self.logger.warning(f"Discarding malformed cache entry for {code}: {e}")
            return None

    async def set_link(self, link: Link, now: datetime) -> bool:
        """Cache a link record until the earlier of the TTL and its expiry.

        Args:
            link: Link to cache
            now: Current time

        Returns:
            True if cached
        """
        if not self.enabled or not self.client:
            return False

        remaining = int((link.expires_at - now).total_seconds())
        ttl = min(self.ttl_seconds, remaining)
        if ttl <= 0:
            return False

        try:
            await self.client.setex(self.get_cache_key(link.code), ttl, json.dumps(link.to_dict()))
            return True
        except redis.RedisError as e:
            self.logger.error(f"Cache set error: {e}")
            return False

    async def ping(self) -> bool:
        """Check that Redis answers."""
        if not self.enabled or not self.client:
            return False

        try:
            return bool(await self.client.ping())
        except redis.RedisError as e:
            self.logger.error(f"Cache ping error: {e}")
            return False

    async def close(self) -> None:
        """Close Redis connection."""
        if self.client:
            await self.client.aclose()
            self.logger.info("Redis connection closed")

    def get_cache_key(self, code: str) -> str:
        """Generate cache key for a code."""
        return f"link:shortener:{code}"
