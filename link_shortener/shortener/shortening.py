"""Shortening: admission, dedup and code allocation for new links."""

import logging
from typing import Optional, Callable
from datetime import datetime, timedelta

from .errors import CapacityExceeded, CodeGenerationError, DuplicateCodeError, InvalidInput
from .shortcode import ShortCodeGenerator
from .store.base import LinkStoreBase
from .store.cache import RedisCache
from .store.models import Link, utc_now
from .common.validators import is_valid_target
from .common.logging_config import get_logger


DEFAULT_CAPACITY = 20000
DEFAULT_LINK_TTL = timedelta(hours=24)


class ShorteningService:
    """Turns a target URL into a stored link."""

    def __init__(
        self,
        store: LinkStoreBase,
        generator: Optional[ShortCodeGenerator] = None,
        cache: Optional[RedisCache] = None,
        clock: Callable[[], datetime] = utc_now,
        capacity: int = DEFAULT_CAPACITY,
        link_ttl: timedelta = DEFAULT_LINK_TTL,
        max_collision_retries: int = 10,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize shortening service.

        Args:
            store: Link store
            generator: Code generator (11-character codes by default)
            cache: Optional cache populated with new links
            clock: Returns the current aware UTC time
            capacity: Maximum number of records the store may hold
            link_ttl: Lifetime of a new link
            max_collision_retries: Attempts at finding a free code before giving up
            logger: Optional logger
        """
        self.store = store
        self.generator = generator or ShortCodeGenerator()
        self.cache = cache
        self.clock = clock
        self.capacity = capacity
        self.link_ttl = link_ttl
        self.max_collision_retries = max_collision_retries
        self.logger = logger or get_logger("shortening")

    async def shorten(self, target: str) -> Link:
        """Return the link for target, creating it if needed.

        The capacity check runs before the dedup lookup, so a full store
        rejects even targets it already holds. A dedup hit is returned
        as stored, expired or not.

        Args:
            target: The original URL

        Returns:
            Existing or newly created link

        Raises:
            InvalidInput: If target is empty or too long
            CapacityExceeded: If the store is full
            CodeGenerationError: If no free code was found
            StorageError: If the store fails
        """
        is_valid, error = is_valid_target(target)
        if not is_valid:
            raise InvalidInput(error)

        total = await self.store.count()
        if total >= self.capacity:
            self.logger.warning(f"Capacity reached ({total}/{self.capacity}), rejecting {target}")
            raise CapacityExceeded()

        existing = await self.store.find_by_target(target)
        if existing:
            self.logger.debug(f"Reusing link {existing.code} for {target}")
            return existing

        link = await self._insert_with_fresh_code(target)

        if self.cache:
            await self.cache.set_link(link, self.clock())

        self.logger.info(f"Created link: {link.code} -> {target}")
        return link

    async def _insert_with_fresh_code(self, target: str) -> Link:
        """Generate a free code and insert, retrying on collisions.

        Collisions found by the pre-check and conflicts raised by the
        store's unique constraint draw from the same attempt budget.
        """
        for attempt in range(1, self.max_collision_retries + 1):
            code = self.generator.generate()

            if await self.store.find_by_code(code):
                self.logger.debug(f"Code {code} taken (attempt {attempt})")
                continue

            created_at = self.clock()
            try:
                return await self.store.insert(
                    code=code,
                    target=target,
                    created_at=created_at,
                    expires_at=created_at + self.link_ttl,
                )
            except DuplicateCodeError:
                self.logger.warning(f"Code {code} taken by a concurrent insert (attempt {attempt})")

        self.logger.error(f"No free code after {self.max_collision_retries} attempts for {target}")
        raise CodeGenerationError()
