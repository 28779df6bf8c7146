"""Resolution: code lookup and expiration checks for redirects."""

import logging
from typing import Optional, Callable
from datetime import datetime

from .errors import Expired, NotFound
from .store.base import LinkStoreBase
from .store.cache import RedisCache
from .store.models import Link, utc_now
from .common.logging_config import get_logger


class ResolutionService:
    """Maps codes back to their target URLs."""

    def __init__(
        self,
        store: LinkStoreBase,
        cache: Optional[RedisCache] = None,
        clock: Callable[[], datetime] = utc_now,
        logger: Optional[logging.Logger] = None,
    ):
        self.store = store
        self.cache = cache
        self.clock = clock
        self.logger = logger or get_logger("resolution")

    async def resolve(self, code: str) -> str:
        """Get the target URL for an active code.

        Expired links stay in the store; they are only refused here.

        Raises:
            NotFound: If no link has this code
            Expired: If the link's expiration time has passed
            StorageError: If the store fails
        """
        link = await self.get_link(code)

        if link.is_expired(self.clock()):
            self.logger.info(f"Short link expired: {code}")
            raise Expired()

        return link.target

    async def get_link(self, code: str) -> Link:
        """Get the link record for a code, whatever its status.

        Raises:
            NotFound: If no link has this code
            StorageError: If the store fails
        """
        if self.cache:
            cached = await self.cache.get_link(code)
            if cached:
                self.logger.debug(f"Cache hit for {code}")
                return cached

        link = await self.store.find_by_code(code)
        if not link:
            self.logger.warning(f"Short code not found: {code}")
            raise NotFound()

        if self.cache:
            await self.cache.set_link(link, self.clock())

        return link
