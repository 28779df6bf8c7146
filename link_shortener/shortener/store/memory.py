"""In-process link store for local development and tests."""

import itertools
import logging
from typing import Optional, Dict, List
from datetime import datetime

from ..errors import DuplicateCodeError
from .base import LinkStoreBase
from .models import Link


class MemoryLinkStore(LinkStoreBase):
    """Link store backed by process memory.

    Codes are unique and ids are assigned sequentially, as the PostgreSQL
    store does. Contents are lost when the process exits.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)
        self._ids = itertools.count(1)
        self._links: List[Link] = []
        self._by_code: Dict[str, Link] = {}

    async def count(self) -> int:
        return len(self._links)

    async def count_active(self, now: datetime) -> int:
        return sum(1 for link in self._links if not link.is_expired(now))

    async def find_by_target(self, target: str) -> Optional[Link]:
        for link in self._links:
            if link.target == target:
                return link
        return None

    async def find_by_code(self, code: str) -> Optional[Link]:
        return self._by_code.get(code)

    async def insert(
        self,
        code: str,
        target: str,
        created_at: datetime,
        expires_at: datetime,
    ) -> Link:
        if code in self._by_code:
            raise DuplicateCodeError()

        link = Link(
            id=next(self._ids),
            code=code,
            target=target,
            created_at=created_at,
            expires_at=expires_at,
        )
        self._links.append(link)
        self._by_code[code] = link
        self.logger.debug(f"Inserted link {link.id}: {code} -> {target}")
        return link

    async def health_check(self) -> bool:
        return True

    async def close(self) -> None:
        pass
