"""Abstract base class for link store implementations."""

from abc import ABC, abstractmethod
from typing import Optional
from datetime import datetime

from .models import Link


class LinkStoreBase(ABC):
    """Abstract base class for link persistence.

    The store is the only component that touches durable storage. Every
    operation runs on its own connection; failures are raised as
    StorageError and never retried here.
    """

    @abstractmethod
    async def count(self) -> int:
        """Count all link records, expired ones included.

        Returns:
            Total number of records
        """
        pass

    @abstractmethod
    async def count_active(self, now: datetime) -> int:
        """Count records that have not expired at the given instant.

        Args:
            now: Reference time

        Returns:
            Number of records with expires_at >= now
        """
        pass

    @abstractmethod
    async def find_by_target(self, target: str) -> Optional[Link]:
        """Find the first record stored for a target URL.

        Args:
            target: Exact target URL

        Returns:
            The matching record with the lowest id, or None
        """
        pass

    @abstractmethod
    async def find_by_code(self, code: str) -> Optional[Link]:
        """Find the record for a code.

        Args:
            code: Exact short code

        Returns:
            The matching record, or None
        """
        pass

    @abstractmethod
    async def insert(
        self,
        code: str,
        target: str,
        created_at: datetime,
        expires_at: datetime,
    ) -> Link:
        """Persist a new link record.

        Args:
            code: The short code
            target: The original URL
            created_at: Creation timestamp
            expires_at: Expiration timestamp

        Returns:
            The stored record with its assigned id

        Raises:
            DuplicateCodeError: If the code is already taken
            StorageError: If the write fails
        """
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Check if the store is reachable."""
        pass

    @abstractmethod
    async def close(self) -> None:
        """Release store connections."""
        pass
