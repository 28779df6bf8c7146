"""Storage layer for the link shortener."""

from .base import LinkStoreBase
from .postgres import PostgresLinkStore
from .memory import MemoryLinkStore
from .cache import RedisCache
from .models import Link

__all__ = ["LinkStoreBase", "PostgresLinkStore", "MemoryLinkStore", "RedisCache", "Link"]
