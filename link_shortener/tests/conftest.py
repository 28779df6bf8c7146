"""Pytest configuration and fixtures."""

import random
from datetime import datetime, timedelta, timezone

import pytest
from httpx import AsyncClient, ASGITransport

from config import Config
from shortener.store.memory import MemoryLinkStore
from shortener.service import LinkShortenerService
from shortener.shortcode import ShortCodeGenerator
from shortener.common.logging_config import setup_logging
from web_app import create_app


class FakeClock:
    """Controllable clock returning aware UTC datetimes."""

    def __init__(self, start: datetime = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now += delta


@pytest.fixture
def logger():
    """Create test logger."""
    return setup_logging(level="DEBUG")


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(logger):
    """In-memory link store."""
    return MemoryLinkStore(logger=logger)


@pytest.fixture
def short_code_generator():
    """Create a seeded short code generator."""
    return ShortCodeGenerator(default_length=11, rng=random.Random(1234))


@pytest.fixture
def service(store, short_code_generator, logger, clock) -> LinkShortenerService:
    """Create service instance."""
    return LinkShortenerService(
        store=store,
        cache=None,  # No cache for tests
        short_code_generator=short_code_generator,
        logger=logger,
        clock=clock,
    )


@pytest.fixture
def config():
    return Config(
        store_backend="memory",
        base_url="http://testserver",
    )


@pytest.fixture
def app(store, service, config):
    """Create test FastAPI app."""
    return create_app(
        store_instance=store,
        cache_instance=None,
        service_instance=service,
        config=config,
    )


@pytest.fixture
async def client(app):
    """Create test client."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as ac:
        yield ac


@pytest.fixture
def sample_urls():
    """Sample URLs for testing."""
    return [
        "https://example.com/test",
        "https://github.com/user/repo",
        "https://stackoverflow.com/questions/123456",
    ]
