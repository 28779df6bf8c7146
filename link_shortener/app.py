#!/usr/bin/env python3
"""
Main entry point for the link shortener service.

Concurrency: each request runs as its own asyncio task (FastAPI + asyncpg
connection pool + redis.asyncio) inside a single process.

Usage:
    python app.py

Environment variables:
    STORE_BACKEND - 'postgres' (default) or 'memory'
    DATABASE_URL - PostgreSQL connection URL
    CREATE_TABLES - Set to '1' to create the links table on startup
    REDIS_URL - Redis connection URL (optional)
    BASE_URL - Base URL for short links
    PORT - Port to listen on
    CAPACITY - Maximum number of stored links (default 20000)
    LOG_LEVEL - Logging level
"""

import signal
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from config import Config, load_config
from shortener.store import LinkStoreBase, PostgresLinkStore, MemoryLinkStore, RedisCache
from shortener.service import LinkShortenerService
from shortener.shortcode import ShortCodeGenerator
from shortener.common.logging_config import setup_logging
from web_app import create_app


def build_store(config: Config, logger) -> LinkStoreBase:
    """Create the configured link store."""
    if config.store_backend == "memory":
        logger.warning("Using in-memory link store; links are lost on restart")
        return MemoryLinkStore(logger=logger.getChild("store"))

    logger.info("Using PostgreSQL link store")
    return PostgresLinkStore(
        dsn=config.database_url,
        pool_max_size=config.db_pool_max_size,
        connection_timeout_seconds=config.db_timeout_seconds,
        logger=logger.getChild("store"),
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown."""
    config = app.state.config
    logger = app.state.logger

    logger.info("Starting link shortener service...")

    store = build_store(config, logger)
    if config.create_tables and isinstance(store, PostgresLinkStore):
        await store.ensure_schema()

    # Initialize cache (optional)
    if config.redis_url:
        logger.info("Connecting to Redis")
        cache = RedisCache(
            redis_url=config.redis_url,
            ttl_seconds=config.cache_ttl_seconds,
            logger=logger.getChild("cache"),
        )
        await cache.connect()
    else:
        logger.info("Redis caching disabled")
        cache = None

    service = LinkShortenerService(
        store=store,
        cache=cache,
        short_code_generator=ShortCodeGenerator(),
        logger=logger,
        capacity=config.capacity,
        max_collision_retries=config.max_collision_retries,
    )

    app.state.store = store
    app.state.cache = cache
    app.state.service = service

    logger.info("Service started successfully")

    yield

    logger.info("Shutting down link shortener service...")
    await service.close()
    logger.info("Service stopped")


def main():
    """Main entry point."""
    config = load_config()

    logger = setup_logging(
        level=config.log_level,
        log_file=config.log_file,
        json_format=config.log_json,
    )

    logger.info("Link Shortener Service")
    logger.info(f"Configuration: {config.model_dump(exclude={'database_url', 'redis_url'})}")

    # Store, cache and service are created in lifespan
    app = create_app(
        store_instance=None,
        cache_instance=None,
        service_instance=None,
        config=config,
    )
    app.state.logger = logger
    app.router.lifespan_context = lifespan

    uvicorn_config = uvicorn.Config(
        app,
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
        access_log=True,
    )

    server = uvicorn.Server(uvicorn_config)

    def handle_signal(signum, frame):
        logger.info(f"Received signal {signum}, initiating graceful shutdown...")
        server.should_exit = True

    signal.signal(signal.SIGINT, handle_signal)
    signal.signal(signal.SIGTERM, handle_signal)

    try:
        logger.info(f"Starting server on {config.host}:{config.port}")
        server.run()
    except Exception as e:
        logger.error(f"Server error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
