#!/usr/bin/env python3
"""
Main entry point for the shortlink service.

Concurrency: requests are served concurrently via async I/O (FastAPI + asyncpg
connection pool + redis.asyncio). Set WORKERS > 1 for multi-process scaling;
each worker has its own pool and the database's unique constraints keep codes
and fingerprints unique across them.

Usage:
    python app.py

Environment variables:
    DATABASE_URL - PostgreSQL connection URL (memory:// for an in-process store)
    CREATE_TABLES - Set to 'true' to create the schema on startup
    REDIS_URL - Redis connection URL (optional)
    BASE_URL - Fallback base URL for short links
    PORT - Port to listen on
    WORKERS - Number of uvicorn worker processes (default 1)
    LOG_LEVEL - Logging level
"""

import signal
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from shortlink.config import load_config
from shortlink.database import create_store, RedisCache
from shortlink.service import ShortlinkService
from shortlink.shortcode import ShortCodeGenerator
from shortlink.common.logging_config import setup_logging
from web_app import create_app


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown."""
    config = app.state.config
    logger = app.state.logger

    logger.info("Starting shortlink service...")

    store = create_store(
        config.database_url,
        pool_max_size=config.db_pool_max_size,
        connection_timeout_seconds=config.db_timeout_seconds,
        logger=logger,
    )
    if config.create_tables:
        await store.ensure_schema()

    cache = None
    if config.redis_url:
        logger.info("Connecting to Redis")
        cache = RedisCache(
            redis_url=config.redis_url,
            ttl_seconds=config.cache_ttl_seconds,
            logger=logger,
        )
        await cache.connect()
    else:
        logger.info("Redis caching disabled")

    service = ShortlinkService(
        store=store,
        cache=cache,
        short_code_generator=ShortCodeGenerator(),
        logger=logger,
        max_code_retries=config.max_code_retries,
    )

    app.state.store = store
    app.state.cache = cache
    app.state.service = service

    logger.info("Service started successfully")

    yield

    logger.info("Shutting down shortlink service...")
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

    logger.info("shortlink service")
    logger.info(f"Configuration: {config.model_dump(exclude={'database_url', 'redis_url'})}")

    app = create_app(
        store_instance=None,  # Set in lifespan
        cache_instance=None,
        service_instance=None,
        config=config,
    )

    app.state.config = config
    app.state.logger = logger
    app.router.lifespan_context = lifespan

    uvicorn_config = uvicorn.Config(
        app,
        host=config.host,
        port=config.port,
        workers=config.workers,
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
