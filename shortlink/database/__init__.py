"""Storage layer for shortlink."""

import logging
from typing import Optional

from .base import LinkStoreBase
from .memory import MemoryLinkStore
from .postgres import PostgresLinkStore
from .cache import RedisCache
from .models import Link, Access


def create_store(
    db_config: str,
    pool_max_size: int = 10,
    connection_timeout_seconds: int = 30,
    logger: Optional[logging.Logger] = None,
) -> LinkStoreBase:
    """Pick a store implementation from the connection string scheme.

    ``memory://`` selects the in-process store; anything else is treated as a
    PostgreSQL DSN.
    """
    if db_config.startswith("memory://"):
        return MemoryLinkStore(db_config, logger=logger)
    return PostgresLinkStore(
        db_config,
        pool_max_size=pool_max_size,
        connection_timeout_seconds=connection_timeout_seconds,
        logger=logger,
    )


__all__ = [
    "LinkStoreBase",
    "MemoryLinkStore",
    "PostgresLinkStore",
    "RedisCache",
    "Link",
    "Access",
    "create_store",
]
