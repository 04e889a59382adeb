"""In-process store for shortlink.

Keeps links and accesses in dictionaries behind an asyncio lock and enforces
the same unique and foreign-key constraints as the PostgreSQL schema. Used for
``memory://`` configurations and the test-suite.
"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Optional, List, Dict

from .base import LinkStoreBase
from .models import Link, Access
from ..errors import StoreConstraintViolation


class MemoryLinkStore(LinkStoreBase):
    """Dictionary-backed link store."""

    def __init__(self, db_config: str = "memory://", logger: Optional[logging.Logger] = None):
        super().__init__(db_config)
        self.logger = logger or logging.getLogger(__name__)
        self._lock = asyncio.Lock()
        self._links: Dict[int, Link] = {}
        self._by_code: Dict[str, int] = {}
        self._by_hash: Dict[str, int] = {}
        self._accesses: Dict[int, Access] = {}
        self._link_seq = 0
        self._access_seq = 0

    async def ensure_schema(self) -> None:
        self.logger.debug("Memory store needs no schema")

    async def create_link(self, url: str, url_hash: str, code: str) -> Link:
        async with self._lock:
            if url_hash in self._by_hash:
                raise StoreConstraintViolation("url_hash")
            if code in self._by_code:
                raise StoreConstraintViolation("code")

            self._link_seq += 1
            link = Link(
                id=self._link_seq,
                url=url,
                url_hash=url_hash,
                code=code,
                created_at=datetime.now(timezone.utc),
            )
            self._links[link.id] = link
            self._by_code[code] = link.id
            self._by_hash[url_hash] = link.id

        self.logger.debug(f"Stored link {link.id}: {code} -> {url}")
        return link

    async def get_link_by_code(self, code: str) -> Optional[Link]:
        link_id = self._by_code.get(code)
        return self._links.get(link_id) if link_id is not None else None

    async def get_link_by_hash(self, url_hash: str) -> Optional[Link]:
        link_id = self._by_hash.get(url_hash)
        return self._links.get(link_id) if link_id is not None else None

    async def code_exists(self, code: str) -> bool:
        return code in self._by_code

    async def create_access(
        self,
        link_id: int,
        referrer_url: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> Access:
        async with self._lock:
            if link_id not in self._links:
                raise StoreConstraintViolation("link_id")

            self._access_seq += 1
            access = Access(
                id=self._access_seq,
                link_id=link_id,
                referrer_url=referrer_url,
                user_agent=user_agent,
                created_at=datetime.now(timezone.utc),
            )
            self._accesses[access.id] = access

        return access

    async def list_accesses(self, link_id: int, newest_first: bool = True) -> List[Access]:
        accesses = [a for a in self._accesses.values() if a.link_id == link_id]
        accesses.sort(key=lambda a: (a.created_at, a.id), reverse=newest_first)
        return accesses

    async def count_links(self) -> int:
        return len(self._links)

    async def count_accesses(self, link_id: Optional[int] = None) -> int:
        if link_id is None:
            return len(self._accesses)
        return sum(1 for a in self._accesses.values() if a.link_id == link_id)

    async def health_check(self) -> bool:
        return True

    async def close(self) -> None:
        self.logger.debug("Memory store closed")
