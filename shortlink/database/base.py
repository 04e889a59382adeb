"""Abstract base class for shortlink store implementations."""

from abc import ABC, abstractmethod
from typing import Optional, List

from .models import Link, Access


class LinkStoreBase(ABC):
    """Abstract base class for link and access persistence.

    Uniqueness of ``url_hash`` and ``code`` and the ``link_id`` foreign key are
    enforced by the store itself. Writes are single inserts; a rejected write
    raises StoreConstraintViolation naming the offending field.
    """

    def __init__(self, db_config: str):
        """Initialize store.

        Args:
            db_config: Store connection string
        """
        self.db_config = db_config

    @abstractmethod
    async def ensure_schema(self) -> None:
        """Create tables and indexes if they don't exist."""
        pass

    @abstractmethod
    async def create_link(self, url: str, url_hash: str, code: str) -> Link:
        """Insert a new link.

        Args:
            url: The original URL, stored verbatim
            url_hash: Fingerprint of the normalized URL
            code: The short code

        Returns:
            The persisted link

        Raises:
            StoreConstraintViolation: If url_hash or code is already used
            StoreError: If the store fails
        """
        pass

    @abstractmethod
    async def get_link_by_code(self, code: str) -> Optional[Link]:
        """Find the link with exactly this code, or None."""
        pass

    @abstractmethod
    async def get_link_by_hash(self, url_hash: str) -> Optional[Link]:
        """Find the link with this fingerprint, or None."""
        pass

    @abstractmethod
    async def code_exists(self, code: str) -> bool:
        """Check if a code is already used."""
        pass

    @abstractmethod
    async def create_access(
        self,
        link_id: int,
        referrer_url: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> Access:
        """Append an access record for a link.

        Raises:
            StoreConstraintViolation: If link_id does not reference a link
            StoreError: If the store fails
        """
        pass

    @abstractmethod
    async def list_accesses(self, link_id: int, newest_first: bool = True) -> List[Access]:
        """List accesses of a link ordered by created_at (then id).

        Args:
            link_id: Owning link id
            newest_first: Descending order if True, ascending otherwise

        Returns:
            List of accesses (empty if none)
        """
        pass

    @abstractmethod
    async def count_links(self) -> int:
        """Number of stored links."""
        pass

    @abstractmethod
    async def count_accesses(self, link_id: Optional[int] = None) -> int:
        """Number of stored accesses, optionally for one link."""
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Check if store is healthy."""
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close store connections."""
        pass
