"""Business logic service for shortlink."""

import logging
from typing import Optional, Dict, List

from .shortcode import ShortCodeGenerator
from .database.base import LinkStoreBase
from .database.cache import RedisCache
from .database.models import Link, Access
from .errors import FieldErrors, ValidationError, StoreError, StoreConstraintViolation
from .common.url_hasher import hash_url
from .common.validators import validate_url_field


NOT_SHORTENED_MESSAGE = "could not be shortened"
NOT_UNIQUE_MESSAGE = "must be unique"
TAKEN_MESSAGE = "has already been taken"


class ShortlinkService:
    """Service layer for the shortcode lifecycle.

    Shortening validates and fingerprints the URL, reuses the link already
    stored for that fingerprint, and otherwise assigns a fresh code. Resolving
    looks a code up and records an access for each redirect.
    """

    def __init__(
        self,
        store: LinkStoreBase,
        cache: Optional[RedisCache] = None,
        short_code_generator: Optional[ShortCodeGenerator] = None,
        logger: Optional[logging.Logger] = None,
        max_code_retries: int = 3,
    ):
        """Initialize shortlink service.

        Args:
            store: Link store instance
            cache: Optional cache instance
            short_code_generator: Optional short code generator
            logger: Optional logger
            max_code_retries: Extra code attempts after the first collision
        """
        self.store = store
        self.cache = cache
        self.generator = short_code_generator or ShortCodeGenerator()
        self.logger = logger or logging.getLogger(__name__)
        self.max_code_retries = max_code_retries

    async def shorten(self, long_url: Optional[str]) -> Link:
        """Return the link for a URL, creating it if needed.

        Args:
            long_url: The URL to shorten

        Returns:
            The existing link for the URL's fingerprint, or a new one

        Raises:
            ValidationError: If the URL is invalid or no link could be created
            StoreError: If the store is unavailable
        """
        errors = validate_url_field(long_url, "long_url")
        if errors:
            raise ValidationError(errors)

        url_hash = hash_url(long_url)

        existing = await self.store.get_link_by_hash(url_hash)
        if existing:
            self.logger.debug(f"Reusing link {existing.code} for {long_url}")
            return existing

        code = await self._next_available_code()
        if code is None:
            self.logger.warning(
                f"No free code after {self.max_code_retries + 1} attempts for {long_url}"
            )
            raise ValidationError(self._not_shortened())

        try:
            link = await self.create_link(long_url, code)
        except ValidationError as e:
            self.logger.warning(f"Could not persist link for {long_url}: {e.errors.to_dict()}")
            raise ValidationError(self._not_shortened()) from e

        if self.cache:
            await self.cache.set_link(link)

        self.logger.info(f"Created short link: {link.code} -> {link.url}")
        return link

    async def create_link(self, url: Optional[str], code: str) -> Link:
        """Persist a link, re-validating it on the way in.

        The store's unique constraints decide races: a fingerprint already
        stored is reported on ``url``, a code already stored on ``code``.

        Args:
            url: Original URL
            code: Short code to assign

        Returns:
            The persisted link

        Raises:
            ValidationError: If the URL is invalid or not unique, or the code is taken
        """
        errors = validate_url_field(url, "url")
        if errors:
            raise ValidationError(errors)

        try:
            return await self.store.create_link(url, hash_url(url), code)
        except StoreConstraintViolation as e:
            if e.field == "url_hash":
                errors.add("url", NOT_UNIQUE_MESSAGE)
            elif e.field == "code":
                errors.add("code", TAKEN_MESSAGE)
            else:
                raise
            raise ValidationError(errors) from e

    async def resolve(self, code: str) -> Optional[Link]:
        """Look up the link for a code.

        Args:
            code: The short code

        Returns:
            The link, or None if no link has this code
        """
        if self.cache:
            cached = await self.cache.get_link(code)
            if cached:
                self.logger.debug(f"Cache hit for {code}")
                return cached

        link = await self.store.get_link_by_code(code)

        if link is None:
            self.logger.warning(f"Short code not found: {code}")
            return None

        if self.cache:
            await self.cache.set_link(link)

        self.logger.debug(f"Resolved {code} -> {link.url}")
        return link

    async def record_access(
        self,
        link: Link,
        referrer_url: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> Optional[Access]:
        """Append an access record for a link.

        Values are stored as given. A store failure is logged and swallowed so
        the redirect it accompanies still happens.

        Returns:
            The recorded access, or None if recording failed
        """
        try:
            return await self.store.create_access(link.id, referrer_url, user_agent)
        except StoreError as e:
            self.logger.warning(f"Failed to record access for {link.code}: {e}")
            return None

    async def follow(
        self,
        code: str,
        referrer_url: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> Optional[Link]:
        """Resolve a code for a redirect and record the access.

        Returns:
            The link to redirect to, or None if not found
        """
        link = await self.resolve(code)
        if link is not None:
            await self.record_access(link, referrer_url, user_agent)
        return link

    async def list_accesses(self, code: str, newest_first: bool = True) -> Optional[List[Access]]:
        """List the accesses recorded for a code.

        Args:
            code: The short code
            newest_first: Order by created_at descending if True

        Returns:
            Ordered accesses (possibly empty), or None if the code is unknown
        """
        link = await self.resolve(code)
        if link is None:
            return None
        return await self.store.list_accesses(link.id, newest_first=newest_first)

    async def health_check(self) -> Dict[str, bool]:
        """Perform health check.

        Returns:
            Dictionary with health status
        """
        db_healthy = await self.store.health_check()

        cache_healthy = True
        if self.cache and self.cache.enabled:
            cache_healthy = await self.cache.ping()

        return {
            "database": db_healthy,
            "cache": cache_healthy,
            "overall": db_healthy and cache_healthy,
        }

    async def _next_available_code(self) -> Optional[str]:
        """Generate a code not yet used, or None after the attempts run out.

        This only narrows the window for collisions; the unique constraint on
        insert has the final say.
        """
        for attempt in range(self.max_code_retries + 1):
            code = self.generator.generate()
            if not await self.store.code_exists(code):
                if attempt:
                    self.logger.debug(f"Generated code after {attempt + 1} attempts: {code}")
                return code
            self.logger.debug(f"Code collision on attempt {attempt + 1}: {code}")
        return None

    @staticmethod
    def _not_shortened() -> FieldErrors:
        errors = FieldErrors()
        errors.add("long_url", NOT_SHORTENED_MESSAGE)
        return errors

    async def close(self) -> None:
        """Close service connections."""
        await self.store.close()
        if self.cache:
            await self.cache.close()
