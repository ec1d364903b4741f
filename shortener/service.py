"""Business logic service for URL shortener."""

import logging
from dataclasses import dataclass
from typing import Optional

from .keygen import KeyGenerator
from .errors import KeyAllocationError, KeyCollisionError, KeyNotFoundError, StoreError
from .database.base import URLStoreBase
from .database.models import InsertOutcome, URLMapping
from .common.validators import require_url
from .common.redirects import normalize_redirect_target


@dataclass(frozen=True)
class ShortenResult:
    """Outcome of a shorten call."""

    key: str
    url: str
    created: bool


class URLShortenerService:
    """Service layer for URL shortening business logic."""

    def __init__(
        self,
        store: URLStoreBase,
        key_generator: Optional[KeyGenerator] = None,
        logger: Optional[logging.Logger] = None,
        max_key_attempts: int = 10,
    ):
        """Initialize URL shortener service.

        Args:
            store: Mapping store instance
            key_generator: Optional key generator
            logger: Optional logger
            max_key_attempts: Maximum insert attempts when allocating a key
        """
        if max_key_attempts < 1:
            raise ValueError("max_key_attempts must be at least 1")

        self.store = store
        self.generator = key_generator or KeyGenerator()
        self.logger = logger or logging.getLogger(__name__)
        self.max_key_attempts = max_key_attempts

    async def shorten(self, url: str) -> ShortenResult:
        """Map a URL to a key, reusing the existing key if there is one.

        Args:
            url: The URL to shorten, stored exactly as given

        Returns:
            ShortenResult with the key owning the URL

        Raises:
            InvalidURLError: If url is empty or not a string
            StoreError: If the existing-key lookup fails
            KeyAllocationError: If no key could be stored
        """
        url = require_url(url)

        existing = await self.store.get_key_for_url(url)
        if existing is not None:
            self.logger.debug(f"URL already shortened: {existing} -> {url}")
            return ShortenResult(key=existing, url=url, created=False)

        outcome = await self._allocate_key(url)
        if outcome.created:
            self.logger.info(f"Created short URL: {outcome.key} -> {url}")

        return ShortenResult(key=outcome.key, url=url, created=outcome.created)

    async def lookup(self, key: str) -> URLMapping:
        """Get the stored mapping for a key.

        Raises:
            KeyNotFoundError: If no URL is stored under key
            StoreError: If the lookup fails
        """
        url = await self.store.get_url(key)
        if url is None:
            self.logger.warning(f"Key not found: {key}")
            raise KeyNotFoundError(key)
        return URLMapping(key=key, url=url)

    async def resolve(self, key: str) -> str:
        """Get the absolute redirect target for a key.

        Raises:
            KeyNotFoundError: If no URL is stored under key
            StoreError: If the lookup fails
        """
        mapping = await self.lookup(key)
        target = normalize_redirect_target(mapping.url)
        self.logger.debug(f"Resolved {key} -> {target}")
        return target

    async def _allocate_key(self, url: str) -> InsertOutcome:
        """Generate keys until one is stored or the attempt budget runs out.

        Every failed insert counts as an attempt, whether it was a key
        collision or a store error.
        """
        last_error: Optional[Exception] = None

        for attempt in range(1, self.max_key_attempts + 1):
            key = self.generator.generate()
            try:
                outcome = await self.store.insert_if_absent(key, url)
            except KeyCollisionError as e:
                self.logger.warning(
                    f"Key collision on attempt {attempt}/{self.max_key_attempts}: {e.key}"
                )
                last_error = e
                continue
            except StoreError as e:
                self.logger.warning(
                    f"Insert failed on attempt {attempt}/{self.max_key_attempts}: {e}"
                )
                last_error = e
                continue

            if attempt > 1:
                self.logger.debug(f"Allocated key after {attempt} attempts: {outcome.key}")
            return outcome

        self.logger.error(
            f"Giving up on {url} after {self.max_key_attempts} attempts: {last_error}"
        )
        raise KeyAllocationError(self.max_key_attempts, last_error)

    async def close(self) -> None:
        """Close service connections."""
        await self.store.close()
