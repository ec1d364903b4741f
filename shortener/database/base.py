"""Abstract base class for URL shortener store implementations."""

from abc import ABC, abstractmethod
from typing import Optional

from .models import InsertOutcome


class URLStoreBase(ABC):
    """Abstract base class for the key -> URL mapping store.

    Implementations raise `StoreError` for connectivity and query failures
    and `KeyCollisionError` when an insert hits an existing key.
    """

    @abstractmethod
    async def initialize(self) -> None:
        """Verify connectivity and create the schema if it is absent."""
        pass

    @abstractmethod
    async def get_url(self, key: str) -> Optional[str]:
        """Get the URL stored under a key.

        Args:
            key: The key to lookup

        Returns:
            The stored URL if found, None otherwise
        """
        pass

    @abstractmethod
    async def get_key_for_url(self, url: str) -> Optional[str]:
        """Get the key an exact URL string is stored under.

        Args:
            url: The URL to lookup

        Returns:
            The key if the URL is mapped, None otherwise
        """
        pass

    @abstractmethod
    async def insert_if_absent(self, key: str, url: str) -> InsertOutcome:
        """Atomically store key -> url unless the URL is already mapped.

        Args:
            key: Freshly generated key
            url: The URL to map

        Returns:
            InsertOutcome with the key now owning the URL

        Raises:
            KeyCollisionError: If the key is taken by another URL
            StoreError: On any other store failure
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Release store connections."""
        pass
