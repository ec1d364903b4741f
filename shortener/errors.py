"""Exceptions raised by the URL shortener core."""

from typing import Optional


class ShortenerError(Exception):
    """Base class for URL shortener errors."""


class InvalidURLError(ShortenerError):
    """The submitted URL is missing or not a string."""


class StoreError(ShortenerError):
    """The backing store could not be reached or a query failed."""


class KeyCollisionError(StoreError):
    """An insert was rejected because the key is already taken."""

    def __init__(self, key: str):
        super().__init__(f"Key already exists: {key}")
        self.key = key


class KeyNotFoundError(ShortenerError):
    """No mapping exists for the requested key."""

    def __init__(self, key: str):
        super().__init__(f"Key not found: {key}")
        self.key = key


class KeyAllocationError(ShortenerError):
    """No key could be persisted within the allowed number of attempts."""

    def __init__(self, attempts: int, last_error: Optional[Exception] = None):
        message = f"Unable to allocate a key after {attempts} attempts"
        if last_error is not None:
            message = f"{message}: {last_error}"
        super().__init__(message)
        self.attempts = attempts
        self.last_error = last_error
