"""Data models for URL shortener."""

from dataclasses import dataclass


@dataclass(frozen=True)
class URLMapping:
    """Represents a key -> URL row in the urls table."""

    key: str
    url: str

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {"key": self.key, "url": self.url}


@dataclass(frozen=True)
class InsertOutcome:
    """Result of a conditional insert.

    `key` is the key now mapped to the URL; `created` is False when another
    writer had already stored the URL under a different key.
    """

    key: str
    created: bool
