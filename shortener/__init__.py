"""Core business logic for URL shortener."""

from .keygen import KeyGenerator
from .service import URLShortenerService, ShortenResult

__all__ = ["KeyGenerator", "URLShortenerService", "ShortenResult"]
