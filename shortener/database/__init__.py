"""Database layer for URL shortener."""

from .base import URLStoreBase
from .postgres import URLStorePostgres
from .models import URLMapping, InsertOutcome

__all__ = ["URLStoreBase", "URLStorePostgres", "URLMapping", "InsertOutcome"]
