"""Pytest configuration and fixtures."""

import asyncio
from typing import Dict, List, Optional

import pytest
from httpx import ASGITransport, AsyncClient

from config import Config
from shortener.database.base import URLStoreBase
from shortener.database.models import InsertOutcome
from shortener.errors import KeyCollisionError, StoreError
from shortener.keygen import KeyGenerator
from shortener.service import URLShortenerService
from shortener.common.logging_config import setup_logging
from web_app import create_app


class InMemoryURLStore(URLStoreBase):
    """Store double enforcing the same uniqueness rules as the urls table.

    With yield_between_calls set, every method gives up the event loop once
    so concurrent requests can interleave between lookup and insert.
    """

    def __init__(self, yield_between_calls: bool = False):
        self.by_key: Dict[str, str] = {}
        self.by_url: Dict[str, str] = {}
        self.insert_calls = 0
        self.initialized = False
        self.closed = False
        self.yield_between_calls = yield_between_calls

    async def _pause(self):
        if self.yield_between_calls:
            await asyncio.sleep(0)

    async def initialize(self) -> None:
        self.initialized = True

    async def get_url(self, key: str) -> Optional[str]:
        await self._pause()
        return self.by_key.get(key)

    async def get_key_for_url(self, url: str) -> Optional[str]:
        await self._pause()
        return self.by_url.get(url)

    async def insert_if_absent(self, key: str, url: str) -> InsertOutcome:
        await self._pause()
        self.insert_calls += 1
        if url in self.by_url:
            return InsertOutcome(key=self.by_url[url], created=False)
        if key in self.by_key:
            raise KeyCollisionError(key)
        self.by_key[key] = url
        self.by_url[url] = key
        return InsertOutcome(key=key, created=True)

    async def close(self) -> None:
        self.closed = True


class ScriptedKeyGenerator(KeyGenerator):
    """Key generator returning a fixed sequence, then random keys."""

    def __init__(self, keys: List[str]):
        self.keys = list(keys)
        self.generated: List[str] = []

    def generate(self) -> str:
        key = self.keys.pop(0) if self.keys else super().generate()
        self.generated.append(key)
        return key


class FailingStore(InMemoryURLStore):
    """Store whose lookups and/or inserts always fail."""

    def __init__(self, fail_lookup: bool = False, fail_insert: bool = True):
        super().__init__()
        self.fail_lookup = fail_lookup
        self.fail_insert = fail_insert

    async def get_key_for_url(self, url: str) -> Optional[str]:
        if self.fail_lookup:
            raise StoreError("connection refused")
        return await super().get_key_for_url(url)

    async def get_url(self, key: str) -> Optional[str]:
        if self.fail_lookup:
            raise StoreError("connection refused")
        return await super().get_url(key)

    async def insert_if_absent(self, key: str, url: str) -> InsertOutcome:
        if self.fail_insert:
            self.insert_calls += 1
            raise StoreError("server closed the connection unexpectedly")
        return await super().insert_if_absent(key, url)


@pytest.fixture
def logger():
    """Create test logger."""
    return setup_logging(level="DEBUG")


@pytest.fixture
def store():
    """Create in-memory store."""
    return InMemoryURLStore()


@pytest.fixture
def service(store, logger) -> URLShortenerService:
    """Create service instance."""
    return URLShortenerService(store=store, logger=logger, max_key_attempts=5)


@pytest.fixture
def config():
    """Test configuration."""
    return Config(base_url="http://testserver", path_prefix="/go")


@pytest.fixture
def app(service, config):
    """Create test FastAPI app."""
    return create_app(service_instance=service, config=config)


@pytest.fixture
async def client(app):
    """Create test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac


@pytest.fixture
def sample_urls():
    """Sample URLs for testing."""
    return [
        "https://example.com/test",
        "https://github.com/user/repo",
        "example.com",
    ]
