"""Tests for HTTP endpoints."""

import re

import pytest
from httpx import ASGITransport, AsyncClient

from config import Config
from shortener.service import URLShortenerService
from web_app import create_app
from web_app.web.routes import last_path_segment
from conftest import FailingStore

KEY_RE = re.compile(r"[0-9a-f]{8}")


class TestShortenEndpoint:
    """Test POST /shorten."""

    async def test_shorten_url(self, client, sample_urls):
        response = await client.post("/shorten", json={"url": sample_urls[0]})

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("application/json")
        data = response.json()
        assert set(data) == {"url", "key", "short_url"}
        assert data["url"] == sample_urls[0]
        assert KEY_RE.fullmatch(data["key"])
        assert data["short_url"] == f"http://testserver/go/{data['key']}"

    async def test_shorten_twice_same_key(self, client, store):
        """Same URL twice: identical key, one row."""
        first = await client.post("/shorten", json={"url": "example.com"})
        second = await client.post("/shorten", json={"url": "example.com"})

        assert first.status_code == second.status_code == 200
        assert first.json()["key"] == second.json()["key"]
        assert len(store.by_key) == 1

    async def test_short_url_uses_forwarded_headers(self, client):
        response = await client.post(
            "/shorten",
            json={"url": "example.com"},
            headers={"X-Forwarded-Proto": "https", "X-Forwarded-Host": "sho.rt"},
        )

        data = response.json()
        assert data["short_url"] == f"https://sho.rt/go/{data['key']}"

    async def test_extra_fields_ignored(self, client):
        response = await client.post("/shorten", json={"url": "example.com", "note": "x"})

        assert response.status_code == 200

    @pytest.mark.parametrize("body", [
        {},
        {"url": ""},
        {"url": 123},
        {"url": None},
        ["example.com"],
    ])
    async def test_invalid_payload(self, client, body):
        response = await client.post("/shorten", json=body)

        assert response.status_code == 400
        assert response.text == "invalid request"

    async def test_malformed_json(self, client):
        response = await client.post(
            "/shorten",
            content="{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400

    @pytest.mark.parametrize("content_type", [
        "text/plain",
        "application/x-www-form-urlencoded",
    ])
    async def test_json_body_with_other_content_type(self, client, content_type):
        """The body is decoded as JSON whatever Content-Type says."""
        response = await client.post(
            "/shorten",
            content='{"url":"example.com"}',
            headers={"Content-Type": content_type},
        )

        assert response.status_code == 200
        assert response.json()["url"] == "example.com"

    async def test_missing_body(self, client):
        response = await client.post("/shorten")

        assert response.status_code == 400
        assert response.text == "invalid request"

    async def test_store_failure_is_500(self, config):
        service = URLShortenerService(store=FailingStore(fail_lookup=True))
        app = create_app(service_instance=service, config=config)

        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as ac:
            response = await ac.post("/shorten", json={"url": "example.com"})

        assert response.status_code == 500
        assert response.text == "database error"

    async def test_key_allocation_failure_is_500(self, config):
        service = URLShortenerService(store=FailingStore(fail_insert=True), max_key_attempts=2)
        app = create_app(service_instance=service, config=config)

        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as ac:
            response = await ac.post("/shorten", json={"url": "example.com"})

        assert response.status_code == 500
        assert service.store.insert_calls == 2

    async def test_get_not_allowed(self, client):
        response = await client.get("/shorten")

        assert response.status_code == 405


class TestRedirectEndpoint:
    """Test GET /go/{key}."""

    async def test_redirect_adds_scheme(self, client):
        """POST example.com, then GET /go/<key> answers 301 to http://example.com."""
        key = (await client.post("/shorten", json={"url": "example.com"})).json()["key"]

        response = await client.get(f"/go/{key}", follow_redirects=False)

        assert response.status_code == 301
        assert response.headers["location"] == "http://example.com"

    async def test_redirect_keeps_scheme(self, client, sample_urls):
        key = (await client.post("/shorten", json={"url": sample_urls[1]})).json()["key"]

        response = await client.get(f"/go/{key}", follow_redirects=False)

        assert response.status_code == 301
        assert response.headers["location"] == sample_urls[1]

    async def test_unknown_key(self, client):
        response = await client.get("/go/unknownkey", follow_redirects=False)

        assert response.status_code == 404
        assert response.text == "key not found"

    async def test_store_failure_is_500(self, config):
        service = URLShortenerService(store=FailingStore(fail_lookup=True))
        app = create_app(service_instance=service, config=config)

        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as ac:
            response = await ac.get("/go/1a2b3c4d", follow_redirects=False)

        assert response.status_code == 500

    async def test_custom_path_prefix(self, service):
        config = Config(base_url="http://testserver", path_prefix="s/")
        app = create_app(service_instance=service, config=config)

        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as ac:
            data = (await ac.post("/shorten", json={"url": "example.com"})).json()
            response = await ac.get(f"/s/{data['key']}", follow_redirects=False)

        assert data["short_url"] == f"http://testserver/s/{data['key']}"
        assert response.status_code == 301

    @pytest.mark.parametrize("path", ["/go/x/{key}", "/go/{key}/", "/go/a/b/{key}/"])
    async def test_key_is_last_path_segment(self, client, path):
        key = (await client.post("/shorten", json={"url": "example.com"})).json()["key"]

        response = await client.get(path.format(key=key), follow_redirects=False)

        assert response.status_code == 301
        assert response.headers["location"] == "http://example.com"

    async def test_prefix_without_key(self, client):
        response = await client.get("/go/", follow_redirects=False)

        assert response.status_code == 404

    async def test_empty_path_prefix(self, service):
        config = Config(base_url="http://testserver", path_prefix="")
        app = create_app(service_instance=service, config=config)

        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as ac:
            key = (await ac.post("/shorten", json={"url": "example.com"})).json()["key"]
            homepage = await ac.get("/")
            response = await ac.get(f"/{key}", follow_redirects=False)

        assert homepage.status_code == 200
        assert "text/html" in homepage.headers["content-type"]
        assert response.status_code == 301
        assert response.headers["location"] == "http://example.com"


class TestLandingPage:
    """Test GET /."""

    async def test_homepage(self, client):
        response = await client.get("/")

        assert response.status_code == 200
        assert "text/html" in response.headers["content-type"]
        assert "URL Shortener" in response.text

    async def test_unknown_path(self, client):
        response = await client.get("/missing/page")

        assert response.status_code == 404


@pytest.mark.parametrize("path,expected", [
    ("1a2b3c4d", "1a2b3c4d"),
    ("x/1a2b3c4d", "1a2b3c4d"),
    ("1a2b3c4d/", "1a2b3c4d"),
    ("a//b", "b"),
    ("", ""),
    ("/", ""),
])
def test_last_path_segment(path, expected):
    assert last_path_segment(path) == expected
