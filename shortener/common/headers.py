"""Header parsing utilities for URL shortener."""

from typing import Mapping, Optional


def _first_hop(value: str) -> str:
    # Proxies may append a comma-separated chain; the first hop is the client's view
    return value.split(",")[0].strip()


def build_base_url(
    headers: Mapping[str, str],
    fallback_base_url: str,
    request_scheme: Optional[str] = None,
    request_host: Optional[str] = None,
) -> str:
    """Build base URL from headers or fallback.

    Priority:
    1. X-Forwarded-Proto + X-Forwarded-Host
    2. Request scheme + host
    3. Fallback base URL from config

    Args:
        headers: Request headers, looked up case-insensitively
        fallback_base_url: Fallback base URL from configuration
        request_scheme: Request scheme (http/https)
        request_host: Request Host header

    Returns:
        Base URL (e.g., https://example.com)
    """
    headers_lower = {k.lower(): v for k, v in headers.items()}
    forwarded_proto = headers_lower.get("x-forwarded-proto")
    forwarded_host = headers_lower.get("x-forwarded-host")

    if forwarded_proto and forwarded_host:
        return f"{_first_hop(forwarded_proto)}://{_first_hop(forwarded_host)}"

    if request_scheme and request_host:
        return f"{request_scheme}://{request_host}"

    return fallback_base_url.rstrip("/")
