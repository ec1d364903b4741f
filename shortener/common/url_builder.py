"""URL building utilities for URL shortener."""


def build_short_url(
    key: str,
    base_url: str,
    path_prefix: str = "/go",
) -> str:
    """Build complete short URL.

    Args:
        key: The short key
        base_url: Base URL (e.g., https://example.com)
        path_prefix: Path prefix the redirect route is mounted under

    Returns:
        Complete short URL
    """
    base = base_url.rstrip("/")
    prefix = path_prefix.strip("/")

    if prefix:
        return f"{base}/{prefix}/{key}"
    return f"{base}/{key}"
