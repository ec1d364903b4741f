"""Redirect target normalization."""

from urllib.parse import urlsplit

DEFAULT_SCHEME = "http"

# Schemes that are complete without a //netloc part
NON_HIERARCHICAL_SCHEMES = frozenset({"mailto", "tel", "sms", "data"})


def has_explicit_scheme(url: str) -> bool:
    """Check whether a stored URL names its own scheme.

    `urlsplit` reads "example.com:8080" as scheme "example.com", so a scheme
    only counts when it is followed by a network location or is one of the
    known non-hierarchical schemes.

    Args:
        url: The stored URL string

    Returns:
        True if the URL carries a usable scheme
    """
    try:
        parts = urlsplit(url)
    except ValueError:
        return False

    if not parts.scheme:
        return False
    if parts.netloc:
        return True
    return parts.scheme.lower() in NON_HIERARCHICAL_SCHEMES


def normalize_redirect_target(url: str) -> str:
    """Turn a stored URL into an absolute redirect target.

    Args:
        url: The stored URL string

    Returns:
        The URL unchanged if it has a scheme, otherwise prefixed with http://
    """
    if has_explicit_scheme(url):
        return url
    if url.startswith("//"):
        return f"{DEFAULT_SCHEME}:{url}"
    return f"{DEFAULT_SCHEME}://{url}"
